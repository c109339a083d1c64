"""
Typed shapes for the incoming describe request and the upstream responses.

Upstream payloads carry many more fields than the relay needs (safety
ratings, usage metadata, ...), so every model ignores unknown keys.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- INCOMING REQUEST ---
class DescribeRequest(BaseModel):
    """Body of `POST /describe-and-generate`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    image_data: Optional[str] = Field(default=None, alias="imageData")
    user_prompt: Optional[str] = Field(default=None, alias="userPrompt")
    mime_type: str = Field(default="image/png", alias="mimeType")


# --- generateContent (describe) ---
class Part(_UpstreamModel):
    text: Optional[str] = None


class Content(_UpstreamModel):
    parts: List[Part] = Field(default_factory=list)


class Candidate(_UpstreamModel):
    content: Optional[Content] = None


class DescribeResponse(_UpstreamModel):
    candidates: List[Candidate] = Field(default_factory=list)

    def first_text(self) -> Optional[str]:
        """
        Text of the first candidate's first content part.

        Returns:
            str: The text, or None when any level of the shape is missing.
        """
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


# --- predict (generate) ---
class Prediction(_UpstreamModel):
    bytes_base64_encoded: Optional[str] = Field(default=None, alias="bytesBase64Encoded")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")


class PredictResponse(_UpstreamModel):
    predictions: List[Prediction] = Field(default_factory=list)

    def first_image(self) -> Optional[str]:
        if not self.predictions:
            return None
        return self.predictions[0].bytes_base64_encoded
