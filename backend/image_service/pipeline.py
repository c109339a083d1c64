"""
Describe-and-generate pipeline.

Two strictly ordered upstream calls:
1. describe: send the uploaded image to the description model and pull
   out a single text description.
2. generate: compose the persona prompt from that description and the
   caller's text, then ask the image model for exactly one sample.

The first failure ends the request; nothing is retried.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import ValidationError

from backend.image_service.client import GoogleAIClient
from backend.image_service.errors import ExtractionError
from backend.image_service.prompts import DESCRIBE_INSTRUCTION, compose_prompt
from backend.image_service.schemas import DescribeResponse, PredictResponse

DESCRIBE_FAILED = "Image description failed"
GENERATE_FAILED = "Image generation failed"

NO_DESCRIPTION = "Failed to get description from the image."
NO_GENERATED_IMAGE = "Failed to get generated image from the response."


@dataclass(frozen=True)
class GenerationResult:
    description: str
    generated_image: str

    def to_dict(self) -> Dict[str, str]:
        return {"description": self.description, "generatedImage": self.generated_image}


def build_describe_payload(image_data: str, mime_type: str = "image/png") -> Dict:
    return {
        "contents": [{
            "parts": [
                {"text": DESCRIBE_INSTRUCTION},
                {"inlineData": {"mimeType": mime_type, "data": image_data}},
            ]
        }]
    }


def build_generate_payload(prompt: str) -> Dict:
    return {
        "instances": [{"prompt": prompt}],
        "parameters": {"sampleCount": 1},
    }


def describe_image(client: GoogleAIClient, image_data: str, mime_type: str = "image/png") -> str:
    """
    Step A: ask the description model to describe the person in the image.

    Returns:
        str: The first candidate's first text part.

    Raises:
        UpstreamError: labelled "Image description failed".
        ExtractionError: the response carried no usable text.
    """
    data, _ = client.generate_content(build_describe_payload(image_data, mime_type), DESCRIBE_FAILED)

    try:
        description = DescribeResponse.model_validate(data).first_text()
    except ValidationError as e:
        logging.error(f"[Images] Unexpected description response shape: {e}")
        description = None

    if not description:
        raise ExtractionError(NO_DESCRIPTION)
    return description


def generate_image(client: GoogleAIClient, prompt: str) -> str:
    """
    Step B: generate one image from the composed prompt.

    Returns:
        str: Base64 image bytes of the first prediction.

    Raises:
        UpstreamError: labelled "Image generation failed".
        ExtractionError: the response carried no image bytes.
    """
    data, _ = client.predict(build_generate_payload(prompt), GENERATE_FAILED)

    try:
        image = PredictResponse.model_validate(data).first_image()
    except ValidationError as e:
        logging.error(f"[Images] Unexpected generation response shape: {e}")
        image = None

    if not image:
        raise ExtractionError(NO_GENERATED_IMAGE)
    return image


def describe_and_generate(
    client: GoogleAIClient,
    image_data: str,
    user_prompt: Optional[str] = None,
    mime_type: str = "image/png",
) -> GenerationResult:
    """Run describe, compose and generate in order for one request."""
    description = describe_image(client, image_data, mime_type)
    prompt = compose_prompt(description, user_prompt)
    logging.info(f"[Images] Composed prompt ({len(prompt)} chars), requesting generation")
    generated_image = generate_image(client, prompt)
    return GenerationResult(description=prompt, generated_image=generated_image)
