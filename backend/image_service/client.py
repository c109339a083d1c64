"""
HTTP client for the Google Generative Language API.

The API key is held here and attached to every call in the
`x-goog-api-key` header, so it never leaves the server or shows up in a
URL. Non-success responses are raised as `UpstreamError` carrying the
upstream status and raw body text. Network failures (`requests.RequestException`) and undecodable JSON
(`ValueError`) are left to the caller, which decides how much to reveal.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from backend.image_service.errors import UpstreamError

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_DESCRIBE_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_GENERATE_MODEL = "imagen-3.0-generate-002"
API_KEY_HEADER = "x-goog-api-key"


class GoogleAIClient:
    """
    Thin wrapper around the `predict` and `generateContent` model endpoints.

    Instances only hold immutable configuration and can be shared by
    concurrent requests.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        describe_model: str = DEFAULT_DESCRIBE_MODEL,
        generate_model: str = DEFAULT_GENERATE_MODEL,
        timeout: Optional[float] = None,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.describe_model = describe_model
        self.generate_model = generate_model
        self.timeout = timeout

    def model_url(self, model: str, method: str) -> str:
        """Endpoint URL for `method` on `model`."""
        return f"{self.base_url}/models/{model}:{method}"

    def post(self, url: str, payload: Any, label: str) -> requests.Response:
        """
        POST `payload` as JSON to `url` with the API key attached.

        Args:
            url (str): Endpoint URL.
            payload: JSON-serialisable request body.
            label (str): Prefix for the error message if upstream rejects the call.

        Returns:
            requests.Response: The successful upstream response.

        Raises:
            UpstreamError: Upstream answered with a non-success status.
            requests.RequestException: The call could not be completed.
        """
        response = requests.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json", API_KEY_HEADER: self.api_key},
            timeout=self.timeout,
        )

        if not response.ok:
            error_text = response.text
            logging.error(f"[Upstream] {label} ({url}): {response.status_code} {error_text}")
            raise UpstreamError(label, response.status_code, error_text)

        return response

    def post_json(self, url: str, payload: Any, label: str) -> Tuple[Any, int]:
        """
        Like `post`, but decode the body.

        Returns:
            tuple: (decoded JSON body, upstream status code)

        Raises:
            ValueError: The success body was not valid JSON.
        """
        response = self.post(url, payload, label)
        return response.json(), response.status_code

    def forward_predict(self, payload: Any, label: str = "API request failed") -> requests.Response:
        """
        Send `payload` to the image-generation model as is and return the raw response.

        The body is decoded once so a non-JSON success still raises `ValueError`.
        """
        response = self.post(self.model_url(self.generate_model, "predict"), payload, label)
        response.json()
        return response

    def predict(self, payload: Dict[str, Any], label: str = "API request failed") -> Tuple[Any, int]:
        """Call the image-generation model's `predict` endpoint."""
        return self.post_json(self.model_url(self.generate_model, "predict"), payload, label)

    def generate_content(self, payload: Dict[str, Any], label: str) -> Tuple[Any, int]:
        """Call the description model's `generateContent` endpoint."""
        return self.post_json(self.model_url(self.describe_model, "generateContent"), payload, label)
