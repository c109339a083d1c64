"""
Image service route handlers.

Provides routes for:
- Text-to-image passthrough (/generate-bulldog)
- Describe an uploaded photo, then generate a stylized image (/describe-and-generate)

Upstream calls go through the `GoogleAIClient` the gateway stores in
`app.extensions`; when the server was started without an API key the
client is absent and every route answers with a configuration error.
"""

import logging
from typing import Any, Dict, Tuple

import requests
from flask import Blueprint, current_app, jsonify, request, Response
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest, UnsupportedMediaType

from backend.image_service.client import GoogleAIClient
from backend.image_service.errors import (
    ClientInputError,
    ConfigurationError,
    RelayError,
    TransportError,
)
from backend.image_service.pipeline import describe_and_generate
from backend.image_service.schemas import DescribeRequest

images_bp = Blueprint("images", __name__)

CLIENT_EXTENSION = "google_ai_client"

API_KEY_MISSING = "Google API key not configured on the server."
NO_IMAGE_DATA = "No image data provided."
INVALID_BODY = "Invalid request body."
GENERATE_PROXY_ERROR = "Proxy server error during image generation."
DESCRIBE_PROXY_ERROR = "Proxy server error during describe and generate process."


# --- REQUEST LOGGING ---
@images_bp.before_request
def before_request() -> None:
    logging.info(f"[Images] Incoming {request.method} {request.path}")


@images_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Images] Response {response.status}")
    return response


# --- ERROR MAPPING ---
@images_bp.errorhandler(RelayError)
def handle_relay_error(error: RelayError) -> Tuple[Response, int]:
    """
    Turn any image-service error into its JSON response.

    Args:
        error (RelayError): The raised error.

    Returns:
        tuple: (`{"error": message}`, error status code)
    """
    return jsonify(error.to_dict()), error.status_code


def get_client() -> GoogleAIClient:
    """
    Fetch the upstream client configured for this app.

    Raises:
        ConfigurationError: No API key was configured at startup.
    """
    client = current_app.extensions.get(CLIENT_EXTENSION)
    if client is None:
        logging.error("[Images] Request rejected: GOOGLE_API_KEY is not configured.")
        raise ConfigurationError(API_KEY_MISSING)
    return client


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _passthrough_body() -> Any:
    """
    Parsed JSON body, including a literal `null`. A missing or unparseable
    body becomes an empty object.
    """
    try:
        return request.get_json()
    except (BadRequest, UnsupportedMediaType):
        return {}


# --- TEXT-TO-IMAGE PASSTHROUGH ---
@images_bp.route("/generate-bulldog", methods=["POST"])
def generate_bulldog() -> Response:
    """
    Forward the request body unchanged to the image-generation model.

    Returns:
        <upstream status>: Upstream JSON body, unmodified.
        500: API key not configured, or the upstream could not be reached.
        4xx/5xx: Upstream rejected the request; error carries its raw text.
    """
    client = get_client()
    payload = _passthrough_body()

    try:
        upstream = client.forward_predict(payload)
    except (requests.RequestException, ValueError) as e:
        logging.exception(f"[Images] Proxy server error for generate-bulldog: {e}")
        raise TransportError(GENERATE_PROXY_ERROR) from e

    return Response(upstream.content, status=upstream.status_code, mimetype="application/json")


# --- DESCRIBE AND GENERATE ---
@images_bp.route("/describe-and-generate", methods=["POST"])
def handle_describe_and_generate() -> Tuple[Response, int]:
    """
    Describe the person in an uploaded image, then generate a stylized image.

    Expects:
    - imageData (str): base64 image bytes
    - userPrompt (str, optional): setting or activity for the generated scene
    - mimeType (str, optional): image MIME type, defaults to image/png

    Returns:
        200: {"description": composed prompt, "generatedImage": base64 bytes}
        400: Missing image data.
        500: API key not configured, no description/image extracted, or proxy error.
        4xx/5xx: Upstream rejected the describe or generate call.
    """
    client = get_client()

    data = _json_body()
    if not data.get("imageData"):
        raise ClientInputError(NO_IMAGE_DATA)

    try:
        body = DescribeRequest.model_validate(data)
    except ValidationError as e:
        logging.warning(f"[Images] Rejected describe request: {e}")
        raise ClientInputError(INVALID_BODY) from e

    try:
        result = describe_and_generate(client, body.image_data, body.user_prompt, body.mime_type)
    except (requests.RequestException, ValueError) as e:
        logging.exception(f"[Images] Proxy server error for describe and generate: {e}")
        raise TransportError(DESCRIBE_PROXY_ERROR) from e

    return jsonify(result.to_dict()), 200
