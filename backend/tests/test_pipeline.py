import pytest
from unittest.mock import MagicMock

from backend.image_service.client import GoogleAIClient
from backend.image_service.errors import ExtractionError, UpstreamError
from backend.image_service.pipeline import (
    DESCRIBE_FAILED,
    GENERATE_FAILED,
    GenerationResult,
    describe_and_generate,
    describe_image,
    generate_image,
)


@pytest.fixture
def ai_client():
    return MagicMock(spec=GoogleAIClient)


def test_describe_image_returns_first_text(ai_client):
    ai_client.generate_content.return_value = (
        {"candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
            {"content": {"parts": [{"text": "other candidate"}]}},
        ]},
        200,
    )

    assert describe_image(ai_client, "aW1n") == "first"
    _, label = ai_client.generate_content.call_args.args
    assert label == DESCRIBE_FAILED


def test_generate_image_returns_first_prediction(ai_client):
    ai_client.predict.return_value = (
        {"predictions": [{"bytesBase64Encoded": "b25l"}, {"bytesBase64Encoded": "dHdv"}]},
        200,
    )

    assert generate_image(ai_client, "a prompt") == "b25l"
    payload, label = ai_client.predict.call_args.args
    assert payload == {"instances": [{"prompt": "a prompt"}], "parameters": {"sampleCount": 1}}
    assert label == GENERATE_FAILED


def test_generate_image_missing_bytes(ai_client):
    ai_client.predict.return_value = ({"predictions": [{}]}, 200)
    with pytest.raises(ExtractionError):
        generate_image(ai_client, "a prompt")


def test_describe_failure_stops_pipeline(ai_client):
    ai_client.generate_content.side_effect = UpstreamError(DESCRIBE_FAILED, 403, "PERMISSION_DENIED")

    with pytest.raises(UpstreamError) as excinfo:
        describe_and_generate(ai_client, "aW1n")
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "Image description failed: PERMISSION_DENIED"
    assert not ai_client.predict.called


def test_describe_and_generate_result(ai_client):
    ai_client.generate_content.return_value = ({"candidates": [{"content": {"parts": [{"text": "a man"}]}}]}, 200)
    ai_client.predict.return_value = ({"predictions": [{"bytesBase64Encoded": "aW1hZ2U="}]}, 200)

    result = describe_and_generate(ai_client, "aW1n", "on a boat")
    assert isinstance(result, GenerationResult)
    assert result.description.endswith("a man the setting is / they are doing: on a boat")
    assert result.to_dict() == {"description": result.description, "generatedImage": "aW1hZ2U="}


def test_client_requires_api_key():
    with pytest.raises(ValueError):
        GoogleAIClient(api_key="")
