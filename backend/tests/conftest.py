import json

import pytest
from unittest.mock import MagicMock

from backend.gateway.config import RelayConfig
from backend.gateway.server import create_app

UPSTREAM_POST = "backend.image_service.client.requests.post"


def make_upstream_response(status_code=200, body=None, text=None):
    """
    Build a stand-in for a `requests.Response`.
    """
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if body is not None:
        response.json.return_value = body
        response.text = json.dumps(body)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    response.content = response.text.encode("utf-8")
    return response


@pytest.fixture
def config(tmp_path):
    return RelayConfig(api_key="test-key", static_dir=str(tmp_path))


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def unconfigured_client(tmp_path):
    app = create_app(RelayConfig(api_key=None, static_dir=str(tmp_path)))
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def upstream_response():
    return make_upstream_response


@pytest.fixture
def mock_upstream(mocker):
    """
    Patches the outbound HTTP call made by the upstream client.
    """
    return mocker.patch(UPSTREAM_POST)
