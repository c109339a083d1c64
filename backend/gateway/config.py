"""
Gateway configuration.

Values come from the process environment (a local `.env` is loaded first)
and are resolved once into a `RelayConfig` that is handed to `create_app`.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from backend.image_service.client import (
    DEFAULT_BASE_URL,
    DEFAULT_DESCRIBE_MODEL,
    DEFAULT_GENERATE_MODEL,
)


@dataclass(frozen=True)
class RelayConfig:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    describe_model: str = DEFAULT_DESCRIBE_MODEL
    generate_model: str = DEFAULT_GENERATE_MODEL
    upstream_timeout: Optional[float] = None
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = field(default_factory=os.getcwd)
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    max_content_length_mb: int = 50
    log_level: str = "INFO"


def _parse_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_config() -> RelayConfig:
    """
    Build a `RelayConfig` from environment variables.

    Returns:
        RelayConfig: The resolved configuration. `api_key` is None when
        GOOGLE_API_KEY is unset or empty.
    """
    load_dotenv()

    timeout = os.getenv("UPSTREAM_TIMEOUT")

    return RelayConfig(
        api_key=os.getenv("GOOGLE_API_KEY") or None,
        base_url=os.getenv("GOOGLE_API_BASE_URL", DEFAULT_BASE_URL),
        describe_model=os.getenv("DESCRIBE_MODEL", DEFAULT_DESCRIBE_MODEL),
        generate_model=os.getenv("GENERATE_MODEL", DEFAULT_GENERATE_MODEL),
        upstream_timeout=float(timeout) if timeout else None,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 3000)),
        static_dir=os.getenv("STATIC_DIR") or os.getcwd(),
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS")),
        max_content_length_mb=int(os.getenv("MAX_CONTENT_LENGTH_MB", 50)),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
