"""
API gateway: serves the frontend and the image relay blueprint.
This is the local entrypoint for development.
"""

import logging
import os
import sys
from typing import Optional

from flask import Flask, abort, jsonify, send_from_directory
from flask_cors import CORS

from backend.gateway.config import RelayConfig, load_config
from backend.image_service.client import GoogleAIClient
from backend.image_service.routes import CLIENT_EXTENSION, images_bp

LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    # Basic console logging during API requests
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def create_app(config: Optional[RelayConfig] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (RelayConfig, optional): Resolved settings. Loaded from the
            environment when omitted.

    Returns:
        Flask: The configured Flask application.
    """
    if config is None:
        config = load_config()
    configure_logging(config.log_level)

    # Static files are served by `static_files` below so dotfiles can be refused
    app = Flask(__name__, static_folder=None)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_length_mb * 1024 * 1024
    app.config["RELAY_CONFIG"] = config

    CORS(app, resources={
        r"/*": {
            "origins": config.cors_origins,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    # --- UPSTREAM CLIENT ---
    if config.api_key:
        app.extensions[CLIENT_EXTENSION] = GoogleAIClient(
            api_key=config.api_key,
            base_url=config.base_url,
            describe_model=config.describe_model,
            generate_model=config.generate_model,
            timeout=config.upstream_timeout,
        )
    else:
        logging.warning("GOOGLE_API_KEY is not set; image endpoints will answer with a configuration error.")

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(images_bp)
    logging.info("All blueprints registered successfully.")

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    # --- STATIC FRONTEND ---
    @app.route("/")
    def index():
        """
        Serve the frontend's index.html, or a simple 'online' status when there is none.
        """
        if os.path.isfile(os.path.join(config.static_dir, "index.html")):
            return send_from_directory(config.static_dir, "index.html")
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/<path:filename>")
    def static_files(filename: str):
        """
        Serve a file from the static directory. Dotfiles (e.g. .env) are never served.
        """
        if any(part.startswith(".") for part in filename.replace("\\", "/").split("/")):
            abort(404)
        return send_from_directory(config.static_dir, filename)

    return app


def main() -> None:
    config = load_config()
    configure_logging(config.log_level)

    if not config.api_key:
        logging.error("GOOGLE_API_KEY is missing. Set it in the environment or .env")
        sys.exit(1)

    app = create_app(config)
    logging.info(f"Proxy server listening at http://localhost:{config.port}")
    app.run(host=config.host, port=config.port, debug=os.getenv("FLASK_DEBUG") == "1")


if __name__ == "__main__":
    main()
