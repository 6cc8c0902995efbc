from __future__ import annotations

import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.service import GameService
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp
from .realtime.handlers import register_socketio_handlers


def default_async_mode() -> str:
    # - Windows: threading (eventlet has known compatibility issues on newer Python)
    # - Python >= 3.13: threading (safer default)
    # - Otherwise: eventlet
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config_class=Config, ai_client=None) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    async_mode = getattr(config_class, "SOCKETIO_ASYNC_MODE", "") or default_async_mode()
    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=async_mode,
    )

    service = GameService.from_config(config_class, socketio, ai=ai_client)
    app.extensions["scribble"] = service

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")

    register_socketio_handlers(
        socketio,
        service,
        auto_create_rooms=bool(getattr(config_class, "AUTO_CREATE_ROOMS", True)),
    )

    return app, socketio
