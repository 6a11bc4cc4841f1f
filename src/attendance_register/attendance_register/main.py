from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .logging_conf import configure_logging
from .register.controller import register as register_routes

logger = logging.getLogger(__name__)

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "SCRIPT_URL",
    "ADMIN_PASSWORD",
    "STORE_BACKEND",
    "SQLITE_PATH",
    "DB_CONFIG",
    "DEBOUNCE_SECONDS",
    "STATUS_RESET_SECONDS",
    "PUSH_RESET_SECONDS",
    "SYNC_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FILE",
)


def load_settings(overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in _SETTING_NAMES if hasattr(module, name)}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(overrides: Optional[dict[str, Any]] = None, **container_kwargs: Any) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)

    configure_logging(level=str(settings.get("LOG_LEVEL", "INFO")), log_file=settings.get("LOG_FILE") or None)

    app = Flask(__name__)
    app.secret_key = settings.get("SECRET_KEY")
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))

    container = build_container(settings=settings, **container_kwargs)
    container.engine.start()
    document = container.engine.run(container.sync_controller.start())
    logger.info(
        "Register ready (settings=%s, columns=%d, teachers=%d, sync=%s)",
        settings["SETTINGS_MODULE"],
        len(document.columns),
        len(document.teachers),
        "on" if container.session_service.endpoint else "off",
    )

    app.extensions["attendance_register"] = container
    register_routes(app, container)
    return app


def shutdown(app: Flask) -> None:
    """Flush pending sync work and stop the engine thread."""

    container = app.extensions["attendance_register"]
    container.engine.run(container.sync_controller.close())
    container.engine.stop()
