from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g, session

from config import get_settings_module

from .common.datetime_utils import resolve_locale
from .container import Container, build_container
from .core.constants import DEFAULT_BACKEND_BASE_URL, DEFAULT_LOCALE, DEFAULT_SESSION_HOURS, SUPPORTED_LOCALES
from .rooms.controller import register as register_rooms
from .shifts.controller import register as register_shifts
from .users.controller import register as register_users
from .web.session import LOCALE_KEY, current_user

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_LOCALE"] = resolve_locale(getattr(settings, "DEFAULT_LOCALE", DEFAULT_LOCALE))
    app.config["BACKEND_BASE_URL"] = getattr(settings, "BACKEND_BASE_URL", DEFAULT_BACKEND_BASE_URL)

    # Session cookie carries the serialized user; readable by page scripts.
    app.config["SESSION_COOKIE_HTTPONLY"] = False
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(
        hours=int(getattr(settings, "SESSION_HOURS", DEFAULT_SESSION_HOURS))
    )

    logger.info("turnero settings=%s backend=%s", settings_module, app.config["BACKEND_BASE_URL"])

    if container is None:
        container = build_container(settings=settings)
    app.extensions["turnero"] = container

    @app.before_request
    def _select_locale():
        g.locale = session.get(LOCALE_KEY) or app.config["DEFAULT_LOCALE"]

    @app.context_processor
    def _inject_globals():
        return {
            "current_user": current_user(),
            "locale": g.get("locale", app.config["DEFAULT_LOCALE"]),
            "supported_locales": SUPPORTED_LOCALES,
        }

    register_users(app, container)
    register_rooms(app, container)
    register_shifts(app, container)

    return app
