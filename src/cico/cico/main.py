from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.controller import register as register_auth
from .badges.controller import register as register_badges
from .common.logging_setup import configure_logging, register_request_logging
from .container import Container, build_container
from .face_verifications.controller import register as register_face_verifications
from .photos.controller import register as register_photos
from .profiles.controller import register as register_profiles
from .reports.controller import register as register_reports
from .task_activities.controller import register as register_task_activities
from .time_entries.controller import register as register_time_entries

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    register_request_logging(app)

    if getattr(settings, "CRON_SECRET", None) is None:
        logger.warning("[SECURITY] CRON_SECRET not configured - cron endpoints are unprotected")

    if container is None:
        container = build_container(settings)
    logger.info("Starting with settings=%s", settings_module)

    register_auth(app, container)
    register_profiles(app, container)
    register_badges(app, container)
    register_time_entries(app, container)
    register_task_activities(app, container)
    register_face_verifications(app, container)
    register_photos(app, container)
    register_reports(app, container)

    return app
