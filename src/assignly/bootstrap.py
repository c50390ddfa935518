# src/assignly/bootstrap.py

"""
Composition root.

- loads settings once,
- configures logging from settings,
- wires concrete implementations (HTTP API, filesystem images) into controllers.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .api.client import HttpSignupApi
from .config import DEFAULT_JPEG_QUALITY, get_settings
from .core.ports import ImageSource, SignupApi
from .core.scope import TaskScope
from .logging_setup import setup_logging
from .media.image_codec import FileImageSource
from .presentation.signup.controller import SignupController

logger = logging.getLogger(__name__)


def init_logging(settings=None) -> Path:
    """Configure logging using settings.log_level and settings.data_dir."""
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO

    log_dir = getattr(settings, "data_dir", ".local/assignly")
    log_file = setup_logging(log_dir=log_dir, console_level=console_level)
    logger.info("Logging initialised for %s (%s)", getattr(settings, "app_name", "assignly"), log_file)
    return log_file


def create_signup_controller(
        settings=None,
        *,
        api: SignupApi | None = None,
        image_source: ImageSource | None = None,
        scope: TaskScope | None = None,
        cancel_event: asyncio.Event | None = None,
) -> SignupController:
    """
    Build a SignupController from settings.

    Collaborators are injectable; defaults are the HTTP backend and the local filesystem.
    """
    if settings is None:
        settings = get_settings()

    if api is None:
        api = HttpSignupApi(settings)
    if image_source is None:
        image_source = FileImageSource()

    return SignupController(
        api,
        image_source,
        scope=scope,
        cancel_event=cancel_event,
        jpeg_quality=int(getattr(settings, "jpeg_quality", DEFAULT_JPEG_QUALITY)),
    )
