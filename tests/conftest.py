# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import cv2
import numpy as np
import pytest

from assignly.presentation.signup.controller import SignupController

from .fakes import FakeImageSource, FakeSignupApi


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the HTTP client.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="assignly-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_base_url="http://backend.test/api",
        signup_path="signup",
        http_timeout_seconds=None,
        jpeg_quality=100,
    )


@pytest.fixture()
def png_bytes() -> bytes:
    """A small real PNG (8x6 gradient) produced with OpenCV."""
    img = np.zeros((6, 8, 3), dtype=np.uint8)
    img[:, :, 0] = np.arange(8, dtype=np.uint8) * 30
    img[:, :, 2] = 200
    ok, buf = cv2.imencode(".png", img)
    assert ok
    return buf.tobytes()


@pytest.fixture()
def api() -> FakeSignupApi:
    return FakeSignupApi()


@pytest.fixture()
def images(png_bytes: bytes) -> FakeImageSource:
    return FakeImageSource(files={"file:///avatar.png": png_bytes, "broken.png": b"not an image"})


@pytest.fixture()
def controller(api: FakeSignupApi, images: FakeImageSource) -> SignupController:
    return SignupController(api, images)
