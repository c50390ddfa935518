# tests/test_bootstrap.py

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from assignly.api.client import HttpSignupApi
from assignly.bootstrap import create_signup_controller, init_logging
from assignly.logging_setup import _ConsoleNoiseFilter
from assignly.media.image_codec import FileImageSource
from assignly.presentation.signup.state import Idle

from .fakes import FakeSignupApi


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_create_signup_controller_wires_http_and_files(settings: SimpleNamespace) -> None:
    c = create_signup_controller(settings)

    assert isinstance(c._api, HttpSignupApi)
    assert c._api.signup_url == "http://backend.test/api/signup"
    assert isinstance(c._image_source, FileImageSource)
    assert c.current == Idle()


def test_create_signup_controller_accepts_injected_api(settings: SimpleNamespace) -> None:
    api = FakeSignupApi()
    c = create_signup_controller(settings, api=api)
    assert c._api is api


def test_init_logging_writes_to_data_dir(settings: SimpleNamespace, restore_root_logging) -> None:
    log_file = init_logging(settings)

    logging.getLogger("assignly.test").info("hello from test")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == settings.data_dir / "assignly.log"
    assert "hello from test" in log_file.read_text("utf-8")


@pytest.mark.parametrize(
    ("name", "level", "shown"),
    [
        ("assignly.presentation", logging.DEBUG, True),
        ("py.warnings", logging.WARNING, True),
        ("httpx", logging.WARNING, False),
        ("httpx", logging.ERROR, True),
    ],
)
def test_console_filter_thresholds(name, level, shown) -> None:
    record = logging.LogRecord(name, level, __file__, 1, "msg", None, None)
    assert _ConsoleNoiseFilter().filter(record) is shown
