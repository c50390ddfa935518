# src/assignly/api/errors.py

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    """Classification of a failed backend call, derived from the HTTP status."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNCLASSIFIED = "unclassified"


def classify_status(status_code: int | None) -> FailureKind:
    if status_code == 409:
        return FailureKind.CONFLICT
    if status_code == 404:
        return FailureKind.NOT_FOUND
    return FailureKind.UNCLASSIFIED


class SignupError(Exception):
    """Base class for signup call failures."""

    @property
    def kind(self) -> FailureKind:
        return FailureKind.UNCLASSIFIED


class SignupHttpError(SignupError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = int(status_code)
        self.detail = detail
        msg = f"signup failed with HTTP {self.status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)

    @property
    def kind(self) -> FailureKind:
        return classify_status(self.status_code)


class SignupTransportError(SignupError):
    """The request never produced a response (connection refused, reset, timeout...)."""
