# src/assignly/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the presentation layer.

Controllers depend on Protocols instead of concrete implementations.
This keeps the HTTP client and the image storage swappable and makes testing easier.
"""

from typing import Protocol

ImageRef = str
# Opaque handle to a user-picked picture (filesystem path or file:// URI).


class SignupApi(Protocol):
    """
    Backend signup call.

    Raises SignupError (see api.errors) on failure; returns None on success.
    """

    async def signup(
            self,
            *,
            login: str,
            tag: str,
            password: str,
            image: str,
    ) -> None: ...


class ImageSource(Protocol):
    """Resolves an ImageRef into raw file bytes. Raises OSError if it can't."""

    def open(self, ref: ImageRef) -> bytes: ...
