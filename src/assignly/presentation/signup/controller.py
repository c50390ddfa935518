# src/assignly/presentation/signup/controller.py

"""
Signup form controller.

Holds the current SignupFormState, applies user edits, validates and
submits the form. Renderers observe `state` (a read-only StateFlow).

Behaviour kept as-is from the shipped app (pinned by tests):
- editing while in Error returns to Idle with the *previous* field values;
  the new value is dropped
- a successful signup leaves the form in Loading (Success is never emitted)
- failures other than 409/404 leave the form in Loading
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from ...api.errors import FailureKind, SignupError
from ...config import DEFAULT_JPEG_QUALITY
from ...core.ports import ImageRef, ImageSource, SignupApi
from ...core.scope import TaskScope
from ...core.state_flow import ReadOnlyStateFlow, StateFlow
from ...media.image_codec import encode_image
from .state import (
    BLANK_FIELDS_MESSAGE,
    COULD_NOT_ADD_USER_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    USER_EXISTS_MESSAGE,
    Error,
    FormFields,
    Idle,
    SignupFormState,
    error_from,
    idle_from,
    loading_from,
)

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES: dict[FailureKind, str] = {
    FailureKind.CONFLICT: USER_EXISTS_MESSAGE,
    FailureKind.NOT_FOUND: COULD_NOT_ADD_USER_MESSAGE,
}


class SignupController:
    def __init__(
            self,
            api: SignupApi,
            image_source: ImageSource,
            *,
            scope: TaskScope | None = None,
            cancel_event: asyncio.Event | None = None,
            jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ) -> None:
        self._api = api
        self._image_source = image_source
        if scope is None:
            scope = TaskScope(cancel_event=cancel_event, name="signup")
        elif cancel_event is not None:
            scope.bind_cancel_event(cancel_event)
        self._scope = scope
        self._jpeg_quality = jpeg_quality
        self._flow: StateFlow[SignupFormState] = StateFlow(Idle())
        self.state: ReadOnlyStateFlow[SignupFormState] = self._flow.as_read_only()

    @property
    def current(self) -> SignupFormState:
        return self._flow.value

    @property
    def scope(self) -> TaskScope:
        return self._scope

    # ---- input ----

    def _edit(self, **change: object) -> None:
        current = self._flow.value
        if isinstance(current, Idle):
            self._flow.value = replace(current, **change)
        elif isinstance(current, Error):
            # Leaving Error restores the submitted values; `change` is not applied.
            self._flow.value = idle_from(current.fields)
        # Loading / Success: input ignored.

    def set_login(self, login: str) -> None:
        self._edit(login=login)

    def set_tag(self, tag: str) -> None:
        self._edit(tag=tag)

    def set_password(self, password: str) -> None:
        self._edit(password=password)

    def set_password_repeat(self, password_repeat: str) -> None:
        self._edit(password_repeat=password_repeat)

    def set_image(self, image: ImageRef | None) -> None:
        self._edit(image=image)

    # ---- submit ----

    def submit(self) -> asyncio.Task | None:
        """
        Validate and start the signup request.

        Returns the launched task, or None when nothing was launched
        (not Idle, blank fields, or the scope is already cancelled).
        Must be called from inside a running event loop.
        """
        current = self._flow.value
        if not isinstance(current, Idle):
            return None
        if self._scope.is_cancelled:
            logger.debug("submit ignored: controller scope is cancelled")
            return None

        fields = current.fields
        if not fields.login.strip() or not fields.password.strip():
            self._flow.value = error_from(fields, BLANK_FIELDS_MESSAGE)
            return None

        # Raises RuntimeError outside a loop; must happen before Loading is published.
        asyncio.get_running_loop()

        self._flow.value = loading_from(fields)
        return self._scope.launch(self._run_signup(fields), name=f"signup:{fields.login}")

    async def _run_signup(self, fields: FormFields) -> None:
        if fields.password != fields.password_repeat:
            self._publish(error_from(fields, PASSWORD_MISMATCH_MESSAGE))
            return

        image = await asyncio.to_thread(
            encode_image, fields.image, self._image_source, quality=self._jpeg_quality
        )

        try:
            await self._api.signup(
                login=fields.login,
                tag=fields.tag,
                password=fields.password,
                image=image,
            )
        except SignupError as e:
            message = _FAILURE_MESSAGES.get(e.kind)
            if message is None:
                # FIXME: nothing leaves Loading here; the screen needs a generic error state.
                logger.warning("signup failed (%s), form left in loading: %s", e.kind.value, e)
                return
            self._publish(error_from(fields, message))
            return

        logger.info("signup request completed for login=%s", fields.login)

    def _publish(self, new_state: SignupFormState) -> None:
        if self._scope.is_cancelled:
            logger.debug("dropping state write after cancel: %s", type(new_state).__name__)
            return
        self._flow.value = new_state

    def close(self) -> None:
        """Cancel in-flight work and finish state observers."""
        self._scope.cancel()
        self._flow.close()

    async def aclose(self) -> None:
        """close(), then wait until the cancelled request has actually unwound."""
        self.close()
        await self._scope.join()
