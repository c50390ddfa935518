# src/assignly/presentation/signup/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ...core.ports import ImageRef

BLANK_FIELDS_MESSAGE = "Fields shouldn't be blank"
PASSWORD_MISMATCH_MESSAGE = "passwords don't match"
USER_EXISTS_MESSAGE = "user already exists"
COULD_NOT_ADD_USER_MESSAGE = "could not add user"


@dataclass(frozen=True, slots=True)
class FormFields:
    """The editable part of the signup form, shared by Idle/Loading/Error."""

    login: str = ""
    tag: str = ""
    password: str = ""
    password_repeat: str = ""
    image: ImageRef | None = None


@dataclass(frozen=True, slots=True)
class Idle:
    login: str = ""
    tag: str = ""
    password: str = ""
    password_repeat: str = ""
    image: ImageRef | None = None

    @property
    def fields(self) -> FormFields:
        return FormFields(self.login, self.tag, self.password, self.password_repeat, self.image)


@dataclass(frozen=True, slots=True)
class Loading:
    login: str
    tag: str
    password: str
    password_repeat: str
    image: ImageRef | None

    @property
    def fields(self) -> FormFields:
        return FormFields(self.login, self.tag, self.password, self.password_repeat, self.image)


@dataclass(frozen=True, slots=True)
class Error:
    login: str
    tag: str
    password: str
    password_repeat: str
    image: ImageRef | None
    error_message: str

    @property
    def fields(self) -> FormFields:
        return FormFields(self.login, self.tag, self.password, self.password_repeat, self.image)


@dataclass(frozen=True, slots=True)
class Success:
    success_message: str


SignupFormState = Union[Idle, Loading, Error, Success]


def idle_from(f: FormFields) -> Idle:
    return Idle(f.login, f.tag, f.password, f.password_repeat, f.image)


def loading_from(f: FormFields) -> Loading:
    return Loading(f.login, f.tag, f.password, f.password_repeat, f.image)


def error_from(f: FormFields, message: str) -> Error:
    return Error(f.login, f.tag, f.password, f.password_repeat, f.image, message)
