"""Sign-up form validation"""

import re
from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .forms import FormModel, blank_error, invalid_error, is_blank


EMAIL_FORMAT = re.compile(r"[^@\s]+@[^@\s]+")
PASSWORD_MIN_LENGTH = 6
LETTERS_AND_DIGITS = re.compile(r"(?=.*[a-zA-Z])(?=.*[0-9])[a-zA-Z0-9]+")


class UserForm(FormModel):
    nickname: str = ""
    email: str = ""
    password: str = ""
    password_confirmation: str = ""

    @field_validator("nickname", mode="before")
    @classmethod
    def _nickname_present(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        return str(value).strip()

    @field_validator("email", mode="before")
    @classmethod
    def _email_format(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        value = str(value).strip()
        if not EMAIL_FORMAT.fullmatch(value):
            raise invalid_error()
        return value.lower()

    @field_validator("password", mode="before")
    @classmethod
    def _password_strength(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        value = str(value)
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "too_short",
                "is too short (minimum is {count} characters)",
                {"count": PASSWORD_MIN_LENGTH},
            )
        if not LETTERS_AND_DIGITS.fullmatch(value):
            raise invalid_error("is invalid. Include both letters and numbers")
        return value

    @field_validator("password_confirmation", mode="before")
    @classmethod
    def _confirmation_matches(cls, value: Any, info: ValidationInfo):
        value = "" if value is None else str(value)
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError("confirmation", "doesn't match Password")
        return value
