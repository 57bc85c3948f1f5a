"""Shipping address submitted with a purchase"""

import re
from typing import Any, Optional

from pydantic import field_validator

from .forms import FormModel, blank_error, invalid_error, is_blank
from .lookups import PLACEHOLDER_ID, Prefecture


POSTAL_CODE_FORMAT = re.compile(r"[0-9]{3}-[0-9]{4}")
PHONE_NUMBER_FORMAT = re.compile(r"[0-9]{10,11}")

ORDER_FIELDS = (
    "postal_code",
    "prefecture_id",
    "city",
    "addresses",
    "building",
    "phone_number",
)


class OrderForm(FormModel):
    postal_code: str = ""
    prefecture_id: int = PLACEHOLDER_ID
    city: str = ""
    addresses: str = ""
    building: Optional[str] = None
    phone_number: str = ""

    @field_validator("postal_code", mode="before")
    @classmethod
    def _postal_code_format(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        value = str(value).strip()
        if not POSTAL_CODE_FORMAT.fullmatch(value):
            raise invalid_error("is invalid. Include hyphen(-)")
        return value

    @field_validator("prefecture_id", mode="before")
    @classmethod
    def _prefecture_selected(cls, value: Any):
        if not Prefecture.is_selectable(value):
            raise blank_error()
        return int(value)

    @field_validator("city", "addresses", mode="before")
    @classmethod
    def _required_text(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        return str(value).strip()

    @field_validator("building", mode="before")
    @classmethod
    def _optional_text(cls, value: Any):
        if is_blank(value):
            return None
        return str(value).strip()

    @field_validator("phone_number", mode="before")
    @classmethod
    def _phone_number_digits(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        value = str(value).strip()
        if not PHONE_NUMBER_FORMAT.fullmatch(value):
            raise invalid_error("is invalid. Input only number")
        return value
