"""
Item Form
=========
Validation rules for the listing create/edit form.
"""

import re
from typing import Any, Dict, Optional

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from .forms import FormModel, blank_error, invalid_error, is_blank
from .lookups import ITEM_LOOKUPS, PLACEHOLDER_ID


PRICE_MIN = 300
PRICE_MAX = 9_999_999

# \d would also accept full-width digits
HALF_WIDTH_DIGITS = re.compile(r"[0-9]+")

TEXT_LIMITS = {
    "name": 40,
    "info": 1000,
}

# Submitted field names, in form order
ITEM_FIELDS = (
    "name",
    "info",
    "category_id",
    "sales_status_id",
    "shipping_fee_status_id",
    "prefecture_id",
    "scheduled_delivery_id",
    "price",
)


class ItemForm(FormModel):
    """A listing as submitted through items/new or items/<id>/edit.

    ``image`` carries the uploaded file name. Pass ``require_image=False`` as
    validation context when editing, where the stored image is kept unless a
    new one is attached.
    """

    image: Optional[str] = None
    name: str = ""
    info: str = ""
    category_id: int = PLACEHOLDER_ID
    sales_status_id: int = PLACEHOLDER_ID
    shipping_fee_status_id: int = PLACEHOLDER_ID
    prefecture_id: int = PLACEHOLDER_ID
    scheduled_delivery_id: int = PLACEHOLDER_ID
    price: Optional[int] = None

    @field_validator("image", mode="before")
    @classmethod
    def _image_attached(cls, value: Any, info: ValidationInfo):
        if is_blank(value):
            if (info.context or {}).get("require_image", True):
                raise blank_error()
            return None
        return value

    @field_validator("name", "info", mode="before")
    @classmethod
    def _required_text(cls, value: Any, info: ValidationInfo):
        if is_blank(value):
            raise blank_error()
        value = str(value)
        limit = TEXT_LIMITS[info.field_name]
        if len(value) > limit:
            raise PydanticCustomError(
                "too_long",
                "is too long (maximum is {count} characters)",
                {"count": limit},
            )
        return value

    @field_validator(*ITEM_LOOKUPS, mode="before")
    @classmethod
    def _lookup_selected(cls, value: Any, info: ValidationInfo):
        table = ITEM_LOOKUPS[info.field_name]
        if not table.is_selectable(value):
            raise blank_error()
        return int(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price_in_range(cls, value: Any):
        if is_blank(value):
            raise blank_error()
        text = str(value).strip()
        if not HALF_WIDTH_DIGITS.fullmatch(text):
            raise invalid_error("is invalid. Input half-width characters")
        price = int(text)
        if not PRICE_MIN <= price <= PRICE_MAX:
            raise PydanticCustomError("out_of_range", "is out of setting range")
        return price

    def to_record(self) -> Dict[str, Any]:
        """Column values for the items table, image excluded"""
        return self.model_dump(exclude={"image"})
