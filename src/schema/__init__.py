"""Form schemas and lookup tables for items, users and orders"""

from .forms import FormModel
from .item_form import ItemForm, ITEM_FIELDS, PRICE_MIN, PRICE_MAX
from .order_form import OrderForm, ORDER_FIELDS
from .user_form import UserForm
from .lookups import (
    LookupTable,
    Category,
    SalesStatus,
    ShippingFeeStatus,
    Prefecture,
    ScheduledDelivery,
    ITEM_LOOKUPS,
    PLACEHOLDER_ID,
)

__all__ = [
    "FormModel",
    "ItemForm",
    "ITEM_FIELDS",
    "PRICE_MIN",
    "PRICE_MAX",
    "OrderForm",
    "ORDER_FIELDS",
    "UserForm",
    "LookupTable",
    "Category",
    "SalesStatus",
    "ShippingFeeStatus",
    "Prefecture",
    "ScheduledDelivery",
    "ITEM_LOOKUPS",
    "PLACEHOLDER_ID",
]
