"""
Form Models
===========
pydantic models that validate submitted HTML forms and turn failures into
human readable "full messages" ("Name can't be blank").
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError


def humanize(field_name: str) -> str:
    """category_id -> Category, sales_status_id -> Sales status"""
    if field_name.endswith("_id"):
        field_name = field_name[:-3]
    return field_name.replace("_", " ").capitalize()


def blank_error() -> PydanticCustomError:
    return PydanticCustomError("blank", "can't be blank")


def invalid_error(message: str = "is invalid") -> PydanticCustomError:
    return PydanticCustomError("invalid", message)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class FormModel(BaseModel):
    """Base class for form submissions"""

    model_config = ConfigDict(validate_default=True)

    @classmethod
    def full_messages(cls, exc: ValidationError) -> List[str]:
        """Flatten a ValidationError into one message per failed field"""
        messages = []
        for error in exc.errors():
            location = error.get("loc") or ()
            field_name = str(location[0]) if location else ""
            label = humanize(field_name) if field_name else ""
            text = f"{label} {error['msg']}".strip()
            if text not in messages:
                messages.append(text)
        return messages

    @classmethod
    def parse(
        cls, data: Dict[str, Any], **context
    ) -> Tuple[Optional["FormModel"], List[str]]:
        """Validate form data; returns (form, []) or (None, messages)"""
        try:
            return cls.model_validate(data, context=context), []
        except ValidationError as e:
            return None, cls.full_messages(e)
