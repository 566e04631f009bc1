from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, model_validator

from iso15118json import equality
from iso15118json.messages.descriptors import describe


class BaseModel(PydanticBaseModel):
    """
    Base of all ISO 15118-20 message elements.

    Every instance is immutable once constructed. Choice groups are resolved
    and checked before the fields are validated, and two instances are equal
    if they are structurally equal (see iso15118json.equality).
    """

    model_config = ConfigDict(
        # Allow input by alias or field name
        populate_by_name=True,
        # Forbid extra attributes during model initialization
        extra="forbid",
        # No update in place, which also makes instances hashable
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_choice_groups(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        values = dict(data)
        for field in describe(cls):
            if field.is_choice:
                field.group.resolve(field.name, values)
            elif field.is_collection and not field.required:
                # An empty optional collection is the same as an absent one
                for key in (field.name, field.alias):
                    if key in values and values[key] in ([], ()):
                        values[key] = None
        return values

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PydanticBaseModel):
            return NotImplemented
        return equality.structurally_equal(self, other)

    def __hash__(self) -> int:
        return equality.structural_hash(self)

    def __str__(self):
        return type(self).__name__
