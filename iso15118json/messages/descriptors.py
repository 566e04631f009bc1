"""
Field descriptors: a flat, per-class description of a message model's fields
in declaration order. The JSON codec and the equality engine both walk a model
through its descriptor list instead of inspecting the pydantic internals
themselves.
"""
from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Any, Optional, Tuple, Type, Union

from pydantic import TypeAdapter
from pydantic.fields import FieldInfo
from typing_extensions import Annotated, get_args, get_origin

from iso15118json.messages.bounded import Unordered
from iso15118json.messages.choice import ChoiceGroup, find_choice_group


def strip_optional(annotation: Any) -> Any:
    """Optional[X] -> X, anything else is returned untouched"""
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _find_unordered(annotation: Any, metadata) -> Optional[Unordered]:
    candidates = list(metadata)
    inner = strip_optional(annotation)
    if get_origin(inner) is Annotated:
        candidates.extend(inner.__metadata__)
    for item in candidates:
        if isinstance(item, Unordered):
            return item
    return None


@dataclass(frozen=True)
class FieldDescriptor:
    # The python attribute name
    name: str
    # The lowerCamelCase JSON key
    alias: str
    required: bool
    # The field's type with Optional[] and Annotated[] removed
    annotation: Any
    group: Optional[ChoiceGroup]
    unordered: Optional[Unordered]
    field_info: FieldInfo

    @property
    def is_choice(self) -> bool:
        return self.group is not None

    @property
    def is_collection(self) -> bool:
        return get_origin(self.annotation) is tuple

    @property
    def item_type(self) -> Any:
        """The element type of a collection field"""
        return get_args(self.annotation)[0]

    @cached_property
    def adapter(self) -> TypeAdapter:
        """Validates a single (already decoded) value of this field"""
        if self.field_info.metadata:
            return TypeAdapter(
                Annotated[(self.field_info.annotation, *self.field_info.metadata)]
            )
        return TypeAdapter(self.field_info.annotation)


@lru_cache(maxsize=None)
def describe(model_cls: Type) -> Tuple[FieldDescriptor, ...]:
    """Returns the descriptors of all fields of 'model_cls' in declaration order"""
    descriptors = []
    for name, field_info in model_cls.model_fields.items():
        group = find_choice_group(field_info.metadata)
        descriptors.append(
            FieldDescriptor(
                name=name,
                alias=field_info.alias or name,
                required=field_info.is_required(),
                annotation=strip_annotated(strip_optional(field_info.annotation)),
                group=group,
                unordered=_find_unordered(field_info.annotation, field_info.metadata),
                field_info=field_info,
            )
        )
    return tuple(descriptors)
