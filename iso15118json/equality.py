"""
Structural equality and hashing of message models.

Two models are equal if they are of the same class and all their fields are
equal. Fields flagged as unordered (see messages.bounded.bounded_set) are
compared as sets, choice fields compare the selected member and its value,
and everything else compares in order. The hash is consistent with this, so
a model can be used as dict key or set member no matter in which order its
unordered collections were filled.
"""
from enum import Enum
from typing import Any

from iso15118json.messages.choice import Choice
from iso15118json.messages.descriptors import describe


def _is_model(value: Any) -> bool:
    return hasattr(type(value), "model_fields") and not isinstance(value, type)


def _set_equal(a, b) -> bool:
    if len(a) != len(b):
        return False
    return all(
        any(structurally_equal(x, y) for y in b) for x in a
    ) and all(any(structurally_equal(y, x) for x in a) for y in b)


def structurally_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True

    if _is_model(a) or _is_model(b):
        if type(a) is not type(b):
            return False
        for field in describe(type(a)):
            left, right = getattr(a, field.name), getattr(b, field.name)
            if field.unordered and left is not None and right is not None:
                if not _set_equal(left, right):
                    return False
            elif not structurally_equal(left, right):
                return False
        return True

    if isinstance(a, Choice) and isinstance(b, Choice):
        return a.member == b.member and structurally_equal(a.value, b.value)

    if isinstance(a, (tuple, list)) and isinstance(b, (tuple, list)):
        return len(a) == len(b) and all(
            structurally_equal(x, y) for x, y in zip(a, b)
        )

    if isinstance(a, Enum) or isinstance(b, Enum):
        # str-based enums would otherwise equal their plain token
        return type(a) is type(b) and a == b

    return a == b


def structural_hash(value: Any) -> int:
    if _is_model(value):
        parts = [type(value).__name__]
        for field in describe(type(value)):
            item = getattr(value, field.name)
            if field.unordered and item is not None:
                parts.append(frozenset(structural_hash(x) for x in item))
            else:
                parts.append(structural_hash(item))
        return hash(tuple(parts))

    if isinstance(value, Choice):
        return hash(("Choice", value.member, structural_hash(value.value)))

    if isinstance(value, (tuple, list)):
        return hash(tuple(structural_hash(item) for item in value))

    return hash(value)
