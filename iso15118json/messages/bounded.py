"""
Collection types with a maximum cardinality.

ISO 15118-20 uses two kinds of repeated elements:

- elements that are semantically a set (e.g. the IDs of the root certificates
  an EV trusts, max 20). These are de-duplicated by value, keep the order in
  which they were first given (so serialization is deterministic) and compare
  as sets. See bounded_set().
- elements whose order carries meaning (e.g. the entries of a price schedule
  or a certificate chain). See bounded_list().

Both are stored as tuples so the models stay hashable. Input exceeding the
maximum (after de-duplication, for sets) is rejected, never truncated.
"""
from dataclasses import dataclass
from functools import partial
from typing import Any, Tuple, Type

from annotated_types import MaxLen, MinLen
from pydantic import AfterValidator
from typing_extensions import Annotated


@dataclass(frozen=True)
class Unordered:
    """
    Marks a collection field whose element order is not significant. The
    equality engine compares such fields as sets.
    """

    max_items: int


def _deduplicate(max_items: int, items: Tuple[Any, ...]) -> Tuple[Any, ...]:
    seen = set()
    unique = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)

    if len(unique) > max_items:
        raise ValueError(
            f"At most {max_items} distinct entries allowed, got {len(unique)}"
        )
    return tuple(unique)


def bounded_set(item_type: Type, max_items: int, min_items: int = 0) -> Any:
    """
    Returns the annotated type of an unordered, de-duplicated collection of
    'item_type' with at most 'max_items' distinct entries.
    """
    return Annotated[
        Tuple[item_type, ...],
        MinLen(min_items),
        AfterValidator(partial(_deduplicate, max_items)),
        Unordered(max_items),
    ]


def bounded_list(item_type: Type, max_items: int, min_items: int = 0) -> Any:
    """
    Returns the annotated type of an ordered collection of 'item_type' with
    at most 'max_items' entries. Duplicates are allowed.
    """
    return Annotated[Tuple[item_type, ...], MinLen(min_items), MaxLen(max_items)]
