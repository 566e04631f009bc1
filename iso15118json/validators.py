"""
This module contains functions used by various pydantic validators throughout
the model classes for ISO 15118-20 messages. Saves duplicated code.
"""

from typing import Dict, List, Optional, Sequence

from iso15118json.exceptions import ConflictingChoiceError, MissingChoiceError


def one_field_must_be_set(
    group: str,
    field_options: Sequence[str],
    values: Dict,
    mutually_exclusive: bool = True,
    at_least_one: bool = True,
) -> List[str]:
    """
    In several messages, there is the option to choose one of two or more
    possible fields, where all fields are defined as optional in the
    corresponding model but at most one or exactly one of them needs to be set.
    For example, it could be either EIM-related authorization parameters or
    Plug & Charge-related authorization parameters.

    Args:
        group: The protocol name of the choice group, used in error messages
        field_options: The names of the optional fields forming the group
        values: The dict with the model's fields
        mutually_exclusive: If true, then at most one of the given field
                            options may be set.
        at_least_one: If true, then at least one of the given field options
                      must be set.

    Returns:
        The names of the field options that are set
    """
    set_fields: List[str] = []
    for field_name in field_options:
        field = values.get(field_name)
        # Important to not check for "if field" instead of "if field is not None"
        # to avoid situations in which field evaluates to 0 (which equals to False)
        if field is not None:
            set_fields.append(field_name)

    if mutually_exclusive and len(set_fields) > 1:
        raise ConflictingChoiceError(group, set_fields)

    if at_least_one and len(set_fields) == 0:
        raise MissingChoiceError(group, field_options)

    return set_fields


def validate_soc_order(
    min_soc: Optional[int], target_soc: Optional[int]
) -> Optional[str]:
    """
    Returns an error description if both state of charge values are given and
    the minimum SOC exceeds the target SOC ([V2G20-1640]), None otherwise.
    """
    if min_soc is not None and target_soc is not None and min_soc > target_soc:
        return (
            "minimumSOC must be less than or equal to targetSOC. "
            f"minimumSOC: {min_soc}, targetSOC: {target_soc}"
        )
    return None
