"""
Choice groups: a set of mutually exclusive message elements of which exactly
one (required group) or at most one (optional group) is present.

The XSD schemas of ISO 15118-20 model these as xs:choice, which end up as a
bunch of optional fields in most bindings. Here, each group is a single model
field holding a tagged Choice value, so a model can never hold two members of
the same group at once:

    AUTH_REQ_MODE = ChoiceGroup(
        "AReqAuthorizationMode",
        ChoiceMember("eim_params", EIMAuthReqParams, "eimAReqAuthorizationMode"),
        ChoiceMember("pnc_params", PnCAuthReqParams, "pncAReqAuthorizationMode"),
    )

    class AuthorizationReq(V2GRequest):
        auth_mode: Annotated[Choice, AUTH_REQ_MODE]

The members can still be handed to the model's constructor as individual
keyword arguments (by member name or wire alias). The group reduces them to
the tagged value and rejects zero or multiple selections.
"""
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, TypeAdapter, ValidationError

from iso15118json.exceptions import ConflictingChoiceError
from iso15118json.validators import one_field_must_be_set


class Choice(NamedTuple):
    """The selected member of a choice group together with its value"""

    member: str
    value: Any

    def get(self, member: str, default: Any = None) -> Any:
        return self.value if self.member == member else default

    def is_(self, member: str) -> bool:
        return self.member == member


@dataclass(frozen=True)
class ChoiceMember:
    # The python name used as keyword argument and as Choice.member
    name: str
    # The type of the member's value
    annotation: Any
    # The lowerCamelCase JSON key
    alias: str

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(self.annotation)


class ChoiceGroup:
    """
    Describes a choice group. 'name' is the protocol name of the group and
    shows up in error messages, 'required' tells whether exactly one (True)
    or at most one (False) member must be selected.
    """

    def __init__(self, name: str, *members: ChoiceMember, required: bool = True):
        self.name = name
        self.members: Tuple[ChoiceMember, ...] = members
        self.required = required
        self._by_name: Dict[str, ChoiceMember] = {m.name: m for m in members}
        self._by_alias: Dict[str, ChoiceMember] = {m.alias: m for m in members}

    def __repr__(self):
        return (
            f"ChoiceGroup({self.name!r}, members={list(self._by_name)}, "
            f"required={self.required})"
        )

    def member(self, name: str) -> ChoiceMember:
        try:
            return self._by_name[name]
        except KeyError as exc:
            raise ValueError(
                f"'{name}' is not a member of choice group {self.name}. "
                f"Members are {list(self._by_name)}"
            ) from exc

    def select(self, member_name: str, value: Any) -> Choice:
        """
        Validates the value against the member's type and tags it. Model
        instances must be of exactly the member's type, a subclass instance
        (e.g. BPT parameters under a unidirectional member) is rejected.
        """
        member = self.member(member_name)
        if (
            isinstance(value, BaseModel)
            and isinstance(member.annotation, type)
            and type(value) is not member.annotation
        ):
            raise ValueError(
                f"{member.alias} must be a {member.annotation.__name__}, "
                f"got {type(value).__name__}"
            )
        try:
            return Choice(member.name, member.adapter.validate_python(value))
        except ValidationError as exc:
            raise ValueError(f"Invalid value for {member.alias}: {exc}") from exc

    def resolve(self, field_name: str, values: Dict[str, Any]) -> None:
        """
        Reduces the raw member entries of 'values' (given by name or alias) to
        a single Choice stored under 'field_name'. Works in place on the dict
        passed in by the model's 'before' validator.

        Raises:
            MissingChoiceError, ConflictingChoiceError
        """
        # Keyed by wire alias, so errors name the keys a peer actually sent
        candidates: Dict[str, Any] = {}
        for member in self.members:
            for key in (member.name, member.alias):
                if key not in values:
                    continue
                value = values.pop(key)
                if value is None:
                    continue
                if member.alias in candidates:
                    raise ConflictingChoiceError(self.name, [member.alias] * 2)
                candidates[member.alias] = value

        tagged = values.pop(field_name, None)
        if tagged is not None:
            tagged = self._as_choice(tagged)
            if candidates:
                raise ConflictingChoiceError(
                    self.name,
                    [self.member(tagged.member).alias] + list(candidates),
                )
            values[field_name] = self.select(tagged.member, tagged.value)
            return

        selected = one_field_must_be_set(
            self.name,
            [member.alias for member in self.members],
            candidates,
            mutually_exclusive=True,
            at_least_one=self.required,
        )
        if selected:
            member = self._by_alias[selected[0]]
            values[field_name] = self.select(member.name, candidates[selected[0]])

    def _as_choice(self, value: Any) -> Choice:
        if isinstance(value, Choice):
            return value
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return Choice(*value)
        raise ValueError(
            f"{self.name} must be given as Choice(member, value), "
            f"got {type(value).__name__}"
        )


def find_choice_group(metadata) -> Optional[ChoiceGroup]:
    for item in metadata:
        if isinstance(item, ChoiceGroup):
            return item
    return None
