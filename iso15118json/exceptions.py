from typing import Optional, Sequence


class V2GMessageError(Exception):
    """
    Base class for everything that can be wrong with an ISO 15118-20 message,
    be it an incoming JSON document that fails to parse or a message that is
    built with an invalid combination of fields.

    The 'field' attribute holds the key path of the offending field (e.g.
    'messageHeader.sessionId') or the name of the offending choice group.
    """

    def __init__(self, field: str, message: str):
        Exception.__init__(self, message)
        self.field = field
        self.message = message


class MissingMandatoryFieldError(V2GMessageError):
    """Is thrown when a mandatory key is absent or null"""

    def __init__(self, field: str):
        V2GMessageError.__init__(self, field, f"{field} is mandatory")


class MalformedFieldError(V2GMessageError):
    """
    Is thrown when a key is present but its value fails the field's own
    validation (e.g. an unknown enumeration token or a negative timestamp).
    The 'detail' attribute provides additional debugging information.
    """

    def __init__(self, field: str, detail: str = ""):
        V2GMessageError.__init__(self, field, f"{field} is invalid")
        self.detail = detail

    def __str__(self):
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ChoiceGroupError(V2GMessageError):
    """
    Base class for violations of the cardinality rule of a choice group.
    The 'group' attribute is the protocol name of the group (e.g.
    'AReqAuthorizationMode'), the 'members' attribute lists the wire keys
    involved.
    """

    def __init__(self, group: str, members: Sequence[str], message: str):
        V2GMessageError.__init__(self, group, message)
        self.group = group
        self.members = list(members)


class MissingChoiceError(ChoiceGroupError):
    """Is thrown when no member of an 'exactly one' choice group is set"""

    def __init__(self, group: str, members: Sequence[str]):
        ChoiceGroupError.__init__(
            self,
            group,
            members,
            f"{group} is mandatory: exactly one of {list(members)} must be set",
        )


class ConflictingChoiceError(ChoiceGroupError):
    """Is thrown when more than one member of a choice group is set"""

    def __init__(self, group: str, members: Sequence[str]):
        ChoiceGroupError.__init__(
            self,
            group,
            members,
            f"{group} allows only one member but {list(members)} are set",
        )


class SemanticConstraintError(V2GMessageError):
    """
    Is thrown when a rule spanning several fields is violated, e.g. an
    AuthorizationSetupRes offering a Plug & Charge setup although PnC is not
    among its authorization services.
    """

    def __init__(self, field: str, message: str, rule: Optional[str] = None):
        V2GMessageError.__init__(self, field, message)
        self.rule = rule


class InvalidValueError(ValueError):
    """
    Is thrown when the text form of a domain primitive or an enumeration token
    cannot be parsed. Subclasses ValueError so that pydantic reports it as a
    regular validation error of the field.
    """
