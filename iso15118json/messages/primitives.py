"""
Domain primitives of ISO 15118-20, i.e. the simple XSD types that carry
more meaning than a plain string (session IDs, EVCC/EVSE IDs, EMAIDs, provider
IDs). Each primitive is a newtype of str with its own text parser, so it can be
handed around as a string while guaranteeing that it was validated once.

All primitives can be used directly as pydantic field types.
"""
import os
import re
from typing import Any, ClassVar, Optional, Pattern, Type, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from iso15118json.exceptions import InvalidValueError, MalformedFieldError
from iso15118json.result import ParseResult

P = TypeVar("P", bound="TextPrimitive")


class TextPrimitive(str):
    """
    Base class of all string-based domain primitives.

    Subclasses define the allowed length and, optionally, a regex the text
    must match as a whole. parse(format(x)) == x holds for every valid x.
    """

    min_length: ClassVar[int] = 1
    max_length: ClassVar[int] = 255
    pattern: ClassVar[Optional[Pattern]] = None
    description: ClassVar[str] = "identifier"

    @classmethod
    def parse(cls: Type[P], text: Any) -> P:
        if not isinstance(text, str):
            raise InvalidValueError(
                f"{cls.__name__} must be given as text, not {type(text).__name__}"
            )
        if not cls.min_length <= len(text) <= cls.max_length:
            raise InvalidValueError(
                f"Invalid value '{text}' for {cls.__name__} (length must be "
                f"within [{cls.min_length}..{cls.max_length}])"
            )
        if cls.pattern is not None and not cls.pattern.fullmatch(text):
            raise InvalidValueError(
                f"Invalid value '{text}' for {cls.__name__} (must be "
                f"{cls.description})"
            )
        return cls(text)

    @classmethod
    def try_parse(cls: Type[P], text: Any) -> ParseResult[P]:
        try:
            return ParseResult.success(cls.parse(text))
        except InvalidValueError as exc:
            return ParseResult.failure(MalformedFieldError(cls.__name__, str(exc)))

    def format(self) -> str:
        return str.__str__(self)

    def __repr__(self):
        return f"{type(self).__name__}({str.__repr__(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: str.__str__(value)
            ),
        )


class SessionID(TextPrimitive):
    """
    See section 8.3.3 in ISO 15118-20.
    XSD type hexBinary with max 8 bytes encoded as 16 hexadecimal characters
    """

    max_length = 16
    pattern = re.compile(r"[0-9a-fA-F]+")
    description = "hexadecimal representation of max 8 bytes"

    @classmethod
    def new_random(cls) -> "SessionID":
        return cls(os.urandom(8).hex().upper())


class EVCCID(TextPrimitive):
    """See section 8.3.4.3.1.1 in ISO 15118-20 (identifierType)"""


class EVSEID(TextPrimitive):
    """See section 8.3.4.3.1.2 in ISO 15118-20 (identifierType)"""


class EMAID(TextPrimitive):
    """
    E-Mobility Account Identifier, see Annex C.1 in ISO 15118-20
    (identifierType)
    """


class ProviderID(TextPrimitive):
    """See section 8.3.5.3.34 in ISO 15118-20 (nameType)"""

    max_length = 80
    description = "a name"
