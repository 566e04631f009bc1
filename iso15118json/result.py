from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from iso15118json.exceptions import V2GMessageError

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    The outcome of a parse operation: either a value or the first diagnostic
    that made the input unacceptable. Parsing never raises for well-formed but
    invalid input, the caller inspects the result instead:

        result = codec.parse(SessionSetupReq, json_obj)
        if not result.ok:
            logger.warning(f"Rejecting request: {result.error}")
    """

    value: Optional[T] = None
    error: Optional[V2GMessageError] = None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: V2GMessageError) -> "ParseResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Returns the parsed value or raises the diagnostic"""
        if self.error is not None:
            raise self.error
        return self.value
