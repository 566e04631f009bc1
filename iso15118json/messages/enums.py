from enum import Enum
from typing import Type, TypeVar

from iso15118json.exceptions import InvalidValueError

# For XSD type xs:unsignedLong with value range [0..18446744073709551615]
UINT_64_MAX = 2**64 - 1
# For XSD type xs:unsignedInt with value range [0..4294967296]
UINT_32_MAX = 2**32 - 1
# For XSD type xs:unsignedShort with value range [0..65535]
UINT_16_MAX = 2**16 - 1
# For XSD type xs:unsignedByte with value range [0..255]
UINT_8_MAX = 2**8 - 1
# For XSD type xs:short with value range [-32768..32767]
INT_16_MAX = 2**15 - 1
INT_16_MIN = -(2**15)
# For XSD type xs:byte with value range [-128..127]
INT_8_MAX = 2**7 - 1
INT_8_MIN = -(2**7)

E = TypeVar("E", bound="ProtocolEnum")


class ProtocolEnum(str, Enum):
    """
    Base class for all closed ISO 15118-20 enumerations. The value of each
    member is the token spelled exactly as the protocol defines it (e.g.
    'OK_NewSessionEstablished'), which is what goes onto the wire. The member
    name is the python symbol and never appears in a JSON document.
    """

    @classmethod
    def parse(cls: Type[E], token: str) -> E:
        try:
            return cls(token)
        except ValueError as exc:
            raise InvalidValueError(
                f"'{token}' is not a valid {cls.__name__} token. "
                f"Valid tokens are {[member.value for member in cls]}"
            ) from exc

    def format(self) -> str:
        return self.value


class AuthEnum(ProtocolEnum):
    """
    The authorization services of ISO 15118-20, see section 8.3.5.3.30.
    EIM = External Identification Means, PnC = Plug & Charge
    """

    EIM = "EIM"
    PNC = "PnC"
