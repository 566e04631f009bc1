"""
This module contains the codec that converts ISO 15118-20 messages to and
from their JSON form. In the JSON form, message elements are objects with
lowerCamelCase keys, enumerations are given by their protocol token and binary
values (certificates, signatures, challenges, ...) are Base64 strings:

    {
        "messageHeader": {"sessionId": "A1B2C3D4E5F60708", "timestamp": 1700000000},
        "evccId": "WMIV1234567890ABCDEX"
    }

Parsing never raises for invalid input. It reports the first problem found as
a ParseResult failure carrying a V2GMessageError. The keys are inspected in a
fixed order (mandatory keys in declaration order, then optional keys, then
choice group members, each nested element before its parent is completed), so
the same invalid document always yields the same diagnostic.
"""
import binascii
import json
import logging
from base64 import b64decode, b64encode
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel as PydanticBaseModel
from pydantic import HttpUrl, ValidationError
from typing_extensions import get_args, get_origin

from iso15118json.exceptions import (
    MalformedFieldError,
    MissingMandatoryFieldError,
    SemanticConstraintError,
    V2GMessageError,
)
from iso15118json.logging import TRACE
from iso15118json.messages import BaseModel
from iso15118json.messages.descriptors import (
    FieldDescriptor,
    describe,
    strip_annotated,
    strip_optional,
)
from iso15118json.messages.iso15118_20.common_types import (
    V2GMessage,
    V2GRequest,
    V2GResponse,
)
from iso15118json.messages.iso15118_20.msgdef import (
    get_msg_type,
    response_type_for,
)
from iso15118json.result import ParseResult
from iso15118json.settings import SettingKey, shared_settings

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

PostParseHook = Callable[[Dict[str, Any], BaseModel], BaseModel]
PostSerializeHook = Callable[[BaseModel, Dict[str, Any]], Dict[str, Any]]


def _join(path: str, key: Union[str, int]) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


def _unwrap(annotation: Any) -> Any:
    """Removes any nesting of Optional[] and Annotated[] from a type"""
    while True:
        stripped = strip_annotated(strip_optional(annotation))
        if stripped is annotation:
            return annotation
        annotation = stripped


def _is_model_type(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, PydanticBaseModel)


# Depending on the pydantic release, HttpUrl is a class or an Annotated Url
_URL_TYPE = _unwrap(HttpUrl)


def _json_type_name(annotation: Any) -> Optional[str]:
    """The JSON type a scalar field must be given as, None if not a scalar"""
    if not isinstance(annotation, type):
        return None
    if annotation is bool:
        return "boolean"
    if issubclass(annotation, int):
        return "integer"
    if issubclass(annotation, (str, _URL_TYPE)):
        return "string"
    return None


def _is_json_type(annotation: Any, value: Any) -> bool:
    """Tells whether the JSON value has the scalar type of the annotation"""
    # true and false are no integers, although bool subclasses int
    if annotation is bool:
        return isinstance(value, bool)
    if issubclass(annotation, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


class JSONCodec:
    """
    Converts messages to JSON objects (dicts) and back.

    An optional post_parse hook is called with the JSON object and the parsed
    message after every successful parse and may return a replacement for the
    message. An optional post_serialize hook is called with the message and
    its JSON object after serialization and may return a replacement object.
    A hook that raises is logged and its result discarded; it never turns a
    successful parse or serialization into a failure.
    """

    def __init__(
        self,
        post_parse: Optional[PostParseHook] = None,
        post_serialize: Optional[PostSerializeHook] = None,
    ):
        self.post_parse = post_parse
        self.post_serialize = post_serialize

    # ---------------------------------------------------------------- parsing

    def parse(self, msg_type: Type[M], obj: Any) -> ParseResult[M]:
        """
        Parses the JSON object 'obj' into an instance of 'msg_type'.

        Returns:
            A successful ParseResult holding the message, or a failed one
            holding the first MissingMandatoryFieldError, MalformedFieldError,
            ChoiceGroupError or SemanticConstraintError encountered.
        """
        try:
            message = self._parse_model(msg_type, obj, "")
        except V2GMessageError as exc:
            logger.debug(f"Parsing {msg_type.__name__} failed: {exc}")
            return ParseResult.failure(exc)

        if shared_settings[SettingKey.MESSAGE_LOG_JSON]:
            logger.info(f"Parsed {msg_type.__name__}: {json.dumps(obj)}")

        return ParseResult.success(self._apply_post_parse(obj, message))

    def parse_or_raise(self, msg_type: Type[M], obj: Any) -> M:
        """
        Same as parse(), but raises the diagnostic instead of returning it.

        Raises:
            V2GMessageError
        """
        return self.parse(msg_type, obj).unwrap()

    def parse_response(
        self, request: V2GRequest, obj: Any
    ) -> ParseResult[V2GResponse]:
        """
        Parses 'obj' as the response to 'request' and binds the request to it.
        A response whose content contradicts the request (e.g. a different
        control mode) is reported as SemanticConstraintError.

        Raises:
            TypeError, if 'request' is not an ISO 15118-20 request
        """
        result = self.parse(response_type_for(request), obj)
        if not result.ok:
            return result

        try:
            return ParseResult.success(result.value.correlate(request))
        except SemanticConstraintError as exc:
            logger.debug(f"{result.value} does not fit {request}: {exc}")
            return ParseResult.failure(exc)

    def from_json(self, msg_type: Type[M], text: Union[str, bytes]) -> ParseResult[M]:
        """Parses a JSON text into an instance of 'msg_type'"""
        try:
            obj = json.loads(text)
        except ValueError as exc:
            # JSONDecodeError or UnicodeDecodeError for bytes that are no UTF-8
            logger.debug(f"Invalid JSON text for {msg_type.__name__}: {exc}")
            return ParseResult.failure(
                MalformedFieldError(msg_type.__name__, str(exc))
            )
        return self.parse(msg_type, obj)

    def parse_named(self, obj: Any) -> ParseResult[V2GMessage]:
        """
        Parses a named envelope of the form {"<MessageName>": {...}}, where
        the message name is the one given in the XSD schema (e.g.
        'DC_ChargeLoopRes').
        """
        if not isinstance(obj, dict) or len(obj) != 1:
            return ParseResult.failure(
                MalformedFieldError(
                    "", "Expected a JSON object with exactly one message name key"
                )
            )

        ((msg_name, body),) = obj.items()
        msg_type = get_msg_type(msg_name)
        if msg_type is None:
            logger.error(f"{msg_name} is not a known ISO 15118-20 message")
            return ParseResult.failure(
                MalformedFieldError(msg_name, "Unknown message name")
            )

        return self.parse(msg_type, body)

    def _apply_post_parse(self, obj: Dict[str, Any], message: M) -> M:
        if self.post_parse is None:
            return message
        try:
            return self.post_parse(obj, message)
        except Exception:
            logger.exception(
                f"post_parse hook failed for {type(message).__name__}, "
                "continuing with the parsed message"
            )
            return message

    def _parse_model(self, model_type: Type[M], obj: Any, path: str) -> M:
        if not isinstance(obj, dict):
            raise MalformedFieldError(
                path or model_type.__name__,
                f"Expected a JSON object, got {type(obj).__name__}",
            )

        descriptors = describe(model_type)
        kwargs: Dict[str, Any] = {}

        for field in descriptors:
            if field.is_choice or not field.required:
                continue
            value = obj.get(field.alias)
            if value is None:
                raise MissingMandatoryFieldError(_join(path, field.alias))
            kwargs[field.alias] = self._decode_field(field, value, path)

        for field in descriptors:
            if field.is_choice or field.required:
                continue
            value = obj.get(field.alias)
            if value is not None:
                kwargs[field.alias] = self._decode_field(field, value, path)

        known_keys = set(kwargs)
        for field in descriptors:
            if not field.is_choice:
                known_keys.add(field.alias)
                continue
            for member in field.group.members:
                known_keys.add(member.alias)
                value = obj.get(member.alias)
                if value is None:
                    continue
                member_path = _join(path, member.alias)
                logger.log(TRACE, f"Decoding choice member {member_path}")
                kwargs[member.alias] = self._decode(
                    member.annotation, value, member_path
                )

        unknown_keys = [key for key in obj if key not in known_keys]
        if unknown_keys:
            if shared_settings[SettingKey.REJECT_UNKNOWN_FIELDS]:
                raise MalformedFieldError(
                    _join(path, unknown_keys[0]),
                    f"Unknown key for {model_type.__name__}",
                )
            logger.debug(
                f"Ignoring unknown keys {unknown_keys} of {model_type.__name__}"
            )

        try:
            return model_type(**kwargs)
        except ValidationError as exc:
            raise self._to_malformed(model_type, exc, path) from exc

    def _decode_field(self, field: FieldDescriptor, value: Any, path: str) -> Any:
        field_path = _join(path, field.alias)
        logger.log(TRACE, f"Decoding {field_path}")
        return self._decode(field.annotation, value, field_path)

    def _decode(self, annotation: Any, value: Any, path: str) -> Any:
        """
        Turns the JSON value into what the field's pydantic validation expects:
        nested elements become model instances, arrays become tuples and
        Base64 strings become bytes. Scalars must already have the JSON type
        of the field (integer, boolean or string), their value constraints
        are left for pydantic.
        """
        annotation = _unwrap(annotation)

        if _is_model_type(annotation):
            return self._parse_model(annotation, value, path)

        if get_origin(annotation) is tuple:
            if not isinstance(value, list):
                raise MalformedFieldError(
                    path, f"Expected a JSON array, got {type(value).__name__}"
                )
            item_type = get_args(annotation)[0]
            return tuple(
                self._decode(item_type, item, _join(path, index))
                for index, item in enumerate(value)
            )

        if annotation is bytes:
            if not isinstance(value, str):
                raise MalformedFieldError(
                    path, f"Expected a Base64 string, got {type(value).__name__}"
                )
            try:
                return b64decode(value, validate=True)
            except binascii.Error as exc:
                raise MalformedFieldError(path, f"Invalid Base64: {exc}") from exc

        expected = _json_type_name(annotation)
        if expected and not _is_json_type(annotation, value):
            raise MalformedFieldError(
                path, f"Expected a JSON {expected}, got {type(value).__name__}"
            )
        return value

    @staticmethod
    def _to_malformed(
        model_type: Type[BaseModel], exc: ValidationError, path: str
    ) -> MalformedFieldError:
        error = exc.errors()[0]
        aliases = {field.name: field.alias for field in describe(model_type)}
        error_path = path
        for index, key in enumerate(error["loc"]):
            if index == 0 and isinstance(key, str):
                key = aliases.get(key, key)
            error_path = _join(error_path, key)
        return MalformedFieldError(error_path or model_type.__name__, error["msg"])

    # ---------------------------------------------------------- serialization

    def serialize(self, message: BaseModel) -> Dict[str, Any]:
        """
        Returns the JSON object of a message: the mandatory fields, the optional
        fields that are present (absent fields and empty arrays are left out,
        never written as null) and the selected member of each choice group
        under the member's own key.
        """
        obj = self._encode_model(message)

        if self.post_serialize is not None:
            try:
                obj = self.post_serialize(message, obj)
            except Exception:
                logger.exception(
                    f"post_serialize hook failed for {type(message).__name__}, "
                    "continuing with the serialized object"
                )

        if shared_settings[SettingKey.MESSAGE_LOG_JSON]:
            logger.info(f"Serialized {type(message).__name__}: {json.dumps(obj)}")

        return obj

    def to_json(self, message: BaseModel) -> str:
        return json.dumps(self.serialize(message))

    def serialize_named(self, message: V2GMessage) -> Dict[str, Any]:
        """Wraps the JSON object in a {"<MessageName>": {...}} envelope"""
        return {message.message_name(): self.serialize(message)}

    def _encode_model(self, model: BaseModel) -> Dict[str, Any]:
        descriptors = describe(type(model))
        obj: Dict[str, Any] = {}

        for field in descriptors:
            if field.required and not field.is_choice:
                obj[field.alias] = self._encode(getattr(model, field.name))

        for field in descriptors:
            if field.required or field.is_choice:
                continue
            value = getattr(model, field.name)
            if value is None or value == ():
                continue
            obj[field.alias] = self._encode(value)

        for field in descriptors:
            if not field.is_choice:
                continue
            choice = getattr(model, field.name)
            if choice is None:
                continue
            member = field.group.member(choice.member)
            obj[member.alias] = self._encode(choice.value)

        return obj

    def _encode(self, value: Any) -> Any:
        if isinstance(value, PydanticBaseModel):
            return self._encode_model(value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, bytes):
            return b64encode(value).decode("ascii")
        if isinstance(value, (tuple, list)):
            return [self._encode(item) for item in value]
        if value is None or isinstance(value, (bool, int, float)):
            return value
        # Domain primitives and URLs are written as plain strings
        return str(value)
