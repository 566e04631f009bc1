"""
The complete set of ISO 15118-20 messages this library knows about.

'Request' and 'Response' are the sum types of all request and response
messages. Each response type answers exactly one request type (see
V2GResponse.request_type), which RESPONSE_TYPES maps from request to response.
MESSAGE_TYPES maps the XSD message name (e.g. 'AC_ChargeLoopReq') to its
class and is what the named JSON envelope is dispatched with.
"""
from typing import Dict, Optional, Type, Union

from iso15118json.messages.iso15118_20.ac import (
    ACChargeLoopReq,
    ACChargeLoopRes,
    ACChargeParameterDiscoveryReq,
    ACChargeParameterDiscoveryRes,
)
from iso15118json.messages.iso15118_20.common_messages import (
    AuthorizationReq,
    AuthorizationRes,
    AuthorizationSetupReq,
    AuthorizationSetupRes,
    CertificateInstallationReq,
    CertificateInstallationRes,
    MeteringConfirmationReq,
    MeteringConfirmationRes,
    PowerDeliveryReq,
    PowerDeliveryRes,
    ScheduleExchangeReq,
    ScheduleExchangeRes,
    ServiceDetailReq,
    ServiceDetailRes,
    ServiceDiscoveryReq,
    ServiceDiscoveryRes,
    ServiceSelectionReq,
    ServiceSelectionRes,
    SessionSetupReq,
    SessionSetupRes,
    SessionStopReq,
    SessionStopRes,
    VehicleCheckInReq,
    VehicleCheckInRes,
    VehicleCheckOutReq,
    VehicleCheckOutRes,
)
from iso15118json.messages.iso15118_20.common_types import (
    V2GMessage,
    V2GRequest,
    V2GResponse,
)
from iso15118json.messages.iso15118_20.dc import (
    DCCableCheckReq,
    DCCableCheckRes,
    DCChargeLoopReq,
    DCChargeLoopRes,
    DCChargeParameterDiscoveryReq,
    DCChargeParameterDiscoveryRes,
    DCPreChargeReq,
    DCPreChargeRes,
    DCWeldingDetectionReq,
    DCWeldingDetectionRes,
)

Request = Union[
    SessionSetupReq,
    AuthorizationSetupReq,
    AuthorizationReq,
    ServiceDiscoveryReq,
    ServiceDetailReq,
    ServiceSelectionReq,
    ScheduleExchangeReq,
    PowerDeliveryReq,
    MeteringConfirmationReq,
    SessionStopReq,
    CertificateInstallationReq,
    VehicleCheckInReq,
    VehicleCheckOutReq,
    ACChargeParameterDiscoveryReq,
    ACChargeLoopReq,
    DCChargeParameterDiscoveryReq,
    DCChargeLoopReq,
    DCCableCheckReq,
    DCPreChargeReq,
    DCWeldingDetectionReq,
]

Response = Union[
    SessionSetupRes,
    AuthorizationSetupRes,
    AuthorizationRes,
    ServiceDiscoveryRes,
    ServiceDetailRes,
    ServiceSelectionRes,
    ScheduleExchangeRes,
    PowerDeliveryRes,
    MeteringConfirmationRes,
    SessionStopRes,
    CertificateInstallationRes,
    VehicleCheckInRes,
    VehicleCheckOutRes,
    ACChargeParameterDiscoveryRes,
    ACChargeLoopRes,
    DCChargeParameterDiscoveryRes,
    DCChargeLoopRes,
    DCCableCheckRes,
    DCPreChargeRes,
    DCWeldingDetectionRes,
]

REQUEST_TYPES = Request.__args__
RESPONSE_TYPES_LIST = Response.__args__

RESPONSE_TYPES: Dict[Type[V2GRequest], Type[V2GResponse]] = {
    res_type.request_type: res_type for res_type in RESPONSE_TYPES_LIST
}

MESSAGE_TYPES: Dict[str, Type[V2GMessage]] = {
    msg_type.message_name(): msg_type
    for msg_type in REQUEST_TYPES + RESPONSE_TYPES_LIST
}


def get_msg_type(msg_name: str) -> Optional[Type[V2GMessage]]:
    """Returns the message class for an XSD message name, if there is one"""
    return MESSAGE_TYPES.get(msg_name)


def response_type_for(request: V2GRequest) -> Type[V2GResponse]:
    """
    Returns the response type that answers the given request.

    Raises:
        TypeError, if the request is not a known ISO 15118-20 request
    """
    try:
        return RESPONSE_TYPES[type(request)]
    except KeyError as exc:
        raise TypeError(
            f"{type(request).__name__} is not an ISO 15118-20 request"
        ) from exc
