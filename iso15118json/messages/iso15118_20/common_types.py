"""
This modules contains classes which implement the elements of the
ISO 15118-20 XSD file V2G_CI_CommonTypes.xsd.
These are the data types used by both the header and the body elements of the
V2GMessages exchanged between the EVCC and the SECC.

All classes are ultimately subclassed from the project's BaseModel, so they
are immutable and validated when instantiated. Pydantic's Field class maps
each attribute to its lowerCamelCase JSON key via the 'alias' attribute.
"""
from abc import ABC
from typing import ClassVar, Optional, Type

from pydantic import Field, PrivateAttr
from typing_extensions import Annotated

from iso15118json.exceptions import SemanticConstraintError
from iso15118json.messages import BaseModel
from iso15118json.messages.bounded import bounded_set
from iso15118json.messages.choice import Choice
from iso15118json.messages.enums import (
    INT_8_MAX,
    INT_8_MIN,
    INT_16_MAX,
    INT_16_MIN,
    UINT_16_MAX,
    UINT_32_MAX,
    UINT_64_MAX,
    ProtocolEnum,
)
from iso15118json.messages.primitives import SessionID
from iso15118json.messages.xmldsig import Signature

# Check Annex C.1 or V2G_CI_CommonTypes.xsd
# certificateType (a DER encoded X.509 certificate)
Certificate = Annotated[bytes, Field(max_length=1600)]
# identifierType
Identifier = Annotated[str, Field(min_length=1, max_length=255)]
# numericIDType
NumericID = Annotated[int, Field(ge=1, le=UINT_32_MAX)]
# nameType
Name = Annotated[str, Field(min_length=1, max_length=80)]
# descriptionType
Description = Annotated[str, Field(max_length=160)]
# XSD type byte with value range [0..100]
Percentage = Annotated[int, Field(ge=0, le=100)]
# XSD type unsignedInt
UInt32 = Annotated[int, Field(ge=0, le=UINT_32_MAX)]
# XSD type unsignedShort
UInt16 = Annotated[int, Field(ge=0, le=UINT_16_MAX)]
# XSD type unsignedLong, e.g. the number of seconds since epoch
UInt64 = Annotated[int, Field(ge=0, le=UINT_64_MAX)]


class MessageHeader(BaseModel):
    """See section 8.3.3 in ISO 15118-20"""

    session_id: SessionID = Field(..., alias="sessionId")
    timestamp: UInt64 = Field(..., alias="timestamp")
    signature: Optional[Signature] = Field(None, alias="signature")


class V2GMessage(BaseModel, ABC):
    """
    See section 8.3 in ISO 15118-20.
    The base of all messages, carrying the header. Unlike ISO 15118-2, the
    header is part of each request and response message.
    """

    # The message name as given in the XSD schema, if it differs from the
    # class name (e.g. 'AC_ChargeLoopReq')
    xsd_name: ClassVar[Optional[str]] = None

    header: MessageHeader = Field(..., alias="messageHeader")

    @classmethod
    def message_name(cls) -> str:
        return cls.xsd_name or cls.__name__

    def __str__(self):
        return self.message_name()


class V2GRequest(V2GMessage, ABC):
    """Base class for all V2GMessages that are request messages"""


class ResponseCode(ProtocolEnum):
    """See page 465 of Annex A in ISO 15118-20"""

    OK = "OK"
    OK_CERT_EXPIRES_SOON = "OK_CertificateExpiresSoon"
    OK_NEW_SESSION_ESTABLISHED = "OK_NewSessionEstablished"
    OK_OLD_SESSION_JOINED = "OK_OldSessionJoined"
    OK_POWER_TOLERANCE_CONFIRMED = "OK_PowerToleranceConfirmed"
    WARN_AUTH_SELECTION_INVALID = "WARNING_AuthorizationSelectionInvalid"
    WARN_CERT_EXPIRED = "WARNING_CertificateExpired"
    WARN_CERT_NOT_YET_VALID = "WARNING_CertificateNotYetValid"
    WARN_CERT_REVOKED = "WARNING_CertificateRevoked"
    WARN_CERT_VALIDATION_ERROR = "WARNING_CertificateValidationError"
    WARN_CHALLENGE_INVALID = "WARNING_ChallengeInvalid"
    WARN_EIM_AUTH_FAILED = "WARNING_EIMAuthorizationFailure"
    WARN_EMSP_UNKNOWN = "WARNING_eMSPUnknown"
    WARN_EV_POWER_PROFILE_VIOLATION = "WARNING_EVPowerProfileViolation"
    WARN_GENERAL_PNC_AUTH_ERROR = "WARNING_GeneralPnCAuthorizationError"
    WARN_NO_CERT_AVAILABLE = "WARNING_NoCertificateAvailable"
    WARN_NO_CONTRACT_MATCHING_PCID_FOUND = "WARNING_NoContractMatchingPCIDFound"
    WARN_POWER_TOLERANCE_NOT_CONFIRMED = "WARNING_PowerToleranceNotConfirmed"
    WARN_SCHEDULE_RENEGOTIATION_FAILED = "WARNING_ScheduleRenegotiationFailed"
    WARN_STANDBY_NOT_ALLOWED = "WARNING_StandbyNotAllowed"
    WARN_WPT = "WARNING_WPT"
    FAILED = "FAILED"
    FAILED_ASSOCIATION_ERROR = "FAILED_AssociationError"
    FAILED_CONTACTOR_ERROR = "FAILED_ContactorError"
    FAILED_EV_POWER_PROFILE_INVALID = "FAILED_EVPowerProfileInvalid"
    FAILED_EV_POWER_PROFILE_VIOLATION = "FAILED_EVPowerProfileViolation"
    FAILED_METERING_SIGNATURE_NOT_VALID = "FAILED_MeteringSignatureNotValid"
    FAILED_NO_ENERGY_TRANSFER_SERVICE_SELECTED = (
        "FAILED_NoEnergyTransferServiceSelected"
    )
    FAILED_NO_SERVICE_RENEGOTIATION_SUPPORTED = "FAILED_NoServiceRenegotiationSupported"
    FAILED_PAUSE_NOT_ALLOWED = "FAILED_PauseNotAllowed"
    FAILED_POWER_DELIVERY_NOT_APPLIED = "FAILED_PowerDeliveryNotApplied"
    FAILED_POWER_TOLERANCE_NOT_CONFIRMED = "FAILED_PowerToleranceNotConfirmed"
    FAILED_SCHEDULE_RENEGOTIATION = "FAILED_ScheduleRenegotiation"
    FAILED_SCHEDULE_SELECTION_INVALID = "FAILED_ScheduleSelectionInvalid"
    FAILED_SEQUENCE_ERROR = "FAILED_SequenceError"
    FAILED_SERVICE_ID_INVALID = "FAILED_ServiceIDInvalid"
    FAILED_SERVICE_SELECTION_INVALID = "FAILED_ServiceSelectionInvalid"
    FAILED_SIGNATURE_ERROR = "FAILED_SignatureError"
    FAILED_UNKNOWN_SESSION = "FAILED_UnknownSession"
    FAILED_WRONG_CHARGE_PARAMETER = "FAILED_WrongChargeParameter"

    @property
    def is_ok(self) -> bool:
        return self.value.startswith("OK")

    @property
    def is_warning(self) -> bool:
        return self.value.startswith("WARNING")

    @property
    def is_failure(self) -> bool:
        return self.value.startswith("FAILED")


class V2GResponse(V2GMessage, ABC):
    """
    A base class for all V2GMessages that are response messages.

    Each concrete response names the request type it answers in
    'request_type'. correlate() returns a copy of a response bound to the
    request instance it answers, and answering() builds a bound response.
    The bound request is not part of the response's wire form and is ignored
    when comparing responses.
    """

    request_type: ClassVar[Optional[Type[V2GRequest]]] = None

    response_code: ResponseCode = Field(..., alias="responseCode")

    _request: Optional[V2GRequest] = PrivateAttr(default=None)

    @property
    def request(self) -> Optional[V2GRequest]:
        return self._request

    @classmethod
    def answers(cls, request: V2GRequest) -> bool:
        return cls.request_type is not None and isinstance(request, cls.request_type)

    @classmethod
    def answering(cls, request: V2GRequest, **fields) -> "V2GResponse":
        """Creates a response and binds it to the request it answers"""
        if not cls.answers(request):
            raise TypeError(
                f"{cls.message_name()} does not answer {request.message_name()}"
            )
        return cls(**fields).correlate(request)

    def correlate(self, request: V2GRequest) -> "V2GResponse":
        """
        Checks that this response fits the given request and returns a copy
        of the response bound to it. The response itself is left unchanged.

        Raises:
            TypeError, if the request is not of this response's request type
            SemanticConstraintError, if the content contradicts the request
        """
        if not self.answers(request):
            raise TypeError(
                f"{self.message_name()} does not answer {request.message_name()}"
            )
        self.check_request(request)
        bound = self.model_copy()
        bound._request = request
        return bound

    def check_request(self, request: V2GRequest):
        """Overridden by responses whose content depends on the request"""


def check_same_control_mode(
    response_mode: Optional[Choice], request_mode: Optional[Choice], group: str
):
    if response_mode is None or request_mode is None:
        return
    if response_mode.member != request_mode.member:
        raise SemanticConstraintError(
            group,
            f"Response control mode '{response_mode.member}' does not match "
            f"the requested control mode '{request_mode.member}'",
        )


class ChargeParameterDiscoveryReq(V2GRequest, ABC):
    """
    A base class for AC_ChargeParameterDiscoveryReq and
    DC_ChargeParameterDiscoveryReq
    """


class ChargeParameterDiscoveryRes(V2GResponse, ABC):
    """
    A base class for AC_ChargeParameterDiscoveryRes and
    DC_ChargeParameterDiscoveryRes. Bidirectional parameters may only be
    returned for bidirectional parameters of the EV and vice versa.
    """

    def check_request(self, request: V2GRequest):
        requested_bpt = request.energy_transfer_mode.member.startswith("bpt")
        offered_bpt = self.energy_transfer_mode.member.startswith("bpt")
        if requested_bpt != offered_bpt:
            raise SemanticConstraintError(
                "energyTransferMode",
                f"{self.message_name()} carries "
                f"{'BPT' if offered_bpt else 'unidirectional'} parameters, but "
                f"{'BPT' if requested_bpt else 'unidirectional'} parameters "
                "were requested",
            )


class RationalNumber(BaseModel):
    """See section 8.3.5.3.8 in ISO 15118-20"""

    # XSD type byte with value range [-128..127]
    exponent: int = Field(..., ge=INT_8_MIN, le=INT_8_MAX, alias="exponent")
    # XSD type short (16 bit integer) with value range [-32768..32767]
    value: int = Field(..., ge=INT_16_MIN, le=INT_16_MAX, alias="value")

    def get_decimal_value(self) -> float:
        return self.value * 10**self.exponent


class EVSENotification(ProtocolEnum):
    """See section 8.3.5.3.26 in ISO 15118-20"""

    PAUSE = "Pause"
    EXIT_STANDBY = "ExitStandby"
    TERMINATE = "Terminate"
    METERING_CONFIRMATION = "MeteringConfirmation"
    SCHEDULE_RENEGOTIATION = "ScheduleRenegotiation"
    SERVICE_RENEGOTIATION = "ServiceRenegotiation"


class EVSEStatus(BaseModel):
    """See section 8.3.5.3.26 in ISO 15118-20"""

    notification_max_delay: UInt16 = Field(..., alias="notificationMaxDelay")
    evse_notification: EVSENotification = Field(..., alias="evseNotification")


class DisplayParameters(BaseModel):
    """See section 8.3.5.3.28 in ISO 15118-20"""

    present_soc: Optional[Percentage] = Field(None, alias="presentSoc")
    min_soc: Optional[Percentage] = Field(None, alias="minimumSoc")
    target_soc: Optional[Percentage] = Field(None, alias="targetSoc")
    max_soc: Optional[Percentage] = Field(None, alias="maximumSoc")
    remaining_time_to_min_soc: Optional[UInt32] = Field(
        None, alias="remainingTimeToMinimumSoc"
    )
    remaining_time_to_target_soc: Optional[UInt32] = Field(
        None, alias="remainingTimeToTargetSoc"
    )
    remaining_time_to_max_soc: Optional[UInt32] = Field(
        None, alias="remainingTimeToMaximumSoc"
    )
    charging_complete: Optional[bool] = Field(None, alias="chargingComplete")
    battery_energy_capacity: Optional[RationalNumber] = Field(
        None, alias="batteryEnergyCapacity"
    )
    inlet_hot: Optional[bool] = Field(None, alias="inletHot")


class ChargeLoopReq(V2GRequest, ABC):
    """
    A base class for AC_ChargeLoopReq and DC_ChargeLoopReq
    See page 464 in Annex A in ISO 15118-20
    """

    display_parameters: Optional[DisplayParameters] = Field(
        None, alias="displayParameters"
    )
    meter_info_requested: bool = Field(..., alias="meterInfoRequested")


class MeterInfo(BaseModel):
    """See section 8.3.5.3.7 in ISO 15118-20"""

    meter_id: Annotated[str, Field(min_length=1, max_length=32)] = Field(
        ..., alias="meterId"
    )
    charged_energy_reading_wh: UInt64 = Field(..., alias="chargedEnergyReadingWh")
    bpt_discharged_energy_reading_wh: Optional[UInt64] = Field(
        None, alias="bptDischargedEnergyReadingWh"
    )
    capacitive_energy_reading_varh: Optional[UInt64] = Field(
        None, alias="capacitiveEnergyReadingVarh"
    )
    bpt_inductive_energy_reading_varh: Optional[UInt64] = Field(
        None, alias="bptInductiveEnergyReadingVarh"
    )
    meter_signature: Optional[Annotated[bytes, Field(max_length=64)]] = Field(
        None, alias="meterSignature"
    )
    meter_status: Optional[int] = Field(
        None, ge=INT_16_MIN, le=INT_16_MAX, alias="meterStatus"
    )
    meter_timestamp: Optional[UInt64] = Field(None, alias="meterTimestamp")


class DetailedCost(BaseModel):
    """See section 8.3.5.3.61 in ISO 15118-20"""

    amount: RationalNumber = Field(..., alias="amount")
    cost_per_unit: RationalNumber = Field(..., alias="costPerUnit")


class DetailedTax(BaseModel):
    """See section 8.3.5.3.60 in ISO 15118-20"""

    tax_rule_id: NumericID = Field(..., alias="taxRuleId")
    amount: RationalNumber = Field(..., alias="amount")


class Receipt(BaseModel):
    """See section 8.3.5.3.59 in ISO 15118-20"""

    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    energy_costs: Optional[DetailedCost] = Field(None, alias="energyCosts")
    occupancy_costs: Optional[DetailedCost] = Field(None, alias="occupancyCosts")
    additional_services_costs: Optional[DetailedCost] = Field(
        None, alias="additionalServicesCosts"
    )
    overstay_costs: Optional[DetailedCost] = Field(None, alias="overstayCosts")
    tax_costs: Optional[bounded_set(DetailedTax, 10)] = Field(None, alias="taxCosts")


class ChargeLoopRes(V2GResponse, ABC):
    """
    A base class for AC_ChargeLoopRes and DC_ChargeLoopRes
    See page 464 in Annex A in ISO 15118-20
    """

    evse_status: Optional[EVSEStatus] = Field(None, alias="evseStatus")
    meter_info: Optional[MeterInfo] = Field(None, alias="meterInfo")
    receipt: Optional[Receipt] = Field(None, alias="receipt")

    def check_request(self, request: V2GRequest):
        check_same_control_mode(
            self.control_mode, request.control_mode, "CLResControlMode"
        )


class ScheduledChargeLoopReqParams(BaseModel, ABC):
    """
    A base class for Scheduled_AC_CLReqControlMode and
    Scheduled_DC_CLReqControlMode
    See page 464 of Annex A in ISO 15118-20
    """

    ev_target_energy_request: Optional[RationalNumber] = Field(
        None, alias="evTargetEnergyRequest"
    )
    ev_max_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMaximumEnergyRequest"
    )
    ev_min_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMinimumEnergyRequest"
    )


class ScheduledChargeLoopResParams(BaseModel, ABC):
    """
    A base class for Scheduled_AC_CLResControlMode and
    Scheduled_DC_CLResControlMode
    See page 464 of Annex A in ISO 15118-20
    """


class DynamicChargeLoopReqParams(BaseModel, ABC):
    """
    A base class for Dynamic_AC_CLReqControlMode and
    Dynamic_DC_CLReqControlMode
    See page 464 of Annex A in ISO 15118-20
    """

    departure_time: Optional[UInt32] = Field(None, alias="departureTime")
    ev_target_energy_request: RationalNumber = Field(
        ..., alias="evTargetEnergyRequest"
    )
    ev_max_energy_request: RationalNumber = Field(..., alias="evMaximumEnergyRequest")
    ev_min_energy_request: RationalNumber = Field(..., alias="evMinimumEnergyRequest")


class DynamicChargeLoopResParams(BaseModel, ABC):
    """
    A base class for Dynamic_AC_CLResControlMode and
    Dynamic_DC_CLResControlMode
    See page 465 of Annex A in ISO 15118-20
    """

    departure_time: Optional[UInt32] = Field(None, alias="departureTime")
    min_soc: Optional[Percentage] = Field(None, alias="minimumSoc")
    target_soc: Optional[Percentage] = Field(None, alias="targetSoc")
    ack_max_delay: Optional[UInt16] = Field(None, alias="ackMaxDelay")


class Processing(ProtocolEnum):
    """
    See usage in sections 8.3.4.3.3.2 (AuthorizationRes),
    8.3.4.3.7.3 (ScheduleExchangeRes), 8.3.4.3.8.2 (PowerDeliveryReq),
    8.3.4.3.9.3 (CertificateInstallationRes),
    8.3.4.5.3.3 (DC_CableCheckRes), 8.3.4.5.4.2 (DC_PreChargeReq) and
    8.3.4.5.6.2 (DC_WeldingDetectionReq) in ISO 15118-20
    """

    FINISHED = "Finished"
    ONGOING = "Ongoing"
    WAITING_FOR_CUSTOMER = "Ongoing_WaitingForCustomerInteraction"
