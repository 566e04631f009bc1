"""
This modules contains classes which implement the elements of the
ISO 15118-20 XSD file V2G_CI_CommonMessages.xsd.
These are the V2GMessages exchanged between the EVCC and the SECC regardless
of the energy transfer mode, plus the complex types they are built from.

The list wrapper types of the XSD schema (e.g. ServiceIDListType) are not
modelled as classes of their own, the repeated elements are collection fields
with a plural key instead (e.g. 'supportedServiceIds').
"""
from typing import Optional

from pydantic import Field, model_validator
from typing_extensions import Annotated

from iso15118json.exceptions import MissingChoiceError, SemanticConstraintError
from iso15118json.messages import BaseModel
from iso15118json.messages.bounded import bounded_list, bounded_set
from iso15118json.messages.choice import Choice, ChoiceGroup, ChoiceMember
from iso15118json.messages.enums import (
    INT_8_MAX,
    INT_8_MIN,
    INT_16_MAX,
    INT_16_MIN,
    UINT_8_MAX,
    AuthEnum,
    ProtocolEnum,
)
from iso15118json.messages.iso15118_20.common_types import (
    Certificate,
    Description,
    EVSEStatus,
    Identifier,
    MeterInfo,
    Name,
    NumericID,
    Percentage,
    Processing,
    RationalNumber,
    Receipt,
    UInt16,
    UInt32,
    UInt64,
    V2GRequest,
    V2GResponse,
    check_same_control_mode,
)
from iso15118json.messages.primitives import (
    EMAID,
    EVCCID,
    EVSEID,
    ProviderID,
    SessionID,
)
from iso15118json.messages.xmldsig import X509IssuerSerial
from iso15118json.validators import validate_soc_order

# XSD type int with value range [-2147483648..2147483647]
INT_32_MIN, INT_32_MAX = -(2**31), 2**31 - 1


class ECDHCurve(ProtocolEnum):
    """
    See section 8.3.5.3.39 in ISO 15118-20.
    Elliptic curves used for the Elliptic Curve Diffie Hellman (ECDH) key
    agreement protocol."""

    SECP521 = "SECP521"
    X448 = "X448"


class CertificateChain(BaseModel):
    """See section 8.3.5.3.3 in ISO 15118-20"""

    certificate: Annotated[bytes, Field(max_length=800)] = Field(
        ..., alias="certificate"
    )
    # The order of the sub-certificates matters (issuer follows subject)
    sub_certificates: Optional[bounded_list(Certificate, 3)] = Field(
        None, alias="subCertificates"
    )


class SignedCertificateChain(BaseModel):
    """See section 8.3.5.3.4 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    id: Identifier = Field(..., alias="id")
    certificate: Annotated[bytes, Field(max_length=800)] = Field(
        ..., alias="certificate"
    )
    sub_certificates: Optional[bounded_list(Certificate, 3)] = Field(
        None, alias="subCertificates"
    )


class ContractCertificateChain(BaseModel):
    """See section 8.3.5.3.5 in ISO 15118-20"""

    certificate: Annotated[bytes, Field(max_length=800)] = Field(
        ..., alias="certificate"
    )
    sub_certificates: bounded_list(Certificate, 3, min_items=1) = Field(
        ..., alias="subCertificates"
    )


class SessionSetupReq(V2GRequest):
    """See section 8.3.4.3.1.1 in ISO 15118-20"""

    evcc_id: EVCCID = Field(..., alias="evccId")


class SessionSetupRes(V2GResponse):
    """See section 8.3.4.3.1.2 in ISO 15118-20"""

    request_type = SessionSetupReq

    evse_id: EVSEID = Field(..., alias="evseId")


class AuthorizationSetupReq(V2GRequest):
    """See section 8.3.4.3.2.1 in ISO 15118-20"""


class PnCAuthSetupResParams(BaseModel):
    """See section 8.3.5.3.34 in ISO 15118-20"""

    gen_challenge: Annotated[bytes, Field(min_length=16, max_length=16)] = Field(
        ..., alias="genChallenge"
    )
    supported_providers: Optional[bounded_set(ProviderID, 128)] = Field(
        None, alias="supportedProviders"
    )


class EIMAuthSetupResParams(BaseModel):
    """See section 8.3.5.3.33 in ISO 15118-20"""


AUTH_SETUP_RES_MODE = ChoiceGroup(
    "ASResAuthorizationMode",
    ChoiceMember("eim_as_res", EIMAuthSetupResParams, "eimAsResAuthorizationMode"),
    ChoiceMember("pnc_as_res", PnCAuthSetupResParams, "pncAsResAuthorizationMode"),
)


class AuthorizationSetupRes(V2GResponse):
    """See section 8.3.4.3.2.2 in ISO 15118-20"""

    request_type = AuthorizationSetupReq

    auth_services: bounded_set(AuthEnum, 2, min_items=1) = Field(
        ..., alias="authorizationServices"
    )
    cert_install_service: bool = Field(..., alias="certificateInstallationService")
    auth_mode: Annotated[Choice, AUTH_SETUP_RES_MODE]

    @model_validator(mode="after")
    def offered_mode_is_an_offered_service(self):
        """
        The SECC can only provide the setup parameters for an authorization
        service it offers, e.g. no PnC challenge without PnC.
        """
        service = AuthEnum.PNC if self.auth_mode.is_("pnc_as_res") else AuthEnum.EIM
        if service not in self.auth_services:
            raise SemanticConstraintError(
                "authorizationServices",
                f"{AUTH_SETUP_RES_MODE.member(self.auth_mode.member).alias} is set, "
                f"but {service.value} is not among the authorization services "
                f"{[s.value for s in self.auth_services]}",
            )
        return self


class PnCAuthReqParams(BaseModel):
    """
    See section 8.3.5.3.32 in ISO 15118-20
    PnCAuthReq = Plug and Charge Authorization Request
    """

    # An XML attribute in the XSD schema, needed to reference the element
    # in the header's signature
    id: Optional[Identifier] = Field(None, alias="id")
    gen_challenge: Annotated[bytes, Field(min_length=16, max_length=16)] = Field(
        ..., alias="genChallenge"
    )
    contract_cert_chain: ContractCertificateChain = Field(
        ..., alias="contractCertificateChain"
    )

    def __str__(self):
        # The XSD-conform name, used when signing this element
        return "PnC_AReqAuthorizationMode"


class EIMAuthReqParams(BaseModel):
    """
    See section 8.3.5.3.31 in ISO 15118-20
    EIMAuthReq = External Identification Means Authorization Request
    """


AUTH_REQ_MODE = ChoiceGroup(
    "AReqAuthorizationMode",
    ChoiceMember("eim_params", EIMAuthReqParams, "eimAReqAuthorizationMode"),
    ChoiceMember("pnc_params", PnCAuthReqParams, "pncAReqAuthorizationMode"),
)


class AuthorizationReq(V2GRequest):
    """See section 8.3.4.3.3.1 in ISO 15118-20"""

    selected_auth_service: AuthEnum = Field(..., alias="selectedAuthorizationService")
    auth_mode: Annotated[Choice, AUTH_REQ_MODE]

    @model_validator(mode="after")
    def mode_matches_selected_service(self):
        if self.selected_auth_service == AuthEnum.PNC:
            expected = "pnc_params"
        else:
            expected = "eim_params"
        if not self.auth_mode.is_(expected):
            raise SemanticConstraintError(
                "selectedAuthorizationService",
                f"selectedAuthorizationService is {self.selected_auth_service.value}"
                f" but {AUTH_REQ_MODE.member(self.auth_mode.member).alias} is set",
            )
        return self


class AuthorizationRes(V2GResponse):
    """See section 8.3.4.3.3.2 in ISO 15118-20"""

    request_type = AuthorizationReq

    evse_processing: Processing = Field(..., alias="evseProcessing")


class ServiceDiscoveryReq(V2GRequest):
    """See section 8.3.4.3.4.2 in ISO 15118-20"""

    supported_service_ids: Optional[bounded_set(UInt16, 16)] = Field(
        None, alias="supportedServiceIds"
    )


class Service(BaseModel):
    """See section 8.3.5.3.1 in ISO 15118-20"""

    service_id: UInt16 = Field(..., alias="serviceId")
    free_service: bool = Field(..., alias="freeService")


class ServiceDiscoveryRes(V2GResponse):
    """See section 8.3.4.3.4.3 in ISO 15118-20"""

    request_type = ServiceDiscoveryReq

    service_renegotiation_supported: bool = Field(
        ..., alias="serviceRenegotiationSupported"
    )
    energy_transfer_services: bounded_set(Service, 8, min_items=1) = Field(
        ..., alias="energyTransferServices"
    )
    vas_services: Optional[bounded_set(Service, 8)] = Field(None, alias="vasServices")


class ServiceDetailReq(V2GRequest):
    """See section 8.3.4.3.5.1 in ISO 15118-20"""

    service_id: UInt16 = Field(..., alias="serviceId")


PARAMETER_VALUE = ChoiceGroup(
    "ParameterValue",
    ChoiceMember("bool_value", bool, "boolValue"),
    # XSD type byte with value range [-128..127]
    ChoiceMember(
        "byte_value", Annotated[int, Field(ge=INT_8_MIN, le=INT_8_MAX)], "byteValue"
    ),
    # XSD type short with value range [-32768..32767]
    ChoiceMember(
        "short_value",
        Annotated[int, Field(ge=INT_16_MIN, le=INT_16_MAX)],
        "shortValue",
    ),
    ChoiceMember(
        "int_value", Annotated[int, Field(ge=INT_32_MIN, le=INT_32_MAX)], "intValue"
    ),
    ChoiceMember("rational_number", RationalNumber, "rationalNumber"),
    ChoiceMember("finite_str", Name, "finiteString"),
)


class Parameter(BaseModel):
    """See section 8.3.5.3.23 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    name: Name = Field(..., alias="name")
    value: Annotated[Choice, PARAMETER_VALUE]


class ParameterSet(BaseModel):
    """See section 8.3.5.3.22 in ISO 15118-20"""

    id: UInt16 = Field(..., alias="parameterSetId")
    parameters: bounded_set(Parameter, 32, min_items=1) = Field(
        ..., alias="parameters"
    )


class ServiceDetailRes(V2GResponse):
    """See section 8.3.4.3.5.2 in ISO 15118-20"""

    request_type = ServiceDetailReq

    service_id: UInt16 = Field(..., alias="serviceId")
    parameter_sets: bounded_set(ParameterSet, 32, min_items=1) = Field(
        ..., alias="parameterSets"
    )

    def check_request(self, request: ServiceDetailReq):
        if self.service_id != request.service_id:
            raise SemanticConstraintError(
                "serviceId",
                f"ServiceDetailRes describes service {self.service_id}, "
                f"but service {request.service_id} was requested",
            )


class SelectedService(BaseModel):
    """See section 8.3.5.3.25 in ISO 15118-20"""

    service_id: UInt16 = Field(..., alias="serviceId")
    parameter_set_id: UInt16 = Field(..., alias="parameterSetId")


class ServiceSelectionReq(V2GRequest):
    """See section 8.3.4.3.6.2 in ISO 15118-20"""

    selected_energy_service: SelectedService = Field(
        ..., alias="selectedEnergyTransferService"
    )
    selected_vas_list: Optional[bounded_set(SelectedService, 16)] = Field(
        None, alias="selectedVasServices"
    )


class ServiceSelectionRes(V2GResponse):
    """See section 8.3.4.3.6.3 in ISO 15118-20"""

    request_type = ServiceSelectionReq


class EVPowerScheduleEntry(BaseModel):
    """See section 8.3.5.3.44 in ISO 15118-20"""

    duration: UInt32 = Field(..., alias="duration")
    power: RationalNumber = Field(..., alias="power")


class EVPowerSchedule(BaseModel):
    """See section 8.3.5.3.42 in ISO 15118-20"""

    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    entries: bounded_list(EVPowerScheduleEntry, 1024, min_items=1) = Field(
        ..., alias="evPowerScheduleEntries"
    )


class EVPriceRule(BaseModel):
    """See section 8.3.5.3.48 in ISO 15118-20"""

    energy_fee: RationalNumber = Field(..., alias="energyFee")
    power_range_start: RationalNumber = Field(..., alias="powerRangeStart")


class EVPriceRuleStack(BaseModel):
    """See section 8.3.5.3.47 in ISO 15118-20"""

    duration: UInt32 = Field(..., alias="duration")
    ev_price_rules: bounded_list(EVPriceRule, 8, min_items=1) = Field(
        ..., alias="evPriceRules"
    )


class EVAbsolutePriceSchedule(BaseModel):
    """See section 8.3.5.3.45 in ISO 15118-20"""

    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    currency: Annotated[str, Field(min_length=1, max_length=3)] = Field(
        ..., alias="currency"
    )
    price_algorithm: Identifier = Field(..., alias="priceAlgorithm")
    ev_price_rule_stacks: bounded_list(EVPriceRuleStack, 1024, min_items=1) = Field(
        ..., alias="evPriceRuleStacks"
    )


class EVEnergyOffer(BaseModel):
    """See section 8.3.5.3.41 in ISO 15118-20"""

    ev_power_schedule: EVPowerSchedule = Field(..., alias="evPowerSchedule")
    ev_absolute_price_schedule: EVAbsolutePriceSchedule = Field(
        ..., alias="evAbsolutePriceSchedule"
    )


class ScheduledScheduleExchangeReqParams(BaseModel):
    """See section 8.3.5.3.14 in ISO 15118-20"""

    departure_time: Optional[UInt32] = Field(None, alias="departureTime")
    ev_target_energy_request: Optional[RationalNumber] = Field(
        None, alias="evTargetEnergyRequest"
    )
    ev_max_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMaximumEnergyRequest"
    )
    ev_min_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMinimumEnergyRequest"
    )
    ev_energy_offer: Optional[EVEnergyOffer] = Field(None, alias="evEnergyOffer")


class DynamicScheduleExchangeReqParams(BaseModel):
    """See section 8.3.5.3.13 in ISO 15118-20"""

    departure_time: UInt32 = Field(..., alias="departureTime")
    min_soc: Optional[Percentage] = Field(None, alias="minimumSoc")
    target_soc: Optional[Percentage] = Field(None, alias="targetSoc")
    ev_target_energy_request: RationalNumber = Field(
        ..., alias="evTargetEnergyRequest"
    )
    ev_max_energy_request: RationalNumber = Field(..., alias="evMaximumEnergyRequest")
    ev_min_energy_request: RationalNumber = Field(..., alias="evMinimumEnergyRequest")
    ev_max_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMaximumV2xEnergyRequest"
    )
    ev_min_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMinimumV2xEnergyRequest"
    )

    @model_validator(mode="after")
    def both_v2x_fields_must_be_set(self):
        if (self.ev_max_v2x_energy_request is None) != (
            self.ev_min_v2x_energy_request is None
        ):
            raise SemanticConstraintError(
                "evMaximumV2xEnergyRequest",
                "evMaximumV2xEnergyRequest and evMinimumV2xEnergyRequest must "
                "either be both set or both omitted. Only one of them was set",
                rule="V2G20-2681",
            )
        return self


SE_REQ_CONTROL_MODE = ChoiceGroup(
    "SEReqControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledScheduleExchangeReqParams,
        "scheduledSeReqControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicScheduleExchangeReqParams, "dynamicSeReqControlMode"
    ),
)


class ScheduleExchangeReq(V2GRequest):
    """See section 8.3.4.3.7.2 in ISO 15118-20"""

    max_supporting_points: int = Field(
        ..., ge=12, le=1024, alias="maximumSupportingPoints"
    )
    control_mode: Annotated[Choice, SE_REQ_CONTROL_MODE]


class PowerScheduleEntry(BaseModel):
    """See section 8.3.5.3.20 in ISO 15118-20"""

    duration: UInt32 = Field(..., alias="duration")
    power: RationalNumber = Field(..., alias="power")
    power_l2: Optional[RationalNumber] = Field(None, alias="powerL2")
    power_l3: Optional[RationalNumber] = Field(None, alias="powerL3")


class PowerSchedule(BaseModel):
    """See section 8.3.5.3.18 in ISO 15118-20"""

    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    available_energy: Optional[RationalNumber] = Field(None, alias="availableEnergy")
    power_tolerance: Optional[RationalNumber] = Field(None, alias="powerTolerance")
    entries: bounded_list(PowerScheduleEntry, 1024, min_items=1) = Field(
        ..., alias="powerScheduleEntries"
    )


class PriceLevelScheduleEntry(BaseModel):
    """See section 8.3.5.3.64 in ISO 15118-20"""

    duration: UInt32 = Field(..., alias="duration")
    # XSD type unsignedByte with value range [0..255]
    price_level: int = Field(..., ge=0, le=UINT_8_MAX, alias="priceLevel")


class PriceLevelSchedule(BaseModel):
    """See sections 8.3.5.3.49 and 8.3.5.3.62 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    id: Optional[Identifier] = Field(None, alias="id")
    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    schedule_id: NumericID = Field(..., alias="priceScheduleId")
    schedule_description: Optional[Description] = Field(
        None, alias="priceScheduleDescription"
    )
    # XSD type unsignedByte with value range [0..255]
    num_price_levels: int = Field(..., ge=0, le=UINT_8_MAX, alias="numberOfPriceLevels")
    entries: bounded_list(PriceLevelScheduleEntry, 1024, min_items=1) = Field(
        ..., alias="priceLevelScheduleEntries"
    )


class TaxRule(BaseModel):
    """See section 8.3.5.3.51 in ISO 15118-20"""

    tax_rule_id: NumericID = Field(..., alias="taxRuleId")
    tax_rule_name: Optional[Name] = Field(None, alias="taxRuleName")
    tax_rate: RationalNumber = Field(..., alias="taxRate")
    tax_included_in_price: Optional[bool] = Field(None, alias="taxIncludedInPrice")
    applies_to_energy_fee: bool = Field(..., alias="appliesToEnergyFee")
    applies_to_parking_fee: bool = Field(..., alias="appliesToParkingFee")
    applies_to_overstay_fee: bool = Field(..., alias="appliesToOverstayFee")
    applies_to_min_max_cost: bool = Field(..., alias="appliesMinimumMaximumCost")


class PriceRule(BaseModel):
    """See section 8.3.5.3.54 in ISO 15118-20"""

    energy_fee: RationalNumber = Field(..., alias="energyFee")
    parking_fee: Optional[RationalNumber] = Field(None, alias="parkingFee")
    parking_fee_period: Optional[UInt32] = Field(None, alias="parkingFeePeriod")
    carbon_dioxide_emission: Optional[UInt16] = Field(
        None, alias="carbonDioxideEmission"
    )
    # XSD type unsignedByte with value range [0..255]
    renewable_energy_percentage: Optional[int] = Field(
        None, ge=0, le=UINT_8_MAX, alias="renewableGenerationPercentage"
    )
    power_range_start: RationalNumber = Field(..., alias="powerRangeStart")


class PriceRuleStack(BaseModel):
    """See section 8.3.5.3.53 in ISO 15118-20"""

    duration: UInt32 = Field(..., alias="duration")
    price_rules: bounded_list(PriceRule, 8, min_items=1) = Field(
        ..., alias="priceRules"
    )


class OverstayRule(BaseModel):
    """See section 8.3.5.3.56 in ISO 15118-20"""

    description: Optional[Description] = Field(None, alias="overstayRuleDescription")
    start_time: UInt32 = Field(..., alias="startTime")
    fee: RationalNumber = Field(..., alias="overstayFee")
    fee_period: UInt32 = Field(..., alias="overstayFeePeriod")


class OverstayRules(BaseModel):
    """See section 8.3.5.3.55 in ISO 15118-20"""

    time_threshold: Optional[UInt32] = Field(None, alias="overstayTimeThreshold")
    power_threshold: Optional[RationalNumber] = Field(
        None, alias="overstayPowerThreshold"
    )
    rules: bounded_set(OverstayRule, 5, min_items=1) = Field(
        ..., alias="overstayRules"
    )


class AdditionalService(BaseModel):
    """See section 8.3.5.3.58 in ISO 15118-20"""

    service_name: Name = Field(..., alias="serviceName")
    service_fee: RationalNumber = Field(..., alias="serviceFee")


class AbsolutePriceSchedule(BaseModel):
    """See sections 8.3.5.3.45 and 8.3.5.3.49 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    id: Optional[Identifier] = Field(None, alias="id")
    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    schedule_id: NumericID = Field(..., alias="priceScheduleId")
    schedule_description: Optional[Description] = Field(
        None, alias="priceScheduleDescription"
    )
    currency: Annotated[str, Field(min_length=1, max_length=3)] = Field(
        ..., alias="currency"
    )
    language: Annotated[str, Field(min_length=1, max_length=3)] = Field(
        ..., alias="language"
    )
    price_algorithm: Identifier = Field(..., alias="priceAlgorithm")
    min_cost: Optional[RationalNumber] = Field(None, alias="minimumCost")
    max_cost: Optional[RationalNumber] = Field(None, alias="maximumCost")
    tax_rules: Optional[bounded_set(TaxRule, 10)] = Field(None, alias="taxRules")
    price_rule_stacks: bounded_list(PriceRuleStack, 1024, min_items=1) = Field(
        ..., alias="priceRuleStacks"
    )
    overstay_rules: Optional[OverstayRules] = Field(None, alias="overstayRules")
    additional_services: Optional[bounded_set(AdditionalService, 5)] = Field(
        None, alias="additionalSelectedServices"
    )


PRICE_SCHEDULE = ChoiceGroup(
    "PriceSchedule",
    ChoiceMember(
        "absolute_price_schedule", AbsolutePriceSchedule, "absolutePriceSchedule"
    ),
    ChoiceMember("price_level_schedule", PriceLevelSchedule, "priceLevelSchedule"),
    required=False,
)


class ChargingSchedule(BaseModel):
    """See section 8.3.5.3.40 in ISO 15118-20"""

    power_schedule: PowerSchedule = Field(..., alias="powerSchedule")
    price_schedule: Annotated[Optional[Choice], PRICE_SCHEDULE] = None


class DischargingSchedule(BaseModel):
    """See section 8.3.5.3.40 in ISO 15118-20"""

    power_schedule: PowerSchedule = Field(..., alias="powerSchedule")
    price_schedule: Annotated[Optional[Choice], PRICE_SCHEDULE] = None


class ScheduleTuple(BaseModel):
    """See section 8.3.5.3.17 in ISO 15118-20"""

    schedule_tuple_id: NumericID = Field(..., alias="scheduleTupleId")
    charging_schedule: ChargingSchedule = Field(..., alias="chargingSchedule")
    discharging_schedule: Optional[DischargingSchedule] = Field(
        None, alias="dischargingSchedule"
    )


class ScheduledScheduleExchangeResParams(BaseModel):
    """See section 8.3.5.3.16 in ISO 15118-20"""

    schedule_tuples: bounded_set(ScheduleTuple, 3, min_items=1) = Field(
        ..., alias="scheduleTuples"
    )


class DynamicScheduleExchangeResParams(BaseModel):
    """See section 8.3.5.3.15 in ISO 15118-20"""

    departure_time: Optional[UInt32] = Field(None, alias="departureTime")
    min_soc: Optional[Percentage] = Field(None, alias="minimumSoc")
    target_soc: Optional[Percentage] = Field(None, alias="targetSoc")
    price_schedule: Annotated[Optional[Choice], PRICE_SCHEDULE] = None

    @model_validator(mode="after")
    def min_soc_less_than_or_equal_to_target_soc(self):
        error = validate_soc_order(self.min_soc, self.target_soc)
        if error:
            raise SemanticConstraintError("minimumSoc", error, rule="V2G20-1640")
        return self


SE_RES_CONTROL_MODE = ChoiceGroup(
    "SEResControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledScheduleExchangeResParams,
        "scheduledSeResControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicScheduleExchangeResParams, "dynamicSeResControlMode"
    ),
    required=False,
)


class ScheduleExchangeRes(V2GResponse):
    """See section 8.3.4.3.7.3 in ISO 15118-20"""

    request_type = ScheduleExchangeReq

    evse_processing: Processing = Field(..., alias="evseProcessing")
    go_to_pause: Optional[bool] = Field(None, alias="goToPause")
    control_mode: Annotated[Optional[Choice], SE_RES_CONTROL_MODE] = None

    @model_validator(mode="after")
    def control_mode_set_once_finished(self):
        """
        While the SECC is still processing, no schedules or dynamic settings
        need to be given. Once finished, one of them must be.
        """
        if self.evse_processing == Processing.FINISHED and self.control_mode is None:
            raise MissingChoiceError(
                SE_RES_CONTROL_MODE.name,
                [member.alias for member in SE_RES_CONTROL_MODE.members],
            )
        return self

    def check_request(self, request: ScheduleExchangeReq):
        check_same_control_mode(
            self.control_mode, request.control_mode, SE_RES_CONTROL_MODE.name
        )


class PowerToleranceAcceptance(ProtocolEnum):
    """See section 8.3.5.3.12 in ISO 15118-20"""

    NOT_CONFIRMED = "PowerToleranceNotConfirmed"
    CONFIRMED = "PowerToleranceConfirmed"


class ScheduledEVPowerProfile(BaseModel):
    """See section 8.3.5.3.12 in ISO 15118-20"""

    selected_schedule_tuple_id: NumericID = Field(
        ..., alias="selectedScheduleTupleId"
    )
    power_tolerance_acceptance: PowerToleranceAcceptance = Field(
        ..., alias="powerToleranceAcceptance"
    )


class DynamicEVPowerProfile(BaseModel):
    """See section 8.3.5.3.11 in ISO 15118-20"""


EVPPT_CONTROL_MODE = ChoiceGroup(
    "EVPPTControlMode",
    ChoiceMember(
        "scheduled_profile", ScheduledEVPowerProfile, "scheduledEvpptControlMode"
    ),
    ChoiceMember("dynamic_profile", DynamicEVPowerProfile, "dynamicEvpptControlMode"),
)


class EVPowerProfile(BaseModel):
    """See section 8.3.5.3.9 in ISO 15118-20"""

    time_anchor: UInt64 = Field(..., alias="timeAnchor")
    entries: bounded_list(PowerScheduleEntry, 2048, min_items=1) = Field(
        ..., alias="evPowerProfileEntries"
    )
    control_mode: Annotated[Choice, EVPPT_CONTROL_MODE]


class ChannelSelection(ProtocolEnum):
    """See section 8.3.4.3.8.2 in ISO 15118-20"""

    CHARGE = "Charge"
    DISCHARGE = "Discharge"


class ChargeProgress(ProtocolEnum):
    """See section 8.3.4.3.8.2 in ISO 15118-20"""

    START = "Start"
    STOP = "Stop"
    STANDBY = "Standby"
    SCHEDULE_RENEGOTIATION = "ScheduleRenegotiation"


class PowerDeliveryReq(V2GRequest):
    """See section 8.3.4.3.8.2 in ISO 15118-20"""

    ev_processing: Processing = Field(..., alias="evProcessing")
    charge_progress: ChargeProgress = Field(..., alias="chargeProgress")
    ev_power_profile: Optional[EVPowerProfile] = Field(None, alias="evPowerProfile")
    bpt_channel_selection: Optional[ChannelSelection] = Field(
        None, alias="bptChannelSelection"
    )

    @model_validator(mode="after")
    def ev_power_profile_set_when_starting(self):
        """
        The EV power profile must be given once the EVCC finished processing
        and asks to start the power transfer.
        """
        if (
            self.ev_processing == Processing.FINISHED
            and self.charge_progress == ChargeProgress.START
            and self.ev_power_profile is None
        ):
            raise SemanticConstraintError(
                "evPowerProfile",
                "evPowerProfile is not set although evProcessing is Finished "
                "and chargeProgress is Start",
            )
        return self


class PowerDeliveryRes(V2GResponse):
    """See section 8.3.4.3.8.3 in ISO 15118-20"""

    request_type = PowerDeliveryReq

    evse_status: Optional[EVSEStatus] = Field(None, alias="evseStatus")


class ScheduledSignedMeterData(BaseModel):
    """See section 8.3.5.3.38 in ISO 15118-20"""

    selected_schedule_tuple_id: NumericID = Field(
        ..., alias="selectedScheduleTupleId"
    )


class DynamicSignedMeterData(BaseModel):
    """See section 8.3.5.3.37 in ISO 15118-20"""


SMDT_CONTROL_MODE = ChoiceGroup(
    "SMDTControlMode",
    ChoiceMember(
        "scheduled_smart_meter_data",
        ScheduledSignedMeterData,
        "scheduledSmdtControlMode",
    ),
    ChoiceMember(
        "dynamic_smart_meter_data", DynamicSignedMeterData, "dynamicSmdtControlMode"
    ),
)


class SignedMeteringData(BaseModel):
    """See section 8.3.5.3.36 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    id: Identifier = Field(..., alias="id")
    session_id: SessionID = Field(..., alias="sessionId")
    meter_info: MeterInfo = Field(..., alias="meterInfo")
    receipt: Optional[Receipt] = Field(None, alias="receipt")
    control_mode: Annotated[Choice, SMDT_CONTROL_MODE]


class MeteringConfirmationReq(V2GRequest):
    """See section 8.3.4.3.11.2 in ISO 15118-20"""

    signed_metering_data: SignedMeteringData = Field(..., alias="signedMeteringData")


class MeteringConfirmationRes(V2GResponse):
    """See section 8.3.4.3.11.3 in ISO 15118-20"""

    request_type = MeteringConfirmationReq


class ChargingSession(ProtocolEnum):
    """See section 8.3.4.3.10.2 in ISO 15118-20"""

    PAUSE = "Pause"
    TERMINATE = "Terminate"
    SERVICE_RENEGOTIATION = "ServiceRenegotiation"


class SessionStopReq(V2GRequest):
    """See section 8.3.4.3.10.2 in ISO 15118-20"""

    charging_session: ChargingSession = Field(..., alias="chargingSession")
    ev_termination_code: Optional[Name] = Field(None, alias="evTerminationCode")
    ev_termination_explanation: Optional[Description] = Field(
        None, alias="evTerminationExplanation"
    )


class SessionStopRes(V2GResponse):
    """See section 8.3.4.3.10.3 in ISO 15118-20"""

    request_type = SessionStopReq


class CertificateInstallationReq(V2GRequest):
    """See section 8.3.4.3.9.2 in ISO 15118-20"""

    oem_prov_cert_chain: SignedCertificateChain = Field(
        ..., alias="oemProvisioningCertificateChain"
    )
    root_cert_ids: bounded_set(X509IssuerSerial, 20, min_items=1) = Field(
        ..., alias="rootCertificateIds"
    )
    max_contract_cert_chains: UInt16 = Field(
        ..., alias="maximumContractCertificateChains"
    )
    prioritized_emaids: Optional[bounded_set(EMAID, 8)] = Field(
        None, alias="prioritizedEmaids"
    )


ENCRYPTED_PRIVATE_KEY = ChoiceGroup(
    "EncryptedPrivateKey",
    ChoiceMember(
        "secp521_encrypted_private_key",
        Annotated[bytes, Field(min_length=94, max_length=94)],
        "secp521EncryptedPrivateKey",
    ),
    ChoiceMember(
        "x448_encrypted_private_key",
        Annotated[bytes, Field(min_length=84, max_length=84)],
        "x448EncryptedPrivateKey",
    ),
    ChoiceMember(
        "tpm_encrypted_private_key",
        Annotated[bytes, Field(min_length=209, max_length=209)],
        "tpmEncryptedPrivateKey",
    ),
)


class SignedInstallationData(BaseModel):
    """See section 8.3.5.3.35 in ISO 15118-20"""

    # An XML attribute in the XSD schema
    id: Identifier = Field(..., alias="id")
    contract_cert_chain: ContractCertificateChain = Field(
        ..., alias="contractCertificateChain"
    )
    ecdh_curve: ECDHCurve = Field(..., alias="ecdhCurve")
    dh_public_key: Annotated[bytes, Field(max_length=133)] = Field(
        ..., alias="dhPublicKey"
    )
    encrypted_private_key: Annotated[Choice, ENCRYPTED_PRIVATE_KEY]

    @model_validator(mode="after")
    def key_fits_curve(self):
        """A TPM protected key can be used with either curve"""
        expected = {
            "secp521_encrypted_private_key": ECDHCurve.SECP521,
            "x448_encrypted_private_key": ECDHCurve.X448,
        }.get(self.encrypted_private_key.member)
        if expected is not None and expected != self.ecdh_curve:
            key = ENCRYPTED_PRIVATE_KEY.member(self.encrypted_private_key.member)
            raise SemanticConstraintError(
                "ecdhCurve",
                f"{key.alias} does not fit ecdhCurve {self.ecdh_curve.value}",
            )
        return self


class CertificateInstallationRes(V2GResponse):
    """See section 8.3.4.3.9.3 in ISO 15118-20"""

    request_type = CertificateInstallationReq

    evse_processing: Processing = Field(..., alias="evseProcessing")
    cps_certificate_chain: CertificateChain = Field(..., alias="cpsCertificateChain")
    signed_installation_data: SignedInstallationData = Field(
        ..., alias="signedInstallationData"
    )
    # XSD type unsignedByte with value range [0..255]
    remaining_contract_cert_chains: int = Field(
        ..., ge=0, le=UINT_8_MAX, alias="remainingContractCertificateChains"
    )


class EVCheckInStatus(ProtocolEnum):
    """See section 8.3.4.8.1.1.2 in ISO 15118-20"""

    CHECK_IN = "CheckIn"
    PROCESSING = "Processing"
    COMPLETED = "Completed"


class EVCheckOutStatus(ProtocolEnum):
    """See section 8.3.4.8.1.2.2 in ISO 15118-20"""

    CHECK_OUT = "CheckOut"
    PROCESSING = "Processing"
    COMPLETED = "Completed"


class EVSECheckOutStatus(ProtocolEnum):
    """See section 8.3.4.8.1.2.3 in ISO 15118-20"""

    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"


class ParkingMethod(ProtocolEnum):
    """See section 8.3.4.8.1.1.2 in ISO 15118-20"""

    AUTO_PARKING = "AutoParking"
    MV_GUIDED_MANUAL = "MVGuideManual"
    MANUAL = "Manual"


class TargetPosition(BaseModel):
    target_offset_x: UInt16 = Field(..., alias="targetOffsetX")
    target_offset_y: UInt16 = Field(..., alias="targetOffsetY")


class VehicleCheckInReq(V2GRequest):
    """See section 8.3.4.8.1.1.2 in ISO 15118-20"""

    ev_check_in_status: EVCheckInStatus = Field(..., alias="evCheckInStatus")
    parking_method: Optional[ParkingMethod] = Field(None, alias="parkingMethod")


class VehicleCheckInRes(V2GResponse):
    """See section 8.3.4.8.1.1.3 in ISO 15118-20"""

    request_type = VehicleCheckInReq

    vehicle_space: UInt32 = Field(..., alias="vehicleSpace")
    target_offset: Optional[TargetPosition] = Field(None, alias="targetOffset")


class VehicleCheckOutReq(V2GRequest):
    """See section 8.3.4.8.1.2.2 in ISO 15118-20"""

    ev_check_out_status: EVCheckOutStatus = Field(..., alias="evCheckOutStatus")
    check_out_time: UInt64 = Field(..., alias="checkOutTime")


class VehicleCheckOutRes(V2GResponse):
    """See section 8.3.4.8.1.3.2 in ISO 15118-20"""

    request_type = VehicleCheckOutReq

    evse_check_out_status: EVSECheckOutStatus = Field(
        ..., alias="evseCheckOutStatus"
    )
