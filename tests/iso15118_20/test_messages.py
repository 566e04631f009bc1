from typing import List

from iso15118json.messages.enums import AuthEnum
from iso15118json.messages.iso15118_20.ac import (
    ACChargeLoopReq,
    ACChargeLoopRes,
    ACChargeParameterDiscoveryReq,
    ACChargeParameterDiscoveryReqParams,
    ACChargeParameterDiscoveryRes,
    ACChargeParameterDiscoveryResParams,
    BPTACChargeParameterDiscoveryReqParams,
    BPTACChargeParameterDiscoveryResParams,
    BPTDynamicACChargeLoopReqParams,
    BPTDynamicACChargeLoopResParams,
    BPTScheduledACChargeLoopReqParams,
    BPTScheduledACChargeLoopResParams,
    DynamicACChargeLoopReqParams,
    DynamicACChargeLoopResParams,
    ScheduledACChargeLoopReqParams,
    ScheduledACChargeLoopResParams,
)
from iso15118json.messages.iso15118_20.common_messages import (
    AbsolutePriceSchedule,
    AdditionalService,
    AuthorizationReq,
    AuthorizationRes,
    AuthorizationSetupReq,
    AuthorizationSetupRes,
    CertificateChain,
    CertificateInstallationReq,
    CertificateInstallationRes,
    ChannelSelection,
    ChargeProgress,
    ChargingSchedule,
    ChargingSession,
    ContractCertificateChain,
    DischargingSchedule,
    DynamicScheduleExchangeReqParams,
    DynamicScheduleExchangeResParams,
    ECDHCurve,
    EIMAuthReqParams,
    EIMAuthSetupResParams,
    EVAbsolutePriceSchedule,
    EVCheckInStatus,
    EVCheckOutStatus,
    EVEnergyOffer,
    EVPowerProfile,
    EVPowerSchedule,
    EVPowerScheduleEntry,
    EVPriceRule,
    EVPriceRuleStack,
    EVSECheckOutStatus,
    MeteringConfirmationReq,
    MeteringConfirmationRes,
    OverstayRule,
    OverstayRules,
    Parameter,
    ParameterSet,
    ParkingMethod,
    PnCAuthReqParams,
    PnCAuthSetupResParams,
    PowerDeliveryReq,
    PowerDeliveryRes,
    PowerSchedule,
    PowerScheduleEntry,
    PowerToleranceAcceptance,
    PriceLevelSchedule,
    PriceLevelScheduleEntry,
    PriceRule,
    PriceRuleStack,
    ScheduledEVPowerProfile,
    ScheduledScheduleExchangeReqParams,
    ScheduledScheduleExchangeResParams,
    ScheduledSignedMeterData,
    ScheduleExchangeReq,
    ScheduleExchangeRes,
    ScheduleTuple,
    SelectedService,
    Service,
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
    SignedCertificateChain,
    SignedInstallationData,
    SignedMeteringData,
    TargetPosition,
    TaxRule,
    VehicleCheckInReq,
    VehicleCheckInRes,
    VehicleCheckOutReq,
    VehicleCheckOutRes,
)
from iso15118json.messages.iso15118_20.common_types import (
    DetailedCost,
    DetailedTax,
    DisplayParameters,
    EVSENotification,
    EVSEStatus,
    MessageHeader,
    MeterInfo,
    Processing,
    RationalNumber,
    Receipt,
    ResponseCode,
    V2GMessage,
)
from iso15118json.messages.iso15118_20.dc import (
    BPTDCChargeParameterDiscoveryReqParams,
    BPTDCChargeParameterDiscoveryResParams,
    BPTDynamicDCChargeLoopReqParams,
    BPTDynamicDCChargeLoopResParams,
    BPTScheduledDCChargeLoopReqParams,
    BPTScheduledDCChargeLoopResParams,
    DCCableCheckReq,
    DCCableCheckRes,
    DCChargeLoopReq,
    DCChargeLoopRes,
    DCChargeParameterDiscoveryReq,
    DCChargeParameterDiscoveryReqParams,
    DCChargeParameterDiscoveryRes,
    DCChargeParameterDiscoveryResParams,
    DCPreChargeReq,
    DCPreChargeRes,
    DCWeldingDetectionReq,
    DCWeldingDetectionRes,
    DynamicDCChargeLoopReqParams,
    DynamicDCChargeLoopResParams,
    ScheduledDCChargeLoopReqParams,
    ScheduledDCChargeLoopResParams,
)
from iso15118json.messages.xmldsig import (
    CanonicalizationMethod,
    DigestMethod,
    Reference,
    Signature,
    SignatureMethod,
    SignedInfo,
    Transform,
    X509IssuerSerial,
)
from tests.tools import MOCK_EVCC_ID, MOCK_EVSE_ID, MOCK_SESSION_ID, MOCK_TIMESTAMP

PRICE_ALGORITHM = "urn:iso:std:iso:15118:-20:PriceAlgorithm:1-Price_Level"
CONTROL_MODES = ["scheduled", "dynamic"]
CHARGE_LOOP_MODES = ["scheduled", "dynamic", "bpt_scheduled", "bpt_dynamic"]


def rational(value: int, exponent: int = 0) -> RationalNumber:
    return RationalNumber(exponent=exponent, value=value)


def get_header(signed: bool = False) -> MessageHeader:
    return MessageHeader(
        session_id=MOCK_SESSION_ID,
        timestamp=MOCK_TIMESTAMP,
        signature=get_signature() if signed else None,
    )


def get_signature() -> Signature:
    return Signature(
        signed_info=SignedInfo(
            canonicalization_method=CanonicalizationMethod(
                algorithm="http://www.w3.org/TR/canonical-exi/"
            ),
            signature_method=SignatureMethod(
                algorithm="http://www.w3.org/2001/04/xmldsig-more#ecdsa-sha512"
            ),
            references=[
                Reference(
                    transforms=[
                        Transform(algorithm="http://www.w3.org/TR/canonical-exi/")
                    ],
                    digest_method=DigestMethod(
                        algorithm="http://www.w3.org/2001/04/xmlenc#sha512"
                    ),
                    digest_value=bytes(range(64)),
                    uri="#id1",
                )
            ],
        ),
        signature_value=bytes(132),
    )


def get_contract_cert_chain() -> ContractCertificateChain:
    return ContractCertificateChain(
        certificate=b"\x30\x82\x02\x1e" + bytes(60),
        sub_certificates=[b"\x30\x82\x01\xf5" + bytes(40)],
    )


def get_meter_info() -> MeterInfo:
    return MeterInfo(
        meter_id="METER-0001",
        charged_energy_reading_wh=12000,
        bpt_discharged_energy_reading_wh=500,
        capacitive_energy_reading_varh=0,
        bpt_inductive_energy_reading_varh=0,
        meter_signature=bytes(range(64)),
        meter_status=1,
        meter_timestamp=MOCK_TIMESTAMP,
    )


def get_receipt() -> Receipt:
    return Receipt(
        time_anchor=MOCK_TIMESTAMP,
        energy_costs=DetailedCost(
            amount=rational(420, -2), cost_per_unit=rational(35, -2)
        ),
        occupancy_costs=DetailedCost(amount=rational(0), cost_per_unit=rational(0)),
        tax_costs=[DetailedTax(tax_rule_id=1, amount=rational(80, -2))],
    )


def get_evse_status() -> EVSEStatus:
    return EVSEStatus(
        notification_max_delay=60, evse_notification=EVSENotification.EXIT_STANDBY
    )


def get_power_schedule() -> PowerSchedule:
    return PowerSchedule(
        time_anchor=0,
        available_energy=rational(60, 3),
        power_tolerance=rational(1, 3),
        entries=[
            PowerScheduleEntry(duration=3600, power=rational(11, 3)),
            PowerScheduleEntry(
                duration=1800,
                power=rational(7, 3),
                power_l2=rational(7, 3),
                power_l3=rational(7, 3),
            ),
        ],
    )


def get_absolute_price_schedule() -> AbsolutePriceSchedule:
    return AbsolutePriceSchedule(
        id="id2",
        time_anchor=0,
        schedule_id=1,
        schedule_description="Standard tariff",
        currency="EUR",
        language="ENG",
        price_algorithm=PRICE_ALGORITHM,
        min_cost=rational(1),
        max_cost=rational(100),
        tax_rules=[
            TaxRule(
                tax_rule_id=1,
                tax_rule_name="VAT",
                tax_rate=rational(19, -2),
                tax_included_in_price=True,
                applies_to_energy_fee=True,
                applies_to_parking_fee=True,
                applies_to_overstay_fee=True,
                applies_to_min_max_cost=True,
            )
        ],
        price_rule_stacks=[
            PriceRuleStack(
                duration=0,
                price_rules=[
                    PriceRule(
                        energy_fee=rational(35, -2),
                        parking_fee=rational(1, -1),
                        parking_fee_period=3600,
                        carbon_dioxide_emission=300,
                        renewable_energy_percentage=60,
                        power_range_start=rational(0),
                    )
                ],
            )
        ],
        overstay_rules=OverstayRules(
            time_threshold=7200,
            power_threshold=rational(1, 3),
            rules=[
                OverstayRule(
                    description="Blocking fee",
                    start_time=0,
                    fee=rational(5, -1),
                    fee_period=60,
                )
            ],
        ),
        additional_services=[
            AdditionalService(service_name="Parking", service_fee=rational(2))
        ],
    )


def get_price_level_schedule() -> PriceLevelSchedule:
    return PriceLevelSchedule(
        id="id3",
        time_anchor=0,
        schedule_id=2,
        schedule_description="Price levels",
        num_price_levels=3,
        entries=[
            PriceLevelScheduleEntry(duration=3600, price_level=2),
            PriceLevelScheduleEntry(duration=3600, price_level=0),
        ],
    )


def get_session_setup_req() -> SessionSetupReq:
    return SessionSetupReq(header=get_header(), evcc_id=MOCK_EVCC_ID)


def get_session_setup_res() -> SessionSetupRes:
    return SessionSetupRes(
        header=get_header(),
        response_code=ResponseCode.OK_NEW_SESSION_ESTABLISHED,
        evse_id=MOCK_EVSE_ID,
    )


def get_authorization_setup_req() -> AuthorizationSetupReq:
    return AuthorizationSetupReq(header=get_header())


def get_authorization_setup_res(auth_service: AuthEnum) -> AuthorizationSetupRes:
    if auth_service == AuthEnum.PNC:
        mode = {
            "pnc_as_res": PnCAuthSetupResParams(
                gen_challenge=bytes(range(16)), supported_providers=["EMP1", "EMP2"]
            )
        }
    else:
        mode = {"eim_as_res": EIMAuthSetupResParams()}
    return AuthorizationSetupRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        auth_services=[AuthEnum.EIM, AuthEnum.PNC],
        cert_install_service=True,
        **mode,
    )


def get_authorization_req(auth_service: AuthEnum) -> AuthorizationReq:
    eim_params = None
    pnc_params = None
    if auth_service == AuthEnum.EIM:
        eim_params = EIMAuthReqParams()
    else:
        pnc_params = PnCAuthReqParams(
            id="id1",
            gen_challenge=bytes(range(16)),
            contract_cert_chain=get_contract_cert_chain(),
        )
    return AuthorizationReq(
        header=get_header(signed=auth_service == AuthEnum.PNC),
        selected_auth_service=auth_service,
        eim_params=eim_params,
        pnc_params=pnc_params,
    )


def get_authorization_res() -> AuthorizationRes:
    return AuthorizationRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_processing=Processing.FINISHED,
    )


def get_service_discovery_req() -> ServiceDiscoveryReq:
    return ServiceDiscoveryReq(header=get_header(), supported_service_ids=[1, 2, 5, 6])


def get_service_discovery_res() -> ServiceDiscoveryRes:
    return ServiceDiscoveryRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        service_renegotiation_supported=False,
        energy_transfer_services=[
            Service(service_id=1, free_service=False),
            Service(service_id=5, free_service=False),
        ],
        vas_services=[Service(service_id=65, free_service=True)],
    )


def get_service_detail_req(service_id: int = 1) -> ServiceDetailReq:
    return ServiceDetailReq(header=get_header(), service_id=service_id)


def get_service_detail_res(service_id: int = 1) -> ServiceDetailRes:
    return ServiceDetailRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        service_id=service_id,
        parameter_sets=[
            ParameterSet(
                id=1,
                parameters=[
                    Parameter(name="Connector", int_value=1),
                    Parameter(name="ControlMode", int_value=1),
                    Parameter(name="EVSENominalVoltage", short_value=230),
                    Parameter(name="MobilityNeedsMode", byte_value=1),
                    Parameter(name="BPTChannel", bool_value=True),
                    Parameter(name="EVSEMaximumPower", rational_number=rational(22, 3)),
                    Parameter(name="Description", finite_str="AC three phase"),
                ],
            ),
            ParameterSet(id=2, parameters=[Parameter(name="Connector", int_value=2)]),
        ],
    )


def get_service_selection_req() -> ServiceSelectionReq:
    return ServiceSelectionReq(
        header=get_header(),
        selected_energy_service=SelectedService(service_id=1, parameter_set_id=1),
        selected_vas_list=[SelectedService(service_id=65, parameter_set_id=1)],
    )


def get_service_selection_res() -> ServiceSelectionRes:
    return ServiceSelectionRes(header=get_header(), response_code=ResponseCode.OK)


def get_schedule_exchange_req(control_mode: str = "scheduled") -> ScheduleExchangeReq:
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledScheduleExchangeReqParams(
                departure_time=7200,
                ev_target_energy_request=rational(40, 3),
                ev_max_energy_request=rational(60, 3),
                ev_min_energy_request=rational(-20, 3),
                ev_energy_offer=EVEnergyOffer(
                    ev_power_schedule=EVPowerSchedule(
                        time_anchor=0,
                        entries=[
                            EVPowerScheduleEntry(duration=3600, power=rational(11, 3))
                        ],
                    ),
                    ev_absolute_price_schedule=EVAbsolutePriceSchedule(
                        time_anchor=0,
                        currency="EUR",
                        price_algorithm=PRICE_ALGORITHM,
                        ev_price_rule_stacks=[
                            EVPriceRuleStack(
                                duration=0,
                                ev_price_rules=[
                                    EVPriceRule(
                                        energy_fee=rational(3, -1),
                                        power_range_start=rational(0),
                                    )
                                ],
                            )
                        ],
                    ),
                ),
            )
        }
    else:
        mode = {
            "dynamic_params": DynamicScheduleExchangeReqParams(
                departure_time=7200,
                min_soc=30,
                target_soc=80,
                ev_target_energy_request=rational(40, 3),
                ev_max_energy_request=rational(60, 3),
                ev_min_energy_request=rational(-20, 3),
                ev_max_v2x_energy_request=rational(5, 3),
                ev_min_v2x_energy_request=rational(1, 3),
            )
        }
    return ScheduleExchangeReq(
        header=get_header(), max_supporting_points=1024, **mode
    )


def get_schedule_exchange_res(control_mode: str = "scheduled") -> ScheduleExchangeRes:
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledScheduleExchangeResParams(
                schedule_tuples=[
                    ScheduleTuple(
                        schedule_tuple_id=1,
                        charging_schedule=ChargingSchedule(
                            power_schedule=get_power_schedule(),
                            absolute_price_schedule=get_absolute_price_schedule(),
                        ),
                        discharging_schedule=DischargingSchedule(
                            power_schedule=get_power_schedule(),
                            price_level_schedule=get_price_level_schedule(),
                        ),
                    ),
                    ScheduleTuple(
                        schedule_tuple_id=2,
                        charging_schedule=ChargingSchedule(
                            power_schedule=get_power_schedule()
                        ),
                    ),
                ]
            )
        }
    else:
        mode = {
            "dynamic_params": DynamicScheduleExchangeResParams(
                departure_time=7200,
                min_soc=30,
                target_soc=80,
                price_level_schedule=get_price_level_schedule(),
            )
        }
    return ScheduleExchangeRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_processing=Processing.FINISHED,
        go_to_pause=False,
        **mode,
    )


def get_power_delivery_req() -> PowerDeliveryReq:
    return PowerDeliveryReq(
        header=get_header(),
        ev_processing=Processing.FINISHED,
        charge_progress=ChargeProgress.START,
        ev_power_profile=EVPowerProfile(
            time_anchor=0,
            entries=[PowerScheduleEntry(duration=3600, power=rational(11, 3))],
            scheduled_profile=ScheduledEVPowerProfile(
                selected_schedule_tuple_id=1,
                power_tolerance_acceptance=PowerToleranceAcceptance.CONFIRMED,
            ),
        ),
        bpt_channel_selection=ChannelSelection.CHARGE,
    )


def get_power_delivery_res() -> PowerDeliveryRes:
    return PowerDeliveryRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_status=get_evse_status(),
    )


def get_metering_confirmation_req() -> MeteringConfirmationReq:
    return MeteringConfirmationReq(
        header=get_header(),
        signed_metering_data=SignedMeteringData(
            id="id4",
            session_id=MOCK_SESSION_ID,
            meter_info=get_meter_info(),
            receipt=get_receipt(),
            scheduled_smart_meter_data=ScheduledSignedMeterData(
                selected_schedule_tuple_id=1
            ),
        ),
    )


def get_metering_confirmation_res() -> MeteringConfirmationRes:
    return MeteringConfirmationRes(header=get_header(), response_code=ResponseCode.OK)


def get_session_stop_req() -> SessionStopReq:
    return SessionStopReq(
        header=get_header(),
        charging_session=ChargingSession.TERMINATE,
        ev_termination_code="UserStop",
        ev_termination_explanation="Charging stopped by the user",
    )


def get_session_stop_res() -> SessionStopRes:
    return SessionStopRes(header=get_header(), response_code=ResponseCode.OK)


def get_root_cert_ids(count: int = 2) -> List[X509IssuerSerial]:
    return [
        X509IssuerSerial(
            x509_issuer_name=f"CN=V2GRootCA{index},O=Example,C=DE",
            x509_serial_number=index + 1,
        )
        for index in range(count)
    ]


def get_certificate_installation_req() -> CertificateInstallationReq:
    return CertificateInstallationReq(
        header=get_header(signed=True),
        oem_prov_cert_chain=SignedCertificateChain(
            id="id5",
            certificate=b"\x30\x82\x02\x10" + bytes(100),
            sub_certificates=[b"\x30\x82\x01\xf0" + bytes(80)],
        ),
        root_cert_ids=get_root_cert_ids(),
        max_contract_cert_chains=3,
        prioritized_emaids=["DE8AAA1234567890"],
    )


def get_certificate_installation_res() -> CertificateInstallationRes:
    return CertificateInstallationRes(
        header=get_header(signed=True),
        response_code=ResponseCode.OK,
        evse_processing=Processing.FINISHED,
        cps_certificate_chain=CertificateChain(
            certificate=b"\x30\x82\x02\x20" + bytes(100),
            sub_certificates=[b"\x30\x82\x01\xe0" + bytes(80)],
        ),
        signed_installation_data=SignedInstallationData(
            id="id6",
            contract_cert_chain=get_contract_cert_chain(),
            ecdh_curve=ECDHCurve.SECP521,
            dh_public_key=b"\x04" + bytes(132),
            secp521_encrypted_private_key=bytes(range(94)),
        ),
        remaining_contract_cert_chains=2,
    )


def get_vehicle_check_in_req() -> VehicleCheckInReq:
    return VehicleCheckInReq(
        header=get_header(),
        ev_check_in_status=EVCheckInStatus.CHECK_IN,
        parking_method=ParkingMethod.AUTO_PARKING,
    )


def get_vehicle_check_in_res() -> VehicleCheckInRes:
    return VehicleCheckInRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        vehicle_space=2,
        target_offset=TargetPosition(target_offset_x=10, target_offset_y=20),
    )


def get_vehicle_check_out_req() -> VehicleCheckOutReq:
    return VehicleCheckOutReq(
        header=get_header(),
        ev_check_out_status=EVCheckOutStatus.CHECK_OUT,
        check_out_time=MOCK_TIMESTAMP + 3600,
    )


def get_vehicle_check_out_res() -> VehicleCheckOutRes:
    return VehicleCheckOutRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_check_out_status=EVSECheckOutStatus.COMPLETED,
    )


def get_ac_charge_parameter_discovery_req(
    bpt: bool = False,
) -> ACChargeParameterDiscoveryReq:
    if bpt:
        mode = {
            "bpt_ac_params": BPTACChargeParameterDiscoveryReqParams(
                ev_max_charge_power=rational(11, 3),
                ev_min_charge_power=rational(1, 3),
                ev_max_discharge_power=rational(11, 3),
                ev_min_discharge_power=rational(1, 3),
            )
        }
    else:
        mode = {
            "ac_params": ACChargeParameterDiscoveryReqParams(
                ev_max_charge_power=rational(11, 3),
                ev_max_charge_power_l2=rational(11, 3),
                ev_max_charge_power_l3=rational(11, 3),
                ev_min_charge_power=rational(1, 3),
            )
        }
    return ACChargeParameterDiscoveryReq(header=get_header(), **mode)


def get_ac_charge_parameter_discovery_res(
    bpt: bool = False,
) -> ACChargeParameterDiscoveryRes:
    if bpt:
        mode = {
            "bpt_ac_params": BPTACChargeParameterDiscoveryResParams(
                evse_max_charge_power=rational(22, 3),
                evse_min_charge_power=rational(1, 3),
                evse_nominal_frequency=rational(50),
                evse_max_discharge_power=rational(11, 3),
                evse_min_discharge_power=rational(1, 3),
            )
        }
    else:
        mode = {
            "ac_params": ACChargeParameterDiscoveryResParams(
                evse_max_charge_power=rational(22, 3),
                evse_min_charge_power=rational(1, 3),
                evse_nominal_frequency=rational(50),
                max_power_asymmetry=rational(4, 3),
            )
        }
    return ACChargeParameterDiscoveryRes(
        header=get_header(), response_code=ResponseCode.OK, **mode
    )


def get_ac_charge_loop_req(control_mode: str = "scheduled") -> ACChargeLoopReq:
    dynamic_values = dict(
        departure_time=3600,
        ev_target_energy_request=rational(40, 3),
        ev_max_energy_request=rational(60, 3),
        ev_min_energy_request=rational(-20, 3),
        ev_max_charge_power=rational(11, 3),
        ev_min_charge_power=rational(1, 3),
        ev_present_active_power=rational(10, 3),
        ev_present_reactive_power=rational(0),
    )
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledACChargeLoopReqParams(
                ev_present_active_power=rational(10, 3)
            )
        }
    elif control_mode == "dynamic":
        mode = {"dynamic_params": DynamicACChargeLoopReqParams(**dynamic_values)}
    elif control_mode == "bpt_scheduled":
        mode = {
            "bpt_scheduled_params": BPTScheduledACChargeLoopReqParams(
                ev_present_active_power=rational(-5, 3),
                ev_max_discharge_power=rational(11, 3),
            )
        }
    else:
        mode = {
            "bpt_dynamic_params": BPTDynamicACChargeLoopReqParams(
                ev_max_discharge_power=rational(11, 3),
                ev_min_discharge_power=rational(1, 3),
                ev_max_v2x_energy_request=rational(5, 3),
                ev_min_v2x_energy_request=rational(1, 3),
                **dynamic_values,
            )
        }
    return ACChargeLoopReq(
        header=get_header(),
        display_parameters=DisplayParameters(
            present_soc=45, min_soc=20, target_soc=80, charging_complete=False
        ),
        meter_info_requested=False,
        **mode,
    )


def get_ac_charge_loop_res(control_mode: str = "scheduled") -> ACChargeLoopRes:
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledACChargeLoopResParams(
                evse_target_active_power=rational(10, 3)
            )
        }
    elif control_mode == "dynamic":
        mode = {
            "dynamic_params": DynamicACChargeLoopResParams(
                departure_time=3600,
                min_soc=20,
                target_soc=80,
                ack_max_delay=30,
                evse_target_active_power=rational(10, 3),
            )
        }
    elif control_mode == "bpt_scheduled":
        mode = {
            "bpt_scheduled_params": BPTScheduledACChargeLoopResParams(
                evse_target_active_power=rational(-5, 3)
            )
        }
    else:
        mode = {
            "bpt_dynamic_params": BPTDynamicACChargeLoopResParams(
                evse_target_active_power=rational(-5, 3)
            )
        }
    return ACChargeLoopRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_status=get_evse_status(),
        meter_info=get_meter_info(),
        evse_target_frequency=rational(50),
        **mode,
    )


def get_dc_charge_parameter_discovery_req(
    bpt: bool = False,
) -> DCChargeParameterDiscoveryReq:
    values = dict(
        ev_max_charge_power=rational(150, 3),
        ev_min_charge_power=rational(1, 3),
        ev_max_charge_current=rational(400),
        ev_min_charge_current=rational(1),
        ev_max_voltage=rational(800),
        ev_min_voltage=rational(200),
        target_soc=80,
    )
    if bpt:
        mode = {
            "bpt_dc_params": BPTDCChargeParameterDiscoveryReqParams(
                ev_max_discharge_power=rational(50, 3),
                ev_min_discharge_power=rational(1, 3),
                ev_max_discharge_current=rational(100),
                ev_min_discharge_current=rational(1),
                **values,
            )
        }
    else:
        mode = {"dc_params": DCChargeParameterDiscoveryReqParams(**values)}
    return DCChargeParameterDiscoveryReq(header=get_header(), **mode)


def get_dc_charge_parameter_discovery_res(
    bpt: bool = False,
) -> DCChargeParameterDiscoveryRes:
    values = dict(
        evse_max_charge_power=rational(150, 3),
        evse_min_charge_power=rational(1, 3),
        evse_max_charge_current=rational(400),
        evse_min_charge_current=rational(1),
        evse_max_voltage=rational(920),
        evse_min_voltage=rational(150),
        evse_power_ramp_limit=rational(10, 3),
    )
    if bpt:
        mode = {
            "bpt_dc_params": BPTDCChargeParameterDiscoveryResParams(
                evse_max_discharge_power=rational(50, 3),
                evse_min_discharge_power=rational(1, 3),
                evse_max_discharge_current=rational(100),
                evse_min_discharge_current=rational(1),
                **values,
            )
        }
    else:
        mode = {"dc_params": DCChargeParameterDiscoveryResParams(**values)}
    return DCChargeParameterDiscoveryRes(
        header=get_header(), response_code=ResponseCode.OK, **mode
    )


def get_dc_charge_loop_req(control_mode: str = "scheduled") -> DCChargeLoopReq:
    dynamic_values = dict(
        ev_target_energy_request=rational(40, 3),
        ev_max_energy_request=rational(60, 3),
        ev_min_energy_request=rational(-20, 3),
        ev_max_charge_power=rational(150, 3),
        ev_min_charge_power=rational(1, 3),
        ev_max_charge_current=rational(400),
        ev_max_voltage=rational(800),
        ev_min_voltage=rational(200),
    )
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledDCChargeLoopReqParams(
                ev_target_current=rational(100), ev_target_voltage=rational(420)
            )
        }
    elif control_mode == "dynamic":
        mode = {"dynamic_params": DynamicDCChargeLoopReqParams(**dynamic_values)}
    elif control_mode == "bpt_scheduled":
        mode = {
            "bpt_scheduled_params": BPTScheduledDCChargeLoopReqParams(
                ev_target_current=rational(-50),
                ev_target_voltage=rational(420),
                ev_max_discharge_power=rational(50, 3),
            )
        }
    else:
        mode = {
            "bpt_dynamic_params": BPTDynamicDCChargeLoopReqParams(
                ev_max_discharge_power=rational(50, 3),
                ev_min_discharge_power=rational(1, 3),
                ev_max_discharge_current=rational(100),
                **dynamic_values,
            )
        }
    return DCChargeLoopReq(
        header=get_header(),
        meter_info_requested=True,
        ev_present_voltage=rational(400),
        **mode,
    )


def get_dc_charge_loop_res(control_mode: str = "scheduled") -> DCChargeLoopRes:
    dynamic_values = dict(
        evse_max_charge_power=rational(150, 3),
        evse_min_charge_power=rational(1, 3),
        evse_max_charge_current=rational(400),
        evse_max_voltage=rational(920),
    )
    if control_mode == "scheduled":
        mode = {
            "scheduled_params": ScheduledDCChargeLoopResParams(
                evse_max_charge_power=rational(150, 3)
            )
        }
    elif control_mode == "dynamic":
        mode = {"dynamic_params": DynamicDCChargeLoopResParams(**dynamic_values)}
    elif control_mode == "bpt_scheduled":
        mode = {
            "bpt_scheduled_params": BPTScheduledDCChargeLoopResParams(
                evse_max_discharge_power=rational(50, 3)
            )
        }
    else:
        mode = {
            "bpt_dynamic_params": BPTDynamicDCChargeLoopResParams(
                evse_max_discharge_power=rational(50, 3),
                evse_min_discharge_power=rational(1, 3),
                evse_max_discharge_current=rational(100),
                evse_min_voltage=rational(150),
                **dynamic_values,
            )
        }
    return DCChargeLoopRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        meter_info=get_meter_info(),
        receipt=get_receipt(),
        evse_present_current=rational(100),
        evse_present_voltage=rational(400),
        evse_power_limit_achieved=False,
        evse_current_limit_achieved=False,
        evse_voltage_limit_achieved=False,
        **mode,
    )


def get_dc_cable_check_req() -> DCCableCheckReq:
    return DCCableCheckReq(header=get_header())


def get_dc_cable_check_res() -> DCCableCheckRes:
    return DCCableCheckRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_processing=Processing.ONGOING,
    )


def get_dc_pre_charge_req() -> DCPreChargeReq:
    return DCPreChargeReq(
        header=get_header(),
        ev_processing=Processing.ONGOING,
        ev_present_voltage=rational(380),
        ev_target_voltage=rational(400),
    )


def get_dc_pre_charge_res() -> DCPreChargeRes:
    return DCPreChargeRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_present_voltage=rational(398),
    )


def get_dc_welding_detection_req() -> DCWeldingDetectionReq:
    return DCWeldingDetectionReq(header=get_header(), ev_processing=Processing.FINISHED)


def get_dc_welding_detection_res() -> DCWeldingDetectionRes:
    return DCWeldingDetectionRes(
        header=get_header(),
        response_code=ResponseCode.OK,
        evse_present_voltage=rational(0),
    )


def get_all_messages() -> List[V2GMessage]:
    """At least one instance of each message type, every choice member used"""
    messages = [
        get_session_setup_req(),
        get_session_setup_res(),
        get_authorization_setup_req(),
        get_authorization_setup_res(AuthEnum.EIM),
        get_authorization_setup_res(AuthEnum.PNC),
        get_authorization_req(AuthEnum.EIM),
        get_authorization_req(AuthEnum.PNC),
        get_authorization_res(),
        get_service_discovery_req(),
        get_service_discovery_res(),
        get_service_detail_req(),
        get_service_detail_res(),
        get_service_selection_req(),
        get_service_selection_res(),
        get_power_delivery_req(),
        get_power_delivery_res(),
        get_metering_confirmation_req(),
        get_metering_confirmation_res(),
        get_session_stop_req(),
        get_session_stop_res(),
        get_certificate_installation_req(),
        get_certificate_installation_res(),
        get_vehicle_check_in_req(),
        get_vehicle_check_in_res(),
        get_vehicle_check_out_req(),
        get_vehicle_check_out_res(),
        get_dc_cable_check_req(),
        get_dc_cable_check_res(),
        get_dc_pre_charge_req(),
        get_dc_pre_charge_res(),
        get_dc_welding_detection_req(),
        get_dc_welding_detection_res(),
    ]
    for control_mode in CONTROL_MODES:
        messages.append(get_schedule_exchange_req(control_mode))
        messages.append(get_schedule_exchange_res(control_mode))
    for bpt in (False, True):
        messages.append(get_ac_charge_parameter_discovery_req(bpt))
        messages.append(get_ac_charge_parameter_discovery_res(bpt))
        messages.append(get_dc_charge_parameter_discovery_req(bpt))
        messages.append(get_dc_charge_parameter_discovery_res(bpt))
    for control_mode in CHARGE_LOOP_MODES:
        messages.append(get_ac_charge_loop_req(control_mode))
        messages.append(get_ac_charge_loop_res(control_mode))
        messages.append(get_dc_charge_loop_req(control_mode))
        messages.append(get_dc_charge_loop_res(control_mode))
    return messages
