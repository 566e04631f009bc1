"""
This modules contains classes which implement the elements of the
ISO 15118-20 XSD file V2G_CI_DC.xsd.
These are the V2GMessages exchanged between the EVCC and the SECC specifically
for DC charging.
"""
from typing import Optional

from pydantic import Field
from typing_extensions import Annotated

from iso15118json.messages import BaseModel
from iso15118json.messages.choice import Choice, ChoiceGroup, ChoiceMember
from iso15118json.messages.iso15118_20.common_types import (
    ChargeLoopReq,
    ChargeLoopRes,
    ChargeParameterDiscoveryReq,
    ChargeParameterDiscoveryRes,
    DynamicChargeLoopReqParams,
    DynamicChargeLoopResParams,
    Percentage,
    Processing,
    RationalNumber,
    ScheduledChargeLoopReqParams,
    ScheduledChargeLoopResParams,
    V2GRequest,
    V2GResponse,
)


class DCChargeParameterDiscoveryReqParams(BaseModel):
    """See section 8.3.5.5.1 in ISO 15118-20"""

    ev_max_charge_power: RationalNumber = Field(..., alias="evMaximumChargePower")
    ev_min_charge_power: RationalNumber = Field(..., alias="evMinimumChargePower")
    ev_max_charge_current: RationalNumber = Field(..., alias="evMaximumChargeCurrent")
    ev_min_charge_current: RationalNumber = Field(..., alias="evMinimumChargeCurrent")
    ev_max_voltage: RationalNumber = Field(..., alias="evMaximumVoltage")
    ev_min_voltage: RationalNumber = Field(..., alias="evMinimumVoltage")
    target_soc: Optional[Percentage] = Field(None, alias="targetSoc")


class DCChargeParameterDiscoveryResParams(BaseModel):
    """See section 8.3.5.5.2 in ISO 15118-20"""

    evse_max_charge_power: RationalNumber = Field(..., alias="evseMaximumChargePower")
    evse_min_charge_power: RationalNumber = Field(..., alias="evseMinimumChargePower")
    evse_max_charge_current: RationalNumber = Field(
        ..., alias="evseMaximumChargeCurrent"
    )
    evse_min_charge_current: RationalNumber = Field(
        ..., alias="evseMinimumChargeCurrent"
    )
    evse_max_voltage: RationalNumber = Field(..., alias="evseMaximumVoltage")
    evse_min_voltage: RationalNumber = Field(..., alias="evseMinimumVoltage")
    evse_power_ramp_limit: Optional[RationalNumber] = Field(
        None, alias="evsePowerRampLimitation"
    )


class BPTDCChargeParameterDiscoveryReqParams(DCChargeParameterDiscoveryReqParams):
    """
    See section 8.3.5.5.7.1 in ISO 15118-20
    BPT = Bidirectional Power Transfer
    """

    ev_max_discharge_power: RationalNumber = Field(
        ..., alias="evMaximumDischargePower"
    )
    ev_min_discharge_power: RationalNumber = Field(
        ..., alias="evMinimumDischargePower"
    )
    ev_max_discharge_current: RationalNumber = Field(
        ..., alias="evMaximumDischargeCurrent"
    )
    ev_min_discharge_current: RationalNumber = Field(
        ..., alias="evMinimumDischargeCurrent"
    )


class BPTDCChargeParameterDiscoveryResParams(DCChargeParameterDiscoveryResParams):
    """
    See section 8.3.5.5.7.2 in ISO 15118-20
    BPT = Bidirectional Power Transfer
    """

    evse_max_discharge_power: RationalNumber = Field(
        ..., alias="evseMaximumDischargePower"
    )
    evse_min_discharge_power: RationalNumber = Field(
        ..., alias="evseMinimumDischargePower"
    )
    evse_max_discharge_current: RationalNumber = Field(
        ..., alias="evseMaximumDischargeCurrent"
    )
    evse_min_discharge_current: RationalNumber = Field(
        ..., alias="evseMinimumDischargeCurrent"
    )


class ScheduledDCChargeLoopReqParams(ScheduledChargeLoopReqParams):
    """See section 8.3.5.5.4 in ISO 15118-20"""

    ev_target_current: RationalNumber = Field(..., alias="evTargetCurrent")
    ev_target_voltage: RationalNumber = Field(..., alias="evTargetVoltage")
    ev_max_charge_power: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePower"
    )
    ev_min_charge_power: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePower"
    )
    ev_max_charge_current: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargeCurrent"
    )
    ev_max_voltage: Optional[RationalNumber] = Field(None, alias="evMaximumVoltage")
    ev_min_voltage: Optional[RationalNumber] = Field(None, alias="evMinimumVoltage")


class ScheduledDCChargeLoopResParams(ScheduledChargeLoopResParams):
    """See section 8.3.5.5.6 in ISO 15118-20"""

    evse_max_charge_power: Optional[RationalNumber] = Field(
        None, alias="evseMaximumChargePower"
    )
    evse_min_charge_power: Optional[RationalNumber] = Field(
        None, alias="evseMinimumChargePower"
    )
    evse_max_charge_current: Optional[RationalNumber] = Field(
        None, alias="evseMaximumChargeCurrent"
    )
    evse_max_voltage: Optional[RationalNumber] = Field(
        None, alias="evseMaximumVoltage"
    )


class BPTScheduledDCChargeLoopReqParams(ScheduledDCChargeLoopReqParams):
    """See section 8.3.5.5.7.4 in ISO 15118-20"""

    ev_max_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePower"
    )
    ev_min_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePower"
    )
    ev_max_discharge_current: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargeCurrent"
    )


class BPTScheduledDCChargeLoopResParams(ScheduledDCChargeLoopResParams):
    """See section 8.3.5.5.7.6 in ISO 15118-20"""

    evse_max_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evseMaximumDischargePower"
    )
    evse_min_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evseMinimumDischargePower"
    )
    evse_max_discharge_current: Optional[RationalNumber] = Field(
        None, alias="evseMaximumDischargeCurrent"
    )
    evse_min_voltage: Optional[RationalNumber] = Field(
        None, alias="evseMinimumVoltage"
    )


class DynamicDCChargeLoopReqParams(DynamicChargeLoopReqParams):
    """See section 8.3.5.5.3 in ISO 15118-20"""

    ev_max_charge_power: RationalNumber = Field(..., alias="evMaximumChargePower")
    ev_min_charge_power: RationalNumber = Field(..., alias="evMinimumChargePower")
    ev_max_charge_current: RationalNumber = Field(..., alias="evMaximumChargeCurrent")
    ev_max_voltage: RationalNumber = Field(..., alias="evMaximumVoltage")
    ev_min_voltage: RationalNumber = Field(..., alias="evMinimumVoltage")


class DynamicDCChargeLoopResParams(DynamicChargeLoopResParams):
    """See section 8.3.5.5.5 in ISO 15118-20"""

    evse_max_charge_power: RationalNumber = Field(..., alias="evseMaximumChargePower")
    evse_min_charge_power: RationalNumber = Field(..., alias="evseMinimumChargePower")
    evse_max_charge_current: RationalNumber = Field(
        ..., alias="evseMaximumChargeCurrent"
    )
    evse_max_voltage: RationalNumber = Field(..., alias="evseMaximumVoltage")


class BPTDynamicDCChargeLoopReqParams(DynamicDCChargeLoopReqParams):
    """See section 8.3.5.5.7.3 in ISO 15118-20"""

    ev_max_discharge_power: RationalNumber = Field(
        ..., alias="evMaximumDischargePower"
    )
    ev_min_discharge_power: RationalNumber = Field(
        ..., alias="evMinimumDischargePower"
    )
    ev_max_discharge_current: RationalNumber = Field(
        ..., alias="evMaximumDischargeCurrent"
    )
    ev_max_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMaximumV2xEnergyRequest"
    )
    ev_min_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMinimumV2xEnergyRequest"
    )


class BPTDynamicDCChargeLoopResParams(DynamicDCChargeLoopResParams):
    """See section 8.3.5.5.7.5 in ISO 15118-20"""

    evse_max_discharge_power: RationalNumber = Field(
        ..., alias="evseMaximumDischargePower"
    )
    evse_min_discharge_power: RationalNumber = Field(
        ..., alias="evseMinimumDischargePower"
    )
    evse_max_discharge_current: RationalNumber = Field(
        ..., alias="evseMaximumDischargeCurrent"
    )
    evse_min_voltage: RationalNumber = Field(..., alias="evseMinimumVoltage")


DC_CPD_REQ_MODE = ChoiceGroup(
    "CPDReqEnergyTransferMode",
    ChoiceMember(
        "dc_params", DCChargeParameterDiscoveryReqParams, "dcCpdReqEnergyTransferMode"
    ),
    ChoiceMember(
        "bpt_dc_params",
        BPTDCChargeParameterDiscoveryReqParams,
        "bptDcCpdReqEnergyTransferMode",
    ),
)


class DCChargeParameterDiscoveryReq(ChargeParameterDiscoveryReq):
    """See section 8.3.4.5.2.2 in ISO 15118-20"""

    xsd_name = "DC_ChargeParameterDiscoveryReq"

    energy_transfer_mode: Annotated[Choice, DC_CPD_REQ_MODE]


DC_CPD_RES_MODE = ChoiceGroup(
    "CPDResEnergyTransferMode",
    ChoiceMember(
        "dc_params", DCChargeParameterDiscoveryResParams, "dcCpdResEnergyTransferMode"
    ),
    ChoiceMember(
        "bpt_dc_params",
        BPTDCChargeParameterDiscoveryResParams,
        "bptDcCpdResEnergyTransferMode",
    ),
)


class DCChargeParameterDiscoveryRes(ChargeParameterDiscoveryRes):
    """See section 8.3.4.5.2.3 in ISO 15118-20"""

    xsd_name = "DC_ChargeParameterDiscoveryRes"
    request_type = DCChargeParameterDiscoveryReq

    energy_transfer_mode: Annotated[Choice, DC_CPD_RES_MODE]


DC_CL_REQ_MODE = ChoiceGroup(
    "CLReqControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledDCChargeLoopReqParams,
        "scheduledDcClReqControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicDCChargeLoopReqParams, "dynamicDcClReqControlMode"
    ),
    ChoiceMember(
        "bpt_scheduled_params",
        BPTScheduledDCChargeLoopReqParams,
        "bptScheduledDcClReqControlMode",
    ),
    ChoiceMember(
        "bpt_dynamic_params",
        BPTDynamicDCChargeLoopReqParams,
        "bptDynamicDcClReqControlMode",
    ),
)


class DCChargeLoopReq(ChargeLoopReq):
    """See section 8.3.4.5.5.2 in ISO 15118-20"""

    xsd_name = "DC_ChargeLoopReq"

    ev_present_voltage: RationalNumber = Field(..., alias="evPresentVoltage")
    control_mode: Annotated[Choice, DC_CL_REQ_MODE]


DC_CL_RES_MODE = ChoiceGroup(
    "CLResControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledDCChargeLoopResParams,
        "scheduledDcClResControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicDCChargeLoopResParams, "dynamicDcClResControlMode"
    ),
    ChoiceMember(
        "bpt_scheduled_params",
        BPTScheduledDCChargeLoopResParams,
        "bptScheduledDcClResControlMode",
    ),
    ChoiceMember(
        "bpt_dynamic_params",
        BPTDynamicDCChargeLoopResParams,
        "bptDynamicDcClResControlMode",
    ),
)


class DCChargeLoopRes(ChargeLoopRes):
    """See section 8.3.4.5.5.3 in ISO 15118-20"""

    xsd_name = "DC_ChargeLoopRes"
    request_type = DCChargeLoopReq

    evse_present_current: RationalNumber = Field(..., alias="evsePresentCurrent")
    evse_present_voltage: RationalNumber = Field(..., alias="evsePresentVoltage")
    evse_power_limit_achieved: bool = Field(..., alias="evsePowerLimitAchieved")
    evse_current_limit_achieved: bool = Field(..., alias="evseCurrentLimitAchieved")
    evse_voltage_limit_achieved: bool = Field(..., alias="evseVoltageLimitAchieved")
    control_mode: Annotated[Choice, DC_CL_RES_MODE]


class DCCableCheckReq(V2GRequest):
    """See section 8.3.4.5.3.2 in ISO 15118-20"""

    xsd_name = "DC_CableCheckReq"


class DCCableCheckRes(V2GResponse):
    """See section 8.3.4.5.3.3 in ISO 15118-20"""

    xsd_name = "DC_CableCheckRes"
    request_type = DCCableCheckReq

    evse_processing: Processing = Field(..., alias="evseProcessing")


class DCPreChargeReq(V2GRequest):
    """See section 8.3.4.5.4.1 in ISO 15118-20"""

    xsd_name = "DC_PreChargeReq"

    ev_processing: Processing = Field(..., alias="evProcessing")
    ev_present_voltage: RationalNumber = Field(..., alias="evPresentVoltage")
    ev_target_voltage: RationalNumber = Field(..., alias="evTargetVoltage")


class DCPreChargeRes(V2GResponse):
    """See section 8.3.4.5.4.3 in ISO 15118-20"""

    xsd_name = "DC_PreChargeRes"
    request_type = DCPreChargeReq

    evse_present_voltage: RationalNumber = Field(..., alias="evsePresentVoltage")


class DCWeldingDetectionReq(V2GRequest):
    """See section 8.3.4.5.6.2 in ISO 15118-20"""

    xsd_name = "DC_WeldingDetectionReq"

    ev_processing: Processing = Field(..., alias="evProcessing")


class DCWeldingDetectionRes(V2GResponse):
    """See section 8.3.4.5.6.3 in ISO 15118-20"""

    xsd_name = "DC_WeldingDetectionRes"
    request_type = DCWeldingDetectionReq

    evse_present_voltage: RationalNumber = Field(..., alias="evsePresentVoltage")
