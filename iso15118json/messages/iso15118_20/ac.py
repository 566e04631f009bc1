"""
This modules contains classes which implement the elements of the
ISO 15118-20 XSD file V2G_CI_AC.xsd.
These are the V2GMessages exchanged between the EVCC and the SECC specifically
for AC charging.

Each per-phase value comes as an optional '...L2' and '...L3' companion of the
single-phase field.
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
    RationalNumber,
    ScheduledChargeLoopReqParams,
    ScheduledChargeLoopResParams,
)


class ACChargeParameterDiscoveryReqParams(BaseModel):
    """See section 8.3.5.4.1 in ISO 15118-20"""

    ev_max_charge_power: RationalNumber = Field(..., alias="evMaximumChargePower")
    ev_max_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL2"
    )
    ev_max_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL3"
    )
    ev_min_charge_power: RationalNumber = Field(..., alias="evMinimumChargePower")
    ev_min_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL2"
    )
    ev_min_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL3"
    )


class ACChargeParameterDiscoveryResParams(BaseModel):
    """See section 8.3.5.4.2 in ISO 15118-20"""

    evse_max_charge_power: RationalNumber = Field(..., alias="evseMaximumChargePower")
    evse_max_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseMaximumChargePowerL2"
    )
    evse_max_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseMaximumChargePowerL3"
    )
    evse_min_charge_power: RationalNumber = Field(..., alias="evseMinimumChargePower")
    evse_min_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseMinimumChargePowerL2"
    )
    evse_min_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseMinimumChargePowerL3"
    )
    evse_nominal_frequency: RationalNumber = Field(..., alias="evseNominalFrequency")
    max_power_asymmetry: Optional[RationalNumber] = Field(
        None, alias="maximumPowerAsymmetry"
    )
    evse_power_ramp_limit: Optional[RationalNumber] = Field(
        None, alias="evsePowerRampLimitation"
    )
    evse_present_active_power: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePower"
    )
    evse_present_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL2"
    )
    evse_present_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL3"
    )


class BPTACChargeParameterDiscoveryReqParams(ACChargeParameterDiscoveryReqParams):
    """
    See section 8.3.5.4.7.1 in ISO 15118-20
    BPT = Bidirectional Power Transfer
    """

    ev_max_discharge_power: RationalNumber = Field(
        ..., alias="evMaximumDischargePower"
    )
    ev_max_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL2"
    )
    ev_max_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL3"
    )
    ev_min_discharge_power: RationalNumber = Field(
        ..., alias="evMinimumDischargePower"
    )
    ev_min_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL2"
    )
    ev_min_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL3"
    )


class BPTACChargeParameterDiscoveryResParams(ACChargeParameterDiscoveryResParams):
    """
    See section 8.3.5.4.7.2 in ISO 15118-20
    BPT = Bidirectional Power Transfer
    """

    evse_max_discharge_power: RationalNumber = Field(
        ..., alias="evseMaximumDischargePower"
    )
    evse_max_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseMaximumDischargePowerL2"
    )
    evse_max_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseMaximumDischargePowerL3"
    )
    evse_min_discharge_power: RationalNumber = Field(
        ..., alias="evseMinimumDischargePower"
    )
    evse_min_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseMinimumDischargePowerL2"
    )
    evse_min_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseMinimumDischargePowerL3"
    )


class ScheduledACChargeLoopReqParams(ScheduledChargeLoopReqParams):
    """See section 8.3.5.4.4 in ISO 15118-20"""

    ev_max_charge_power: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePower"
    )
    ev_max_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL2"
    )
    ev_max_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL3"
    )
    ev_min_charge_power: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePower"
    )
    ev_min_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL2"
    )
    ev_min_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL3"
    )
    ev_present_active_power: RationalNumber = Field(
        ..., alias="evPresentActivePower"
    )
    ev_present_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evPresentActivePowerL2"
    )
    ev_present_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evPresentActivePowerL3"
    )
    ev_present_reactive_power: Optional[RationalNumber] = Field(
        None, alias="evPresentReactivePower"
    )
    ev_present_reactive_power_l2: Optional[RationalNumber] = Field(
        None, alias="evPresentReactivePowerL2"
    )
    ev_present_reactive_power_l3: Optional[RationalNumber] = Field(
        None, alias="evPresentReactivePowerL3"
    )


class ScheduledACChargeLoopResParams(ScheduledChargeLoopResParams):
    """See section 8.3.5.4.6 in ISO 15118-20"""

    evse_target_active_power: Optional[RationalNumber] = Field(
        None, alias="evseTargetActivePower"
    )
    evse_target_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseTargetActivePowerL2"
    )
    evse_target_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseTargetActivePowerL3"
    )
    evse_target_reactive_power: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePower"
    )
    evse_target_reactive_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePowerL2"
    )
    evse_target_reactive_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePowerL3"
    )
    evse_present_active_power: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePower"
    )
    evse_present_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL2"
    )
    evse_present_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL3"
    )


class BPTScheduledACChargeLoopReqParams(ScheduledACChargeLoopReqParams):
    """See section 8.3.5.4.7.4 in ISO 15118-20"""

    ev_max_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePower"
    )
    ev_max_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL2"
    )
    ev_max_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL3"
    )
    ev_min_discharge_power: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePower"
    )
    ev_min_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL2"
    )
    ev_min_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL3"
    )


class BPTScheduledACChargeLoopResParams(ScheduledACChargeLoopResParams):
    """See section 8.3.5.4.7.6 in ISO 15118-20"""


class DynamicACChargeLoopReqParams(DynamicChargeLoopReqParams):
    """See section 8.3.5.4.3 in ISO 15118-20"""

    ev_max_charge_power: RationalNumber = Field(..., alias="evMaximumChargePower")
    ev_max_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL2"
    )
    ev_max_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumChargePowerL3"
    )
    ev_min_charge_power: RationalNumber = Field(..., alias="evMinimumChargePower")
    ev_min_charge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL2"
    )
    ev_min_charge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumChargePowerL3"
    )
    ev_present_active_power: RationalNumber = Field(
        ..., alias="evPresentActivePower"
    )
    ev_present_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evPresentActivePowerL2"
    )
    ev_present_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evPresentActivePowerL3"
    )
    ev_present_reactive_power: RationalNumber = Field(
        ..., alias="evPresentReactivePower"
    )
    ev_present_reactive_power_l2: Optional[RationalNumber] = Field(
        None, alias="evPresentReactivePowerL2"
    )
    ev_present_reactive_power_l3: Optional[RationalNumber] = Field(
        None, alias="evPresentReactivePowerL3"
    )


class DynamicACChargeLoopResParams(DynamicChargeLoopResParams):
    """See section 8.3.5.4.5 in ISO 15118-20"""

    evse_target_active_power: RationalNumber = Field(
        ..., alias="evseTargetActivePower"
    )
    evse_target_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseTargetActivePowerL2"
    )
    evse_target_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseTargetActivePowerL3"
    )
    evse_target_reactive_power: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePower"
    )
    evse_target_reactive_power_l2: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePowerL2"
    )
    evse_target_reactive_power_l3: Optional[RationalNumber] = Field(
        None, alias="evseTargetReactivePowerL3"
    )
    evse_present_active_power: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePower"
    )
    evse_present_active_power_l2: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL2"
    )
    evse_present_active_power_l3: Optional[RationalNumber] = Field(
        None, alias="evsePresentActivePowerL3"
    )


class BPTDynamicACChargeLoopReqParams(DynamicACChargeLoopReqParams):
    """See section 8.3.5.4.7.3 in ISO 15118-20"""

    ev_max_discharge_power: RationalNumber = Field(
        ..., alias="evMaximumDischargePower"
    )
    ev_max_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL2"
    )
    ev_max_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMaximumDischargePowerL3"
    )
    ev_min_discharge_power: RationalNumber = Field(
        ..., alias="evMinimumDischargePower"
    )
    ev_min_discharge_power_l2: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL2"
    )
    ev_min_discharge_power_l3: Optional[RationalNumber] = Field(
        None, alias="evMinimumDischargePowerL3"
    )
    ev_max_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMaximumV2xEnergyRequest"
    )
    ev_min_v2x_energy_request: Optional[RationalNumber] = Field(
        None, alias="evMinimumV2xEnergyRequest"
    )


class BPTDynamicACChargeLoopResParams(DynamicACChargeLoopResParams):
    """See section 8.3.5.4.7.5 in ISO 15118-20"""


AC_CPD_REQ_MODE = ChoiceGroup(
    "CPDReqEnergyTransferMode",
    ChoiceMember(
        "ac_params", ACChargeParameterDiscoveryReqParams, "acCpdReqEnergyTransferMode"
    ),
    ChoiceMember(
        "bpt_ac_params",
        BPTACChargeParameterDiscoveryReqParams,
        "bptAcCpdReqEnergyTransferMode",
    ),
)


class ACChargeParameterDiscoveryReq(ChargeParameterDiscoveryReq):
    """See section 8.3.4.4.2.2 in ISO 15118-20"""

    xsd_name = "AC_ChargeParameterDiscoveryReq"

    energy_transfer_mode: Annotated[Choice, AC_CPD_REQ_MODE]


AC_CPD_RES_MODE = ChoiceGroup(
    "CPDResEnergyTransferMode",
    ChoiceMember(
        "ac_params", ACChargeParameterDiscoveryResParams, "acCpdResEnergyTransferMode"
    ),
    ChoiceMember(
        "bpt_ac_params",
        BPTACChargeParameterDiscoveryResParams,
        "bptAcCpdResEnergyTransferMode",
    ),
)


class ACChargeParameterDiscoveryRes(ChargeParameterDiscoveryRes):
    """See section 8.3.4.4.2.3 in ISO 15118-20"""

    xsd_name = "AC_ChargeParameterDiscoveryRes"
    request_type = ACChargeParameterDiscoveryReq

    energy_transfer_mode: Annotated[Choice, AC_CPD_RES_MODE]


AC_CL_REQ_MODE = ChoiceGroup(
    "CLReqControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledACChargeLoopReqParams,
        "scheduledAcClReqControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicACChargeLoopReqParams, "dynamicAcClReqControlMode"
    ),
    ChoiceMember(
        "bpt_scheduled_params",
        BPTScheduledACChargeLoopReqParams,
        "bptScheduledAcClReqControlMode",
    ),
    ChoiceMember(
        "bpt_dynamic_params",
        BPTDynamicACChargeLoopReqParams,
        "bptDynamicAcClReqControlMode",
    ),
)


class ACChargeLoopReq(ChargeLoopReq):
    """See section 8.3.4.4.3.2 in ISO 15118-20"""

    xsd_name = "AC_ChargeLoopReq"

    control_mode: Annotated[Choice, AC_CL_REQ_MODE]


AC_CL_RES_MODE = ChoiceGroup(
    "CLResControlMode",
    ChoiceMember(
        "scheduled_params",
        ScheduledACChargeLoopResParams,
        "scheduledAcClResControlMode",
    ),
    ChoiceMember(
        "dynamic_params", DynamicACChargeLoopResParams, "dynamicAcClResControlMode"
    ),
    ChoiceMember(
        "bpt_scheduled_params",
        BPTScheduledACChargeLoopResParams,
        "bptScheduledAcClResControlMode",
    ),
    ChoiceMember(
        "bpt_dynamic_params",
        BPTDynamicACChargeLoopResParams,
        "bptDynamicAcClResControlMode",
    ),
)


class ACChargeLoopRes(ChargeLoopRes):
    """See section 8.3.4.4.3.3 in ISO 15118-20"""

    xsd_name = "AC_ChargeLoopRes"
    request_type = ACChargeLoopReq

    evse_target_frequency: Optional[RationalNumber] = Field(
        None, alias="evseTargetFrequency"
    )
    control_mode: Annotated[Choice, AC_CL_RES_MODE]
