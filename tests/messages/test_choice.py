import pytest
from pydantic import ValidationError

from iso15118json.exceptions import (
    ChoiceGroupError,
    ConflictingChoiceError,
    MissingChoiceError,
    V2GMessageError,
)
from iso15118json.messages.choice import Choice
from iso15118json.messages.iso15118_20.ac import AC_CL_REQ_MODE, ACChargeLoopReq
from iso15118json.messages.iso15118_20.common_messages import (
    PARAMETER_VALUE,
    PRICE_SCHEDULE,
    ChargingSchedule,
    Parameter,
    PowerSchedule,
    PowerScheduleEntry,
    PriceLevelSchedule,
    PriceLevelScheduleEntry,
)
from iso15118json.messages.iso15118_20.common_types import RationalNumber
from tests.iso15118_20.test_messages import get_ac_charge_loop_req

PARAMETER_VALUE_KEYS = [
    "boolValue",
    "byteValue",
    "shortValue",
    "intValue",
    "rationalNumber",
    "finiteString",
]


def get_power_schedule() -> PowerSchedule:
    return PowerSchedule(
        time_anchor=0,
        entries=[
            PowerScheduleEntry(
                duration=3600, power=RationalNumber(exponent=3, value=11)
            )
        ],
    )


def get_price_level_schedule() -> PriceLevelSchedule:
    return PriceLevelSchedule(
        time_anchor=0,
        schedule_id=1,
        num_price_levels=2,
        entries=[PriceLevelScheduleEntry(duration=3600, price_level=1)],
    )


class TestChoiceGroup:
    def test_member_given_by_name(self):
        parameter = Parameter(name="Connector", int_value=1)

        assert parameter.value == Choice("int_value", 1)
        assert parameter.value.is_("int_value")
        assert parameter.value.get("int_value") == 1
        assert parameter.value.get("bool_value") is None

    def test_member_given_by_alias(self):
        parameter = Parameter(name="Connector", intValue=0)

        assert parameter.value == Choice("int_value", 0)

    def test_member_given_as_choice(self):
        parameter = Parameter(name="ControlMode", value=Choice("finite_str", "Dynamic"))

        assert parameter.value.member == "finite_str"
        assert parameter.value.value == "Dynamic"

    def test_nested_model_member(self):
        parameter = Parameter(
            name="Power", rational_number=RationalNumber(exponent=2, value=110)
        )

        assert parameter.value.get("rational_number").get_decimal_value() == 11000

    def test_no_member_set(self):
        with pytest.raises(MissingChoiceError) as exc_info:
            Parameter(name="Connector")

        error = exc_info.value
        assert error.group == "ParameterValue"
        assert error.field == "ParameterValue"
        assert error.members == PARAMETER_VALUE_KEYS
        assert "ParameterValue" in str(error)

    def test_two_members_set(self):
        with pytest.raises(ConflictingChoiceError) as exc_info:
            Parameter(name="Connector", bool_value=True, int_value=1)

        assert exc_info.value.group == "ParameterValue"
        assert exc_info.value.members == ["boolValue", "intValue"]

    def test_same_member_by_name_and_alias(self):
        with pytest.raises(ConflictingChoiceError):
            Parameter(name="Connector", int_value=1, intValue=2)

    def test_member_and_choice_set(self):
        with pytest.raises(ConflictingChoiceError) as exc_info:
            Parameter(name="Connector", value=Choice("int_value", 1), bool_value=True)

        assert exc_info.value.members == ["intValue", "boolValue"]

    def test_null_member_is_not_set(self):
        parameter = Parameter(name="Connector", bool_value=None, int_value=3)

        assert parameter.value == Choice("int_value", 3)

    def test_member_value_is_validated(self):
        # byteValue is an XSD byte
        with pytest.raises(ValidationError):
            Parameter(name="Connector", byte_value=200)

    def test_unknown_member(self):
        with pytest.raises(ValueError):
            PARAMETER_VALUE.member("long_value")

        with pytest.raises(ValidationError):
            Parameter(name="Connector", value=Choice("long_value", 1))

    def test_choice_errors_are_message_errors(self):
        with pytest.raises(V2GMessageError):
            Parameter(name="Connector")

        assert issubclass(MissingChoiceError, ChoiceGroupError)
        assert not issubclass(ChoiceGroupError, ValueError)

    def test_select(self):
        assert PARAMETER_VALUE.select("short_value", 512) == Choice("short_value", 512)

        with pytest.raises(ValueError):
            PARAMETER_VALUE.select("short_value", 2**15)

    def test_select_rejects_subclass_instance(self):
        bpt_params = get_ac_charge_loop_req("bpt_scheduled").control_mode.value

        with pytest.raises(ValueError):
            AC_CL_REQ_MODE.select("scheduled_params", bpt_params)
        assert AC_CL_REQ_MODE.select("bpt_scheduled_params", bpt_params) == Choice(
            "bpt_scheduled_params", bpt_params
        )

    @pytest.mark.parametrize(
        "key", ["scheduled_params", "scheduledAcClReqControlMode", "control_mode"]
    )
    def test_member_subclass_instance_is_rejected(self, key):
        request = get_ac_charge_loop_req("bpt_scheduled")
        value = request.control_mode.value
        if key == "control_mode":
            value = Choice("scheduled_params", value)

        with pytest.raises(ValidationError):
            ACChargeLoopReq(
                header=request.header,
                display_parameters=request.display_parameters,
                meter_info_requested=request.meter_info_requested,
                **{key: value},
            )

    def test_models_are_immutable(self):
        parameter = Parameter(name="Connector", int_value=1)

        with pytest.raises(ValidationError):
            parameter.value = Choice("int_value", 2)


class TestOptionalChoiceGroup:
    def test_no_member_set(self):
        schedule = ChargingSchedule(power_schedule=get_power_schedule())

        assert schedule.price_schedule is None
        assert not PRICE_SCHEDULE.required

    def test_one_member_set(self):
        schedule = ChargingSchedule(
            power_schedule=get_power_schedule(),
            price_level_schedule=get_price_level_schedule(),
        )

        assert schedule.price_schedule.is_("price_level_schedule")

    def test_two_members_set(self):
        with pytest.raises(ConflictingChoiceError) as exc_info:
            ChargingSchedule(
                power_schedule=get_power_schedule(),
                price_level_schedule=get_price_level_schedule(),
                absolutePriceSchedule={"timeAnchor": 0},
            )

        assert exc_info.value.group == "PriceSchedule"
