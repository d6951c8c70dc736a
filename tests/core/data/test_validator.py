"""Tests for record validation and transformation."""

import pytest

from vehicle_catalog.core.data.ingestion import (
    Make,
    VehicleType,
    parse_identifier,
    transform_make,
    transform_vehicle_type,
    validate_make_data,
    validate_vehicle_type_data,
)
from vehicle_catalog.core.exceptions import TransformationError


class TestValidateMakeData:
    def test_valid(self):
        assert validate_make_data({"Make_ID": "440", "Make_Name": "ASTON MARTIN"}) is True

    @pytest.mark.parametrize(
        "data",
        [
            None,
            "Make_ID",
            42,
            ["440", "ASTON MARTIN"],
            {},
            {"Make_ID": "440"},
            {"Make_Name": "ASTON MARTIN"},
            {"Make_ID": None, "Make_Name": "ASTON MARTIN"},
            {"Make_ID": "440", "Make_Name": None},
        ],
    )
    def test_invalid(self, data):
        assert validate_make_data(data) is False

    def test_empty_strings_pass_shape_check(self):
        assert validate_make_data({"Make_ID": "", "Make_Name": ""}) is True


class TestValidateVehicleTypeData:
    def test_valid(self):
        assert validate_vehicle_type_data({"VehicleTypeId": "2", "VehicleTypeName": "Passenger Car"}) is True

    @pytest.mark.parametrize(
        "data",
        [None, {"VehicleTypeId": "2"}, {"VehicleTypeName": "Truck"}, {"Make_ID": "1", "Make_Name": "x"}],
    )
    def test_invalid(self, data):
        assert validate_vehicle_type_data(data) is False


class TestParseIdentifier:
    @pytest.mark.parametrize(
        "value,expected",
        [("123", 123), (" 42", 42), ("12.0", 12), ("7abc", 7), ("-3", -3), (99, 99)],
    )
    def test_leading_digits(self, value, expected):
        assert parse_identifier(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "  ", "x12", True, {"a": 1}])
    def test_no_digits(self, value):
        assert parse_identifier(value) is None


class TestTransformMake:
    def test_trims_and_parses(self):
        assert transform_make({"Make_ID": "123", "Make_Name": "  Toyota  "}) == Make(make_id=123, make_name="Toyota")

    def test_invalid_id_mentions_raw_value(self):
        with pytest.raises(TransformationError) as excinfo:
            transform_make({"Make_ID": "abc", "Make_Name": "Toyota"})

        assert excinfo.value.message == "Invalid Make_ID: abc"

    def test_blank_name_mentions_id(self):
        with pytest.raises(TransformationError) as excinfo:
            transform_make({"Make_ID": "123", "Make_Name": "   "})

        assert excinfo.value.message == "Empty Make_Name for Make_ID: 123"

    def test_numeric_name_is_stringified(self):
        assert transform_make({"Make_ID": "5", "Make_Name": 1999}).make_name == "1999"


class TestTransformVehicleType:
    def test_trims_and_parses(self):
        raw = {"VehicleTypeId": "2", "VehicleTypeName": " Passenger Car "}

        assert transform_vehicle_type(raw) == VehicleType(type_id=2, type_name="Passenger Car")

    def test_invalid_id(self):
        with pytest.raises(TransformationError, match="Invalid VehicleTypeId: n/a"):
            transform_vehicle_type({"VehicleTypeId": "n/a", "VehicleTypeName": "Truck"})

    def test_blank_name(self):
        with pytest.raises(TransformationError, match="Empty VehicleTypeName for VehicleTypeId: 3"):
            transform_vehicle_type({"VehicleTypeId": "3", "VehicleTypeName": ""})
