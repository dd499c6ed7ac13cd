"""
Tests for DecimalRecord (Pydantic wire model)

Покрывает:
- Создание и валидация модели
- Строгие целые (без неявных преобразований)
- JSON сериализация/десериализация
- Immutability (frozen=True)
- Интеграция со ScaledDecimal
"""

import pytest
from pydantic import ValidationError

from src.core.domain import DecimalRecord
from src.core.math.safe_integer import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER
from src.core.math.scaled_decimal import ScaledDecimal


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_record_data():
    """Валидная запись 123.456."""
    return {"magnitude": 123456, "scale": 3}


# =============================================================================
# TESTS
# =============================================================================


class TestDecimalRecordValidation:
    """Валидация полей"""

    def test_valid(self, valid_record_data):
        record = DecimalRecord(**valid_record_data)
        assert record.magnitude == 123456
        assert record.scale == 3

    def test_bounds(self):
        DecimalRecord(magnitude=MAX_SAFE_INTEGER, scale=0)
        DecimalRecord(magnitude=MIN_SAFE_INTEGER, scale=0)
        with pytest.raises(ValidationError):
            DecimalRecord(magnitude=MAX_SAFE_INTEGER + 1, scale=0)
        with pytest.raises(ValidationError):
            DecimalRecord(magnitude=MIN_SAFE_INTEGER - 1, scale=0)

    def test_negative_scale(self):
        with pytest.raises(ValidationError):
            DecimalRecord(magnitude=1, scale=-1)

    @pytest.mark.parametrize("magnitude", ["12", 12.0, True, None])
    def test_strict_integers(self, magnitude):
        """Строки, float и bool не приводятся к int"""
        with pytest.raises(ValidationError):
            DecimalRecord(magnitude=magnitude, scale=0)

    def test_missing_field(self):
        with pytest.raises(ValidationError):
            DecimalRecord(magnitude=1)

    def test_extra_field_forbidden(self, valid_record_data):
        with pytest.raises(ValidationError):
            DecimalRecord(**valid_record_data, currency="USD")

    def test_frozen(self, valid_record_data):
        record = DecimalRecord(**valid_record_data)
        with pytest.raises(ValidationError):
            record.scale = 4


class TestDecimalRecordSerialization:
    def test_json_roundtrip(self, valid_record_data):
        record = DecimalRecord(**valid_record_data)
        restored = DecimalRecord.model_validate_json(record.model_dump_json())
        assert restored == record

    def test_json_rejects_string_magnitude(self):
        with pytest.raises(ValidationError):
            DecimalRecord.model_validate_json('{"magnitude": "1", "scale": 0}')

    def test_model_dump_matches_serialize(self, valid_record_data):
        value = ScaledDecimal.deserialize(valid_record_data)
        assert DecimalRecord.from_decimal(value).model_dump() == value.serialize()


class TestDecimalRecordIntegration:
    def test_to_decimal(self, valid_record_data):
        value = DecimalRecord(**valid_record_data).to_decimal()
        assert isinstance(value, ScaledDecimal)
        assert str(value) == "123.456"

    def test_to_decimal_returns_fresh_instance(self, valid_record_data):
        record = DecimalRecord(**valid_record_data)
        a = record.to_decimal()
        a.increase_scale(2)
        assert record.to_decimal() == ScaledDecimal(123456, 3)

    def test_from_decimal(self):
        record = DecimalRecord.from_decimal(ScaledDecimal.parse("-0.05"))
        assert record.magnitude == -5
        assert record.scale == 2
