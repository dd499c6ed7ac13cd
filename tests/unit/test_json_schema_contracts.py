"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора записи ScaledDecimal:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и границ
- Интеграция с ScaledDecimal.serialize() и DecimalRecord
"""

import json
import logging
from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    ScaledDecimalValidator,
    SchemaLoader,
    validate_scaled_decimal,
)
from src.core.domain import DecimalRecord
from src.core.math.safe_integer import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER
from src.core.math.scaled_decimal import ScaledDecimal, ScaledDecimalError


SCHEMA_DIR = Path(__file__).parent.parent.parent / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    def test_loads_and_caches(self):
        loader = SchemaLoader()
        first = loader.load_schema("scaled_decimal")
        second = loader.load_schema("scaled_decimal")
        assert first is second
        assert first["title"] == "ScaledDecimal"

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 5}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")

    def test_schema_bounds_match_safe_range(self):
        with open(SCHEMA_DIR / "scaled_decimal.json", encoding="utf-8") as f:
            schema = json.load(f)
        magnitude = schema["properties"]["magnitude"]
        assert magnitude["maximum"] == MAX_SAFE_INTEGER
        assert magnitude["minimum"] == MIN_SAFE_INTEGER
        assert schema["properties"]["scale"]["maximum"] == MAX_SAFE_INTEGER


# =============================================================================
# SCALED DECIMAL CONTRACT
# =============================================================================


class TestScaledDecimalContract:
    def test_valid(self):
        validate_scaled_decimal({"magnitude": -123456, "scale": 3})

    @pytest.mark.parametrize(
        "data",
        [
            {"magnitude": 1},
            {"scale": 0},
            {"magnitude": "1", "scale": 0},
            {"magnitude": 1, "scale": -1},
            {"magnitude": 1.5, "scale": 0},
            {"magnitude": 5.0, "scale": 0},
            {"magnitude": 1, "scale": 2.0},
            {"magnitude": True, "scale": 0},
            {"magnitude": MAX_SAFE_INTEGER + 1, "scale": 0},
            {"magnitude": 1, "scale": 0, "extra": 1},
        ],
    )
    def test_invalid(self, data):
        with pytest.raises(ValidationError):
            validate_scaled_decimal(data)

    def test_is_valid_and_iter_errors(self):
        validator = ScaledDecimalValidator()
        assert validator.is_valid({"magnitude": 0, "scale": 0})
        assert not validator.is_valid({"magnitude": "x", "scale": -1})
        errors = list(validator.iter_errors({"magnitude": "x", "scale": -1}))
        assert len(errors) == 2

    def test_violation_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="src.core.contracts.validators"):
            with pytest.raises(ValidationError):
                validate_scaled_decimal({"magnitude": 1})
        assert "scaled_decimal contract violation" in caplog.text

    @pytest.mark.parametrize("text", ["0", "-0.0001", "123.456", "9007199254740991"])
    def test_serialize_conforms(self, text):
        validate_scaled_decimal(ScaledDecimal.parse(text).serialize())

    def test_record_dump_conforms(self):
        record = DecimalRecord.from_decimal(ScaledDecimal.parse_lax("-.5"))
        validate_scaled_decimal(record.model_dump())

    @pytest.mark.parametrize(
        "data",
        [
            {"magnitude": 5.0, "scale": 0},
            {"magnitude": 1, "scale": 3.0},
            {"magnitude": 7, "scale": 2},
            {"magnitude": 7},
        ],
    )
    def test_contract_agrees_with_deserialize(self, data):
        """Контракт принимает ровно те записи, которые принимает deserialize"""
        try:
            ScaledDecimal.deserialize(data)
            accepted = True
        except ScaledDecimalError:
            accepted = False
        assert ScaledDecimalValidator().is_valid(data) is accepted
