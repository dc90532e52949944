"""DocumentTypeDefinitionValidator unit tests (status flows, approval configs, field settings)."""

import pytest

from docflow.application.services.definition_validator import (
    DocumentTypeDefinitionValidator,
)
from docflow.domain.exceptions import ValidationException


@pytest.fixture
def validator() -> DocumentTypeDefinitionValidator:
    return DocumentTypeDefinitionValidator()


def _flow(**overrides):
    flow = {
        "initialStatus": "draft",
        "statuses": [
            {"key": "draft", "label": "Draft"},
            {"key": "submitted", "label": "Submitted", "color": "blue"},
            {"key": "approved", "label": "Approved", "color": "green"},
        ],
        "transitions": {"draft": ["submitted"], "submitted": ["approved", "draft"]},
    }
    flow.update(overrides)
    return flow


class TestStatusFlow:
    def test_valid_flow_parses(self, validator) -> None:
        flow = validator.parse_status_flow(_flow())
        assert flow.initial_status == "draft"
        assert flow.status_keys == ["draft", "submitted", "approved"]
        assert flow.allowed_from("submitted") == ["approved", "draft"]

    def test_missing_statuses_rejected(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_status_flow({"initialStatus": "draft"})
        assert exc_info.value.details == {"field": "statusFlow"}

    def test_undefined_initial_status_rejected(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_status_flow(_flow(initialStatus="open"))
        assert "Initial status 'open'" in exc_info.value.message

    def test_unknown_transition_target_rejected(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_status_flow(_flow(transitions={"draft": ["closed"]}))
        assert "'closed'" in exc_info.value.message

    def test_duplicate_status_keys_rejected(self, validator) -> None:
        flow = _flow(statuses=[{"key": "draft"}, {"key": "draft"}])
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_status_flow(flow)
        assert "Duplicate status keys: draft" in exc_info.value.message

    def test_transitions_must_be_lists(self, validator) -> None:
        with pytest.raises(ValidationException):
            validator.parse_status_flow(_flow(transitions={"draft": "submitted"}))


class TestApprovalConfig:
    def test_none_and_empty_levels_mean_no_approval(self, validator) -> None:
        assert validator.parse_approval_config(None) is None
        assert validator.parse_approval_config({"levels": []}) is None

    def test_levels_parsed_in_order(self, validator) -> None:
        config = validator.parse_approval_config(
            {
                "levels": [
                    {"role": "manager", "level": 1},
                    {"role": "director", "level": 2},
                ],
                "amountField": "total",
            }
        )
        assert config.level_numbers == [1, 2]
        assert config.amount_field == "total"

    def test_level_must_be_positive(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_approval_config({"levels": [{"role": "manager", "level": 0}]})
        assert exc_info.value.details == {"field": "approvalConfig"}

    def test_levels_must_increase(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.parse_approval_config(
                {
                    "levels": [
                        {"role": "director", "level": 2},
                        {"role": "manager", "level": 1},
                    ]
                }
            )
        assert "strictly increasing" in exc_info.value.message

    def test_role_required(self, validator) -> None:
        with pytest.raises(ValidationException):
            validator.parse_approval_config({"levels": [{"level": 1}]})


class TestFieldSettings:
    @pytest.mark.parametrize("key", ["qty", "_internal", "line_total2"])
    def test_valid_field_keys(self, validator, key) -> None:
        validator.validate_field_key(key)

    @pytest.mark.parametrize("key", ["", "2fast", "unit-price", "has space"])
    def test_invalid_field_keys(self, validator, key) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.validate_field_key(key)
        assert exc_info.value.details == {"field": "fieldKey"}

    def test_unknown_field_type(self, validator) -> None:
        with pytest.raises(ValidationException) as exc_info:
            validator.validate_field_type("rating")
        assert "Unknown field type 'rating'" in exc_info.value.message
        validator.validate_field_type("lookup_supplier")

    def test_options_must_be_array(self, validator) -> None:
        validator.validate_options(None)
        validator.validate_options(["a", {"value": "b", "label": "B"}])
        with pytest.raises(ValidationException):
            validator.validate_options({"a": 1})

    def test_rules_shape_and_pattern(self, validator) -> None:
        validator.validate_rules({"min": 0, "max": 9.5, "pattern": "^[0-9]+$"})
        with pytest.raises(ValidationException):
            validator.validate_rules({"minLength": -1})
        with pytest.raises(ValidationException) as exc_info:
            validator.validate_rules({"pattern": "(unclosed"})
        assert "pattern" in exc_info.value.message
