"""Domain exceptions: error codes and details used by the HTTP handlers."""

from docflow.domain.exceptions import (
    BusinessRuleException,
    DocflowException,
    DocumentValidationException,
    DocumentVersionConflictException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = DocflowException("boom")
    assert exc.error_code == "DocflowException"
    assert exc.to_dict() == {"error": "DocflowException", "message": "boom", "details": {}}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("bad", field="statusFlow")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "statusFlow"}
    assert ValidationException("bad").details == {}


def test_document_validation_joins_messages() -> None:
    errors = [
        {"field": "title", "message": "Title is required"},
        {"field": "lines[0].qty", "message": "Qty must be a number"},
    ]
    exc = DocumentValidationException(errors)
    assert exc.error_code == "DOCUMENT_VALIDATION_FAILED"
    assert exc.message == "Validation failed: Title is required, Qty must be a number"
    assert exc.details == {"errors": errors}
    assert exc.errors == errors


def test_business_rule_exception_merges_details() -> None:
    exc = BusinessRuleException("nope", "pending_approvals", pending_levels=[1])
    assert exc.error_code == "BUSINESS_RULE_VIOLATION"
    assert exc.rule == "pending_approvals"
    assert exc.details == {"rule": "pending_approvals", "pending_levels": [1]}


def test_not_found_names_resource() -> None:
    exc = ResourceNotFoundException("document_type", "WO")
    assert exc.message == "document_type not found: WO"
    assert exc.details == {"resource_type": "document_type", "resource_id": "WO"}


def test_version_conflict_details() -> None:
    exc = DocumentVersionConflictException("d1", 2, 3)
    assert exc.error_code == "DOCUMENT_VERSION_CONFLICT"
    assert exc.details == {"document_id": "d1", "expected_version": 2, "actual_version": 3}


def test_sql_not_configured_is_service_unavailable() -> None:
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
