"""Errors raised by docflow services.

Each carries a stable error_code and a details dict; docflow.core.exception_handlers
turns them into JSON responses. Nothing here knows about HTTP.
"""

from typing import Any


class DocflowException(Exception):
    """Root of the docflow error hierarchy.

    error_code defaults to the class name; details is always a dict so
    the response body has a fixed shape.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DocflowException):
    """Raised when input validation fails (e.g. malformed status flow definition)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DocumentValidationException(DocflowException):
    """Raised when document header or line data fails the type's field rules.

    Carries every field error; the message joins the individual messages.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        """Initialize with the ordered list of field errors.

        Args:
            errors: Items of the form {"field": ..., "message": ...},
                header errors first, then line errors.
        """
        self.errors = errors
        joined = ", ".join(e["message"] for e in errors)
        super().__init__(
            f"Validation failed: {joined}",
            "DOCUMENT_VALIDATION_FAILED",
            {"errors": errors},
        )


class BusinessRuleException(DocflowException):
    """Raised when an operation is refused by a workflow rule.

    The message names the state that caused the refusal (current status,
    allowed targets, pending levels, required role); `rule` is a stable
    machine-readable identifier for the kind of refusal.
    """

    def __init__(self, message: str, rule: str, **details_extra: Any) -> None:
        """Initialize with message and rule identifier.

        Args:
            message: Human-readable description.
            rule: Rule identifier (e.g. 'invalid_transition', 'pending_approvals').
            **details_extra: Optional keys merged into details.
        """
        super().__init__(
            message, "BUSINESS_RULE_VIOLATION", {"rule": rule, **details_extra}
        )
        self.rule = rule


class ResourceNotFoundException(DocflowException):
    """A document type, field definition or document does not exist.

    resource_id is whatever the caller looked up by: an id or a type code.
    """

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DocumentVersionConflictException(DocflowException):
    """Raised when a caller-supplied expected version does not match the stored one."""

    def __init__(self, document_id: str, expected_version: int, actual_version: int) -> None:
        super().__init__(
            "Document was updated by another request; reload and retry.",
            "DOCUMENT_VERSION_CONFLICT",
            {
                "document_id": document_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


class SqlNotConfiguredException(DocflowException):
    """Raised when an operation requires the SQL database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
