"""Domain enumerations for docflow.

Enums represent fixed sets of domain values (e.g. field types).
"""

from enum import Enum


class FieldType(str, Enum):
    """Declared type of a dynamic field.

    Determines how a raw value is coerced and which validation rules apply.
    """

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CURRENCY = "currency"
    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    DATE = "date"
    DATETIME = "datetime"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    FILE = "file"
    SIGNATURE = "signature"
    LOOKUP_PROJECT = "lookup_project"
    LOOKUP_WAREHOUSE = "lookup_warehouse"
    LOOKUP_SUPPLIER = "lookup_supplier"
    LOOKUP_EMPLOYEE = "lookup_employee"
    LOOKUP_ITEM = "lookup_item"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid field type values as strings."""
        return [t.value for t in cls]

    @property
    def is_lookup(self) -> bool:
        """Return True for reference fields (lookup_*)."""
        return self.value.startswith("lookup_")

    @property
    def is_textual(self) -> bool:
        """Return True for types that accept minLength/maxLength/pattern rules."""
        return self in _TEXTUAL


_TEXTUAL = frozenset(
    {FieldType.TEXT, FieldType.TEXTAREA, FieldType.EMAIL, FieldType.PHONE, FieldType.URL}
)
