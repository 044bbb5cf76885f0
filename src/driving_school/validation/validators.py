"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult with field-keyed error messages for form rendering
- Reusable field checks shared by the record validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationResult:
    """
    Result of record validation.

    Attributes:
        is_valid: Whether validation passed
        field_errors: Field name -> violation message (one per field)
        warnings: Non-fatal messages
    """

    is_valid: bool = True
    field_errors: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, field_name: str, message: str) -> 'ValidationResult':
        """
        Record a violation for a field, replacing any earlier one.

        Examples:
            >>> result = ValidationResult()
            >>> result.add_error("name", "Name is required").add_error("email", "Invalid email")
        """
        self.field_errors[field_name] = message
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """Add a warning message."""
        self.warnings.append(message)
        return self

    @property
    def errors(self) -> List[str]:
        """Violation messages prefixed with their field."""
        return [f"{name}: {message}" for name, message in self.field_errors.items()]

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.field_errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.field_errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate() and report violations through
    ValidationResult.add_error() instead of raising.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with field errors and warnings
        """
        pass

    @staticmethod
    def is_blank(value: Any) -> bool:
        """Check if a form value is missing, None or whitespace only."""
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        return False

    def validate_required_fields(
        self,
        data: dict,
        required_fields: Dict[str, str],
        result: ValidationResult
    ) -> None:
        """
        Report every blank required field.

        Args:
            data: Record to check
            required_fields: Field name -> message used when it is blank
            result: Result collecting the violations
        """
        for field_name, message in required_fields.items():
            if self.is_blank(data.get(field_name)):
                result.add_error(field_name, message)

    def validate_date_format(
        self,
        date_str: str,
        field_name: str = "date"
    ) -> Optional[str]:
        """
        Validate date format (YYYY-MM-DD).

        Returns:
            Error message if invalid, None if valid
        """
        pattern = r'^\d{4}-\d{2}-\d{2}$'
        if not isinstance(date_str, str) or not re.match(pattern, date_str):
            return f"Invalid {field_name} format: {date_str} (expected YYYY-MM-DD)"
        return None

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        """
        Validate email format.

        Returns:
            Error message if invalid, None if valid
        """
        if not re.match(r'^\S+@\S+\.\S+$', email):
            return f"Invalid {field_name}"
        return None

    def validate_cpf_format(self, cpf: str) -> Optional[str]:
        """
        Validate CPF layout (000.000.000-00); check digits are not verified.

        Returns:
            Error message if invalid, None if valid
        """
        if not re.match(r'^\d{3}\.\d{3}\.\d{3}-\d{2}$', cpf):
            return "CPF must be in the format 000.000.000-00"
        return None

    def validate_choice(
        self,
        value: Any,
        field_name: str,
        choices
    ) -> Optional[str]:
        """
        Validate membership in a fixed set of values.

        Returns:
            Error message if invalid, None if valid
        """
        if value not in choices:
            return (
                f"Invalid {field_name}: {value} "
                f"(must be one of: {', '.join(str(c) for c in choices)})"
            )
        return None
