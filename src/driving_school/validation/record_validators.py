"""
Student, instructor and vehicle record validators.

Validates the registration forms before records are sent to the store.
"""

import re
from datetime import date
from typing import Any, Mapping, Optional

from ..models.people import CATEGORIES, WEEKDAYS
from ..scheduling.calendar import parse_hour
from .validators import Validator, ValidationResult


class StudentValidator(Validator):
    """
    Validator for student records.

    Validates:
    - Required contact and identity fields
    - Email and CPF format
    - License category
    """

    REQUIRED_FIELDS = {
        "name": "Name is required",
        "email": "Email is required",
        "phone": "Phone is required",
        "cpf": "CPF is required",
        "birth_date": "Birth date is required",
        "address": "Address is required",
    }

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        self.validate_required_fields(data, self.REQUIRED_FIELDS, result)

        if "email" not in result.field_errors:
            error = self.validate_email_format(data["email"])
            if error:
                result.add_error("email", error)

        if "cpf" not in result.field_errors:
            error = self.validate_cpf_format(data["cpf"])
            if error:
                result.add_error("cpf", error)

        if "birth_date" not in result.field_errors:
            error = self.validate_date_format(data["birth_date"], "birth date")
            if error:
                result.add_error("birth_date", error)

        error = self.validate_choice(data.get("category"), "category", CATEGORIES)
        if error:
            result.add_error("category", error)

        return result


class InstructorValidator(Validator):
    """
    Validator for instructor records.

    Validates:
    - Required contact, identity and license fields
    - At least one specialty and one working day
    - Working hours start before they end
    """

    REQUIRED_FIELDS = {
        "name": "Name is required",
        "email": "Email is required",
        "phone": "Phone is required",
        "cpf": "CPF is required",
        "license": "Driver's license is required",
    }

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        self.validate_required_fields(data, self.REQUIRED_FIELDS, result)

        if "email" not in result.field_errors:
            error = self.validate_email_format(data["email"])
            if error:
                result.add_error("email", error)

        if "cpf" not in result.field_errors:
            error = self.validate_cpf_format(data["cpf"])
            if error:
                result.add_error("cpf", error)

        if not data.get("specialties"):
            result.add_error("specialties", "Select at least one specialty")

        working_hours = data.get("working_hours") or {}
        days = working_hours.get("days") or []
        if not days:
            result.add_error("working_days", "Select at least one working day")
        else:
            unknown = [day for day in days if day not in WEEKDAYS]
            if unknown:
                result.add_error("working_days", f"Unknown weekdays: {', '.join(unknown)}")

        error = self._validate_hours(working_hours)
        if error:
            result.add_error("working_hours", error)

        return result

    @staticmethod
    def _validate_hours(working_hours: Mapping[str, Any]) -> Optional[str]:
        start = working_hours.get("start")
        end = working_hours.get("end")
        if not start or not end:
            return "Working hours need a start and an end"
        try:
            if parse_hour(start) >= parse_hour(end):
                return f"Working hours must start before they end ({start}-{end})"
        except ValueError as e:
            return str(e)
        return None


class VehicleValidator(Validator):
    """
    Validator for vehicle records.

    Validates:
    - Brand, model and color filled in
    - Plate in ABC-1234 format
    - Model year between 1990 and next year
    - License category
    """

    REQUIRED_FIELDS = {
        "brand": "Brand is required",
        "model": "Model is required",
        "plate": "Plate is required",
        "color": "Color is required",
    }

    MIN_YEAR = 1990

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        self.validate_required_fields(data, self.REQUIRED_FIELDS, result)

        if "plate" not in result.field_errors:
            if not re.match(r'^[A-Z]{3}-\d{4}$', data["plate"]):
                result.add_error("plate", "Plate must be in the format ABC-1234")

        year = data.get("year")
        max_year = date.today().year + 1
        if not isinstance(year, int) or not self.MIN_YEAR <= year <= max_year:
            result.add_error("year", f"Invalid year (must be {self.MIN_YEAR}-{max_year})")

        error = self.validate_choice(data.get("category"), "category", CATEGORIES)
        if error:
            result.add_error("category", error)

        return result
