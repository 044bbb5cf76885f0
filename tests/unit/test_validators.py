"""
Unit tests for validation layer.
"""

import pytest
from datetime import date

from driving_school.validation.validators import ValidationResult
from driving_school.validation.record_validators import (
    InstructorValidator,
    StudentValidator,
    VehicleValidator,
)


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_valid_result(self):
        """Test creating a valid result."""
        result = ValidationResult()

        assert result.is_valid
        assert not result.has_errors
        assert not result.has_warnings
        assert result.field_errors == {}

    def test_add_error(self):
        """Test adding errors keyed by field."""
        result = ValidationResult()
        result.add_error("name", "Name is required").add_error("email", "Invalid email")

        assert not result.is_valid
        assert result.has_errors
        assert result.field_errors == {
            "name": "Name is required",
            "email": "Invalid email",
        }
        assert result.errors == ["name: Name is required", "email: Invalid email"]

    def test_one_message_per_field(self):
        """Test a later error replaces the earlier one for the same field."""
        result = ValidationResult()
        result.add_error("date", "Select a date")
        result.add_error("date", "Instructor does not work on this day")

        assert result.field_errors == {"date": "Instructor does not work on this day"}

    def test_add_warning(self):
        """Test adding warnings."""
        result = ValidationResult()
        result.add_warning("Vehicle vehicle_3 is maintenance")

        assert result.is_valid  # Warnings don't affect validity
        assert result.has_warnings
        assert len(result.warnings) == 1

    def test_get_summary_valid(self):
        """Test summary for valid result."""
        assert ValidationResult().get_summary() == "Validation passed"

    def test_get_summary_with_errors(self):
        """Test summary with errors."""
        result = ValidationResult()
        result.add_error("student_id", "Select a student")
        result.add_error("time", "Select a time")

        summary = result.get_summary()

        assert "Errors (2)" in summary
        assert "student_id: Select a student" in summary
        assert "time: Select a time" in summary


class TestStudentValidator:
    """Test cases for StudentValidator."""

    @pytest.fixture
    def validator(self):
        return StudentValidator()

    @pytest.fixture
    def valid_student(self):
        return {
            "name": "Maria Silva",
            "email": "maria@example.com",
            "phone": "(11) 98765-4321",
            "cpf": "123.456.789-00",
            "birth_date": "2000-05-10",
            "address": "Rua A, 100",
            "category": "B",
        }

    def test_valid_student(self, validator, valid_student):
        """Test validation of valid student."""
        result = validator.validate(valid_student)

        assert result.is_valid
        assert not result.has_errors

    def test_missing_required_fields(self, validator):
        """Test every blank required field is reported."""
        result = validator.validate({"name": "  ", "category": "B"})

        assert not result.is_valid
        assert set(result.field_errors) == {
            "name", "email", "phone", "cpf", "birth_date", "address",
        }
        assert result.field_errors["name"] == "Name is required"

    def test_invalid_email(self, validator, valid_student):
        """Test email without a domain."""
        valid_student["email"] = "maria@example"

        result = validator.validate(valid_student)

        assert result.field_errors == {"email": "Invalid email"}

    def test_invalid_cpf(self, validator, valid_student):
        """Test CPF without punctuation."""
        valid_student["cpf"] = "12345678900"

        result = validator.validate(valid_student)

        assert "cpf" in result.field_errors

    def test_invalid_birth_date(self, validator, valid_student):
        """Test invalid date format."""
        valid_student["birth_date"] = "10/05/2000"

        result = validator.validate(valid_student)

        assert "date format" in result.field_errors["birth_date"].lower()

    def test_invalid_category(self, validator, valid_student):
        """Test unknown license category."""
        valid_student["category"] = "Z"

        result = validator.validate(valid_student)

        assert "category" in result.field_errors


class TestInstructorValidator:
    """Test cases for InstructorValidator."""

    @pytest.fixture
    def validator(self):
        return InstructorValidator()

    @pytest.fixture
    def valid_instructor(self):
        return {
            "name": "Carlos Pereira",
            "email": "carlos@example.com",
            "phone": "(11) 91234-5678",
            "cpf": "321.654.987-00",
            "license": "12345678900",
            "specialties": ["Categoria B"],
            "working_hours": {
                "start": "08:00",
                "end": "18:00",
                "days": ["monday", "wednesday"],
            },
        }

    def test_valid_instructor(self, validator, valid_instructor):
        """Test validation of valid instructor."""
        assert validator.validate(valid_instructor).is_valid

    def test_no_specialty(self, validator, valid_instructor):
        """Test instructor without specialties."""
        valid_instructor["specialties"] = []

        result = validator.validate(valid_instructor)

        assert result.field_errors == {"specialties": "Select at least one specialty"}

    def test_no_working_day(self, validator, valid_instructor):
        """Test instructor without working days."""
        valid_instructor["working_hours"]["days"] = []

        result = validator.validate(valid_instructor)

        assert result.field_errors == {"working_days": "Select at least one working day"}

    def test_unknown_weekday(self, validator, valid_instructor):
        """Test weekday names must be lowercase English."""
        valid_instructor["working_hours"]["days"] = ["Segunda"]

        result = validator.validate(valid_instructor)

        assert "Segunda" in result.field_errors["working_days"]

    def test_hours_must_start_before_end(self, validator, valid_instructor):
        """Test an empty or inverted working window."""
        valid_instructor["working_hours"]["start"] = "18:00"

        result = validator.validate(valid_instructor)

        assert "working_hours" in result.field_errors

    def test_invalid_hours(self, validator, valid_instructor):
        """Test unparseable working hours."""
        valid_instructor["working_hours"]["end"] = "late"

        result = validator.validate(valid_instructor)

        assert "Invalid time" in result.field_errors["working_hours"]


class TestVehicleValidator:
    """Test cases for VehicleValidator."""

    @pytest.fixture
    def validator(self):
        return VehicleValidator()

    @pytest.fixture
    def valid_vehicle(self):
        return {
            "brand": "Volkswagen",
            "model": "Gol",
            "year": 2022,
            "plate": "ABC-1234",
            "color": "Branco",
            "category": "B",
        }

    def test_valid_vehicle(self, validator, valid_vehicle):
        """Test validation of valid vehicle."""
        assert validator.validate(valid_vehicle).is_valid

    @pytest.mark.parametrize("plate", ["abc-1234", "ABC1234", "AB-12345"])
    def test_invalid_plate(self, validator, valid_vehicle, plate):
        """Test plate format ABC-1234."""
        valid_vehicle["plate"] = plate

        result = validator.validate(valid_vehicle)

        assert result.field_errors == {"plate": "Plate must be in the format ABC-1234"}

    def test_year_range(self, validator, valid_vehicle):
        """Test model year bounds."""
        valid_vehicle["year"] = 1989
        assert "year" in validator.validate(valid_vehicle).field_errors

        valid_vehicle["year"] = date.today().year + 1
        assert validator.validate(valid_vehicle).is_valid

        valid_vehicle["year"] = date.today().year + 2
        assert "year" in validator.validate(valid_vehicle).field_errors


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
