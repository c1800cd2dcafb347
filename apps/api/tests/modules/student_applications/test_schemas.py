"""
Tests for intake validation rules.
"""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from kinderadmin.modules.enrollment.schemas import age_on
from kinderadmin.modules.student_applications.schemas import StudentApplicationCreate


def _error_fields(exc: ValidationError) -> set[str]:
    return {str(error["loc"][0]) for error in exc.errors()}


class TestAgeOn:
    def test_birthday_not_reached(self):
        assert age_on(date(2020, 6, 10), date(2024, 6, 9)) == 3

    def test_birthday_today(self):
        assert age_on(date(2020, 6, 10), date(2024, 6, 10)) == 4


class TestStudentApplicationCreate:
    def test_valid_payload(self, intake_payload):
        data = StudentApplicationCreate(**intake_payload)

        assert data.student_name == "Luis Pérez"
        assert data.blood_type.value == "A+"
        assert data.height == 104.0

    def test_allergies_from_comma_string(self, intake_payload):
        intake_payload["allergies"] = " polen, , lactosa ,"

        data = StudentApplicationCreate(**intake_payload)

        assert data.allergies == ["polen", "lactosa"]

    def test_allergies_list_is_trimmed(self, intake_payload):
        intake_payload["allergies"] = ["  maní", "", "gluten "]

        data = StudentApplicationCreate(**intake_payload)

        assert data.allergies == ["maní", "gluten"]

    def test_allergies_optional(self, intake_payload):
        del intake_payload["allergies"]

        assert StudentApplicationCreate(**intake_payload).allergies == []

    def test_numeric_strings_are_coerced(self, intake_payload):
        intake_payload["weight"] = "18.4"
        intake_payload["height"] = "99"

        data = StudentApplicationCreate(**intake_payload)

        assert data.weight == 18.4
        assert data.height == 99.0

    @pytest.mark.parametrize("field", ["weight", "height"])
    @pytest.mark.parametrize("value", [-1, 0])
    def test_non_positive_measurements(self, intake_payload, field, value):
        intake_payload[field] = value

        with pytest.raises(ValidationError) as exc_info:
            StudentApplicationCreate(**intake_payload)

        assert field in _error_fields(exc_info.value)

    def test_future_birth_date(self, intake_payload):
        intake_payload["birth_date"] = (date.today() + timedelta(days=1)).isoformat()

        with pytest.raises(ValidationError, match="future"):
            StudentApplicationCreate(**intake_payload)

    def test_newborn_too_young(self, intake_payload):
        intake_payload["birth_date"] = date.today().isoformat()

        with pytest.raises(ValidationError, match="between 1 and 6"):
            StudentApplicationCreate(**intake_payload)

    def test_too_old(self, intake_payload):
        intake_payload["birth_date"] = date(date.today().year - 8, 1, 1).isoformat()

        with pytest.raises(ValidationError, match="between 1 and 6"):
            StudentApplicationCreate(**intake_payload)

    @pytest.mark.parametrize("document", ["12345", "12a456", "", "１２３４５６"])
    def test_invalid_documents(self, intake_payload, document):
        intake_payload["guardian_document"] = document

        with pytest.raises(ValidationError) as exc_info:
            StudentApplicationCreate(**intake_payload)

        assert _error_fields(exc_info.value) == {"guardian_document"}

    def test_phone_digits_only(self, intake_payload):
        intake_payload["phone"] = "300-123-4567"

        with pytest.raises(ValidationError, match="phone must contain only digits"):
            StudentApplicationCreate(**intake_payload)

    def test_unknown_blood_type(self, intake_payload):
        intake_payload["blood_type"] = "C+"

        with pytest.raises(ValidationError) as exc_info:
            StudentApplicationCreate(**intake_payload)

        assert _error_fields(exc_info.value) == {"blood_type"}

    def test_invalid_email(self, intake_payload):
        intake_payload["email"] = "not-an-email"

        with pytest.raises(ValidationError) as exc_info:
            StudentApplicationCreate(**intake_payload)

        assert _error_fields(exc_info.value) == {"email"}

    @pytest.mark.parametrize("field", ["student_name", "address", "grade_id", "type_id"])
    def test_blank_required_text(self, intake_payload, field):
        intake_payload[field] = "   "

        with pytest.raises(ValidationError) as exc_info:
            StudentApplicationCreate(**intake_payload)

        assert field in _error_fields(exc_info.value)

    def test_profession_and_company_may_be_empty(self, intake_payload):
        data = StudentApplicationCreate(**intake_payload)

        assert data.profession == ""
        assert data.company == ""
