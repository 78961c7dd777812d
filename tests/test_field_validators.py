import pytest
from pydantic import ValidationError

from Validation_module.field_validators import (
    VALIDATION_RULES,
    check_address,
    check_email,
    check_full_name,
    check_mobile,
    check_optional_pincode,
    check_optional_rti_query,
    check_optional_slug,
    clean_digits,
    is_valid_email,
    is_valid_mobile,
    is_valid_pincode,
    normalize_text,
)
from RTIApplication_module.RTIApplication_schema import RTIApplicationCreate, RTIApplicationPublicCreate
from Consultation_module.Consultation_schema import ConsultationCreate
from Callback_module.Callback_schema import CallbackRequestCreate


@pytest.mark.parametrize(
    "value, expected",
    [
        ("9876543210", True),
        ("6000000000", True),
        ("98765-43210", True),
        ("+91 98765 43210", False),  # 12 digits once cleaned
        ("5876543210", False),
        ("987654321", False),
        ("98765432101", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_mobile(value, expected):
    assert is_valid_mobile(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("user@example.com", True),
        ("  User@Example.com ", True),
        ("first.last@sub.example.co.in", True),
        ("user@example", False),
        ("user example@example.com", False),
        ("@example.com", False),
        ("user@@example.com", False),
        ("", False),
    ],
)
def test_is_valid_email(value, expected):
    assert is_valid_email(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("110001", True),
        ("560034", True),
        ("011001", False),
        ("11001", False),
        ("1100011", False),
        ("11000a", False),
        ("", False),
    ],
)
def test_is_valid_pincode(value, expected):
    assert is_valid_pincode(value) is expected


def test_clean_digits_strips_everything_but_digits():
    assert clean_digits("(987) 654-3210") == "9876543210"
    assert clean_digits(None) == ""


def test_normalize_text_turns_blank_into_none():
    assert normalize_text("   ") is None
    assert normalize_text("  Delhi ") == "Delhi"
    assert normalize_text(None) is None


def test_check_functions_normalize_values():
    assert check_email("  Asha@Example.COM ") == "asha@example.com"
    assert check_mobile("98765 43210") == "9876543210"
    assert check_mobile(9876543210) == "9876543210"
    assert check_full_name("  Asha Verma  ") == "Asha Verma"
    assert check_optional_slug(" Delhi ") == "delhi"
    assert check_optional_pincode("") is None


@pytest.mark.parametrize(
    "func, value, message",
    [
        (check_full_name, "A", "Full name must be between 2 and 100 characters"),
        (check_full_name, "x" * 101, "Full name must be between 2 and 100 characters"),
        (check_full_name, "   ", "Full name is required"),
        (check_email, "not-an-email", "Please provide a valid email"),
        (check_mobile, "12345", "Please provide a valid 10-digit mobile number"),
        (check_optional_pincode, "01234", "Please provide a valid 6-digit pincode"),
        (check_optional_rti_query, "too short", "RTI query must be between 10 and 5000 characters"),
        (check_address, "short", "Address must be between 10 and 500 characters"),
    ],
)
def test_check_functions_reject_invalid_values(func, value, message):
    with pytest.raises(ValueError) as exc_info:
        func(value)
    assert str(exc_info.value) == message


def test_check_email_rejects_non_string_values():
    with pytest.raises(ValueError):
        check_email(["a@b.co"])


def test_validation_rules_cover_the_form_fields():
    assert set(VALIDATION_RULES) == {"full_name", "email", "mobile", "pincode", "rti_query", "address"}
    assert VALIDATION_RULES["mobile"]["pattern"] == r"^[6-9]\d{9}$"
    assert VALIDATION_RULES["pincode"]["required"] is False


def test_public_rti_schema_normalizes_and_allows_missing_details():
    data = RTIApplicationPublicCreate(
        service_id=1,
        state_id=1,
        full_name="  Asha Verma ",
        email=" ASHA@Example.com",
        mobile="98765-43210",
        rti_query="   ",
        pincode="",
    )
    assert data.full_name == "Asha Verma"
    assert data.email == "asha@example.com"
    assert data.mobile == "9876543210"
    assert data.rti_query is None
    assert data.pincode is None
    assert data.address is None


def test_authenticated_rti_schema_requires_query_address_and_pincode():
    with pytest.raises(ValidationError) as exc_info:
        RTIApplicationCreate(
            service_id=1,
            state_id=1,
            full_name="Asha Verma",
            email="asha@example.com",
            mobile="9876543210",
            rti_query="",
            address="",
            pincode="",
        )
    fields = {err["loc"][-1] for err in exc_info.value.errors()}
    assert fields == {"rti_query", "address", "pincode"}


def test_consultation_schema_defaults_source():
    data = ConsultationCreate(full_name="Rahul Sharma", email="rahul@example.com", mobile="9876543210")
    assert data.source == "hero_section"
    assert data.state_slug is None


def test_callback_schema_validates_phone():
    assert CallbackRequestCreate(phone="9876543210", state_slug="Delhi").state_slug == "delhi"
    with pytest.raises(ValidationError):
        CallbackRequestCreate(phone="1234567890")
