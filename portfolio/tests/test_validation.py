import pytest

from portfolio.domain.auth.validation import (
    ValidationReason,
    is_valid_email,
    validate_login,
    validate_registration,
)


@pytest.mark.parametrize(
    ("email", "valid"),
    [
        ("a@x.com", True),
        ("first.last+tag@sub.example.org", True),
        ("a@x", False),
        ("a x@y.com", False),
        ("@x.com", False),
        ("a@@x.com", False),
        ("plain", False),
    ],
)
def test_is_valid_email(email: str, valid: bool) -> None:
    assert is_valid_email(email) is valid


def test_validate_login_accepts_padded_email() -> None:
    assert validate_login("  a@x.com  ", "pass") is None


def test_registration_checks_run_in_order() -> None:
    assert (
        validate_registration("bad", "ab", "cd", min_password_length=4)
        is ValidationReason.INVALID_EMAIL
    )
    assert (
        validate_registration("a@x.com", "ab", "cd", min_password_length=4)
        is ValidationReason.PASSWORD_TOO_SHORT
    )
    assert (
        validate_registration("a@x.com", "abcd", "abcd", min_password_length=4) is None
    )
