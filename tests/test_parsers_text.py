import pytest

from recordnorm.normalization.parsers.text import (
    extract_age_from_text,
    extract_email,
    extract_salary_from_text,
    looks_like_name,
)


def test_extract_email_returns_first_match() -> None:
    text = "Contact john.doe@example.com or jane@example.org"
    assert extract_email(text) == "john.doe@example.com"
    assert extract_email("no address here") is None
    assert extract_email(None) is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("John Doe, 30 years", 30),
        ("Ana tiene 42 años", 42),
        ("Marie a 25 ans", 25),
        ("Klaus ist 51 Jahre alt", 51),
        ("aged 200 years", None),
        ("just 44", 44),
        ("nothing numeric", None),
    ],
)
def test_extract_age_from_text(text: str, expected) -> None:
    assert extract_age_from_text(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("earns $5000 per month", 5000.0),
        ("salary € 1200,50", 1200.5),
        ("USD 300.25 bonus", 300.25),
        ("budget 750", 750.0),
        ("no money", None),
    ],
)
def test_extract_salary_from_text(text: str, expected) -> None:
    assert extract_salary_from_text(text) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("John", True),
        ("Jean-Luc O'Neil", True),
        ("José", True),
        ("J", False),
        ("R2D2", False),
        ("x" * 51, False),
        ("hello@world", False),
        (None, False),
    ],
)
def test_looks_like_name(value, expected) -> None:
    assert looks_like_name(value) is expected
