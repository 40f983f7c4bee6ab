import pytest

from gpl_site.emergency import (
    EMERGENCY_HOTLINES,
    format_phone_number,
    phone_href,
    primary_emergency_number,
    regional_contact,
)


def test_primary_number_is_demerara_hotline():
    assert primary_emergency_number() == "0475"
    assert EMERGENCY_HOTLINES[0].region == "Demerara"


@pytest.mark.parametrize("region", ["Berbice", "berbice", "  BERBICE "])
def test_regional_contact_case_insensitive(region):
    assert regional_contact(region).primary_number == "333-2186"


def test_regional_contact_unknown():
    assert regional_contact("Rupununi") is None


@pytest.mark.parametrize(
    "number, expected",
    [
        ("0475", "0475"),
        ("2262600", "226-2600"),
        ("226-2600", "226-2600"),
        ("+592 226 2600", "+592 226 2600"),
    ],
)
def test_format_phone_number(number, expected):
    assert format_phone_number(number) == expected


@pytest.mark.parametrize(
    "number, expected",
    [
        ("0475", "tel:0475"),
        ("226-2600", "tel:+5922262600"),
        ("+592-226-2600", "tel:5922262600"),
    ],
)
def test_phone_href(number, expected):
    assert phone_href(number) == expected
