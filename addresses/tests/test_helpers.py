"""Tests for option lists and postal formatting."""

from ..db.models import Address
from ..helpers import Option, country_options, format_address, state_options

def test_country_options_us_first(reference):
    options = country_options(reference)

    assert options[0] == Option('US', 'United States', True)
    assert [option.value for option in options[1:]] == ['AF', 'CA', 'DE']
    assert not any(option.selected for option in options[1:])

def test_country_options_selected(reference):
    options = country_options(reference, selected='ca')

    assert [option.value for option in options if option.selected] == ['CA']

def test_state_options(reference):
    options = state_options(reference, selected='NY')

    assert options[0] == Option('', '', False)
    assert [option.label for option in options[1:]] == ['California', 'New York', 'Washington']
    assert [option.value for option in options if option.selected] == ['NY']

def test_state_options_for_other_country(reference):
    options = state_options(reference, country='CA')

    assert options[0].selected
    assert [option.value for option in options[1:]] == ['BC', 'ON']

def test_format_address(reference):
    address = Address(addressee='Jordan Lee', line1='100 Main St', line2='Apt 4',
                      city='Seattle', state='WA', postal_code='98101', country='US')

    assert format_address(address, reference) == (
        "Jordan Lee\n100 Main St\nApt 4\nSeattle, WA 98101\nUnited States"
    )

def test_format_address_unknown_country(reference):
    address = Address(line1='1 Rue Exemple', city='Paris', postal_code='75001', country='FR')

    assert format_address(address, reference) == "1 Rue Exemple\nParis, 75001\nFR"

def test_format_address_without_reference():
    address = Address(line1='1 Main', city='Boise', country='US')

    assert format_address(address) == "1 Main\nBoise\nUS"
