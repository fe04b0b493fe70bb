"""Option lists for country/state pickers and postal formatting."""
from typing import List, NamedTuple, Optional

from .db.models import Address
from .exceptions import InvalidArgumentError, NotFoundError
from .reference import ReferenceData


class Option(NamedTuple):
    value: str
    label: str
    selected: bool = False


def country_options(reference: ReferenceData, selected: Optional[str] = 'US') -> List[Option]:
    """Build country options with the United States listed first."""
    selected = selected.upper() if selected else None
    first = []
    rest = []
    for country in reference.countries():
        option = Option(country.a2, country.name, country.a2 == selected)
        if country.a2 == 'US':
            first.append(option)
        else:
            rest.append(option)
    return first + rest


def state_options(
    reference: ReferenceData,
    selected: Optional[str] = None,
    country: str = 'US'
) -> List[Option]:
    """Build state/province options for a country, led by a blank choice."""
    selected = selected.upper() if selected else None
    options = [Option('', '', selected is None)]
    for state in reference.states(country):
        options.append(Option(state.a2, state.name, state.a2 == selected))
    return options


def format_address(address: Address, reference: Optional[ReferenceData] = None) -> str:
    """Render an address as postal lines.

    With a reference store the country code is replaced by its name; unknown
    codes fall back to the code itself.
    """
    lines = [
        address.addressee,
        address.organization,
        address.line1,
        address.line2,
    ]
    locality = " ".join(part for part in (address.state, address.postal_code) if part)
    if address.city and locality:
        lines.append(f"{address.city}, {locality}")
    else:
        lines.append(address.city or locality)

    country = address.country
    if reference is not None and country:
        try:
            country = reference.country_name(country)
        except (InvalidArgumentError, NotFoundError):
            country = address.country
    lines.append(country)
    return "\n".join(line for line in lines if line)
