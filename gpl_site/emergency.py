"""Built-in emergency contact data.

These numbers are served whenever the emergency contacts table cannot be
read, so they must match GPL's official communications. Update them here
and in the database together.
"""

import re
from typing import Dict, List, NamedTuple, Optional


class RegionalHotline(NamedTuple):
    """Static emergency contact entry."""
    region: str
    name: str
    primary_number: str
    secondary_number: Optional[str]
    description: str
    available: str


EMERGENCY_HOTLINES: List[RegionalHotline] = [
    RegionalHotline(
        region="Demerara",
        name="Demerara Emergency",
        primary_number="0475",
        secondary_number="226-2600",
        description="24/7 Power Emergency",
        available="24/7",
    ),
    RegionalHotline(
        region="Berbice",
        name="Berbice Emergency",
        primary_number="333-2186",
        secondary_number=None,
        description="24/7 Power Emergency",
        available="24/7",
    ),
    RegionalHotline(
        region="Essequibo",
        name="Essequibo Emergency",
        primary_number="771-4244",
        secondary_number=None,
        description="24/7 Power Emergency",
        available="24/7",
    ),
]

ADDITIONAL_CONTACTS: List[RegionalHotline] = [
    RegionalHotline(
        region="National",
        name="GPL Customer Service",
        primary_number="226-2600",
        secondary_number=None,
        description="General inquiries, billing, and service requests",
        available="Mon-Fri 8AM-4PM",
    ),
    RegionalHotline(
        region="National",
        name="GPL Head Office",
        primary_number="227-2654",
        secondary_number="225-7900",
        description="Administrative inquiries",
        available="Mon-Fri 8AM-4PM",
    ),
]

SAFETY_MESSAGES: Dict[str, str] = {
    "downed_lines": "STAY AWAY from downed power lines! Call emergency immediately.",
    "outage": "Report power outages to your regional hotline.",
    "smell_burning": "If you smell burning near electrical equipment, evacuate and call immediately.",
    "flooding": "Never touch electrical equipment if flooding is present.",
}


def regional_contact(region: str) -> Optional[RegionalHotline]:
    """Hotline for a region, matched case-insensitively."""
    wanted = region.strip().lower()
    for hotline in EMERGENCY_HOTLINES:
        if hotline.region.lower() == wanted:
            return hotline
    return None


def primary_emergency_number() -> str:
    """Main emergency number (Demerara / Georgetown)."""
    return EMERGENCY_HOTLINES[0].primary_number


def format_phone_number(number: str) -> str:
    """Display form: short codes as given, 7-digit local numbers as XXX-XXXX."""
    digits = re.sub(r"\D", "", number)
    if len(digits) in (3, 4):
        return number
    if len(digits) == 7:
        return f"{digits[:3]}-{digits[3:]}"
    return number


def phone_href(number: str) -> str:
    """tel: link, adding Guyana's +592 country code to local numbers."""
    digits = re.sub(r"\D", "", number)
    if len(digits) == 7:
        return f"tel:+592{digits}"
    return f"tel:{digits}"
