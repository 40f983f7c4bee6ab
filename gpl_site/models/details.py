"""Structured payload stored in ``ServiceRequest.details``.

Outage and streetlight reports share the service request table. Which kind of
report a row holds is recorded by the ``kind`` tag of its details document:

    {"kind": "generic", "text": "Need a new meter at ..."}
    {"kind": "outage", "affected_area": "...", "description": "...", "hazard_present": true}
    {"kind": "streetlight", "pole_number": "P-114", "issue_type": "flickering", ...}
"""

import enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class StreetlightIssue(str, enum.Enum):
    """Problems a citizen can report about a streetlight."""
    NOT_WORKING = "not_working"
    FLICKERING = "flickering"
    DAYLIGHT_BURNING = "daylight_burning"  # Light stays on during the day
    DAMAGED = "damaged"
    OTHER = "other"


class GenericDetails(BaseModel):
    """Free-text details of an ordinary service request."""
    kind: Literal["generic"] = "generic"
    text: str


class OutageDetails(BaseModel):
    """Details of a reported power outage."""
    kind: Literal["outage"] = "outage"
    affected_area: str
    description: str
    hazard_present: bool = False


class StreetlightDetails(BaseModel):
    """Details of a reported streetlight fault."""
    kind: Literal["streetlight"] = "streetlight"
    pole_number: Optional[str] = None
    issue_type: StreetlightIssue
    additional_details: Optional[str] = None


RequestDetails = Annotated[
    Union[GenericDetails, OutageDetails, StreetlightDetails],
    Field(discriminator="kind"),
]

_details_adapter: TypeAdapter = TypeAdapter(RequestDetails)


def parse_details(document: Dict[str, Any]) -> Union[GenericDetails, OutageDetails, StreetlightDetails]:
    """Load a stored details document back into its typed variant."""
    return _details_adapter.validate_python(document)


def dump_details(details: Union[GenericDetails, OutageDetails, StreetlightDetails]) -> Dict[str, Any]:
    """Serialize a details variant for the JSON column."""
    return details.model_dump(mode="json")
