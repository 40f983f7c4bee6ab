"""Public form submission endpoints."""

import logging
from typing import Any, Dict

from litestar import Controller, Response, get, post
from litestar.status_codes import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from gpl_site.store import Store
from gpl_site.submissions import FailureKind, SubmissionKind, SubmissionPipeline, SubmissionResult
from gpl_site.submissions.tracking import lookup_reference

logger = logging.getLogger("GPL.submissions")

FAILURE_STATUS = {
    FailureKind.VALIDATION: HTTP_400_BAD_REQUEST,
    FailureKind.PERSISTENCE: HTTP_503_SERVICE_UNAVAILABLE,
}


def submission_response(result: SubmissionResult) -> Response:
    """Validation failures are 400, store failures 503, success 200."""
    status_code = FAILURE_STATUS[result.failure] if result.failure else HTTP_200_OK
    return Response(
        content=result.to_json(),
        status_code=status_code,
        media_type="application/json",
    )


# --- Controller ---

class SubmissionsController(Controller):
    """API endpoints for the citizen-facing forms."""
    
    path = "/api"
    tags = ["submissions"]
    
    @post("/contact")
    async def submit_contact(self, data: Dict[str, Any], pipeline: SubmissionPipeline) -> Response:
        """Contact form."""
        return submission_response(await pipeline.submit(SubmissionKind.CONTACT, data))
    
    @post("/service-request")
    async def submit_service_request(self, data: Dict[str, Any], pipeline: SubmissionPipeline) -> Response:
        """Service request form. Returns an SR- reference number."""
        return submission_response(await pipeline.submit(SubmissionKind.SERVICE_REQUEST, data))
    
    @post("/outage")
    async def submit_outage(self, data: Dict[str, Any], pipeline: SubmissionPipeline) -> Response:
        """Outage report. Adds an emergency note when a hazard is reported."""
        return submission_response(await pipeline.submit(SubmissionKind.OUTAGE, data))
    
    @post("/streetlight")
    async def submit_streetlight(self, data: Dict[str, Any], pipeline: SubmissionPipeline) -> Response:
        """Streetlight fault report."""
        return submission_response(await pipeline.submit(SubmissionKind.STREETLIGHT, data))
    
    @post("/feedback")
    async def submit_feedback(self, data: Dict[str, Any], pipeline: SubmissionPipeline) -> Response:
        """Complaint / suggestion / compliment / general feedback."""
        return submission_response(await pipeline.submit(SubmissionKind.FEEDBACK, data))
    
    @get("/service-requests/{reference:str}")
    async def track_request(self, reference: str, store: Store) -> Dict[str, Any]:
        """Status of a tracked request by its reference number."""
        view = await lookup_reference(store, reference)
        if view is None:
            return {"found": False, "request": None}
        return {"found": True, "request": view.to_json()}
