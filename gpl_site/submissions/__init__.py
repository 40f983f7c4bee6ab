"""Citizen form submissions: validation, reference numbers and the pipeline."""

from gpl_site.submissions.pipeline import (
    SubmissionKind,
    SubmissionPipeline,
    SubmissionResult,
    FailureKind,
    provide_pipeline,
)
from gpl_site.submissions.reference import ReferencePrefix, generate_reference_number

__all__ = [
    "SubmissionKind",
    "SubmissionPipeline",
    "SubmissionResult",
    "FailureKind",
    "provide_pipeline",
    "ReferencePrefix",
    "generate_reference_number",
]
