"""Typed request/response models shared by the payslip routes.

Requests are validated with Pydantic before they reach the engine; responses
are built from the engine's frozen results and dumped in JSON mode so every
amount leaves the service as an exact decimal string.
"""

from __future__ import annotations

from .api import (
    ContributionEntry,
    EstimateRequest,
    EstimateResponse,
    GrossSalaryRequest,
    GrossSalaryResponse,
    PayslipRequest,
    PayslipResponse,
    ResponseMeta,
    format_validation_error,
)

__all__ = [
    "ContributionEntry",
    "EstimateRequest",
    "EstimateResponse",
    "GrossSalaryRequest",
    "GrossSalaryResponse",
    "PayslipRequest",
    "PayslipResponse",
    "ResponseMeta",
    "format_validation_error",
]
