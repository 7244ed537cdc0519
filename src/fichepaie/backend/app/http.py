"""JSON error payloads shared by the payslip and configuration blueprints."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body: a machine code, an HTTP status, a message."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    return ProblemResponse(error=error, status=status, message=message, extra=extra)


def bad_request(message: str) -> ProblemResponse:
    """Malformed request body, e.g. invalid JSON."""

    return problem_response("bad_request", status=HTTPStatus.BAD_REQUEST, message=message)


def validation_error(message: str) -> ProblemResponse:
    """Well-formed request rejected by input validation."""

    return problem_response(
        "validation_error", status=HTTPStatus.BAD_REQUEST, message=message
    )


def not_found(error: FileNotFoundError | str) -> ProblemResponse:
    """Unknown fiscal year or missing configuration file."""

    return problem_response("not_found", status=HTTPStatus.NOT_FOUND, message=str(error))


__all__ = [
    "ProblemResponse",
    "bad_request",
    "not_found",
    "problem_response",
    "validation_error",
]
