#!/usr/bin/env python3
"""Collect baseline timing metrics for fichepaie payslip calculations."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fichepaie.backend.services.calculation_service import (  # noqa: E402
    calculate_payslip_for_request,
)

SAMPLE_PAYLOADS = {
    "non_executive": {
        "year": 2024,
        "employee_id": "E-001",
        "period": "2024-03",
        "gross_salary": "3000.00",
        "tax_withholding_rate": "7.5",
    },
    "executive_above_ceiling": {
        "year": 2024,
        "employee_id": "E-002",
        "period": "2024-03",
        "gross_salary": "6500.00",
        "is_executive": True,
        "tax_withholding_rate": "12",
    },
    "part_time": {
        "year": 2024,
        "employee_id": "E-003",
        "period": "2024-03",
        "gross_salary": "2400.00",
        "contracted_hours": "24",
    },
}


def measure_backend(payload: dict[str, object], iterations: int) -> dict[str, float]:
    """Return timing statistics for repeated payslip calculations."""

    calculate_payslip_for_request(payload)  # Warm cache
    start = perf_counter()
    for _ in range(iterations):
        calculate_payslip_for_request(payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("FICHEPAIE_PROFILE_ITERATIONS", "200"))
    report = {
        name: measure_backend(payload, iterations)
        for name, payload in SAMPLE_PAYLOADS.items()
    }
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
