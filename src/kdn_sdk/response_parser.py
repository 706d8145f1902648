"""
Interpretation of Pact command results.

This is the only place that inspects the two-state result protocol of a
Pact execution; callers get either the success data or one of the SDK's
typed exceptions.
"""

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .enums import ErrorCode
from .exceptions import ChainFailureError, UnknownOutcomeError


def parse_chain_response(response: Any, subject: str) -> Any:
    """
    Extract the data of a command result.

    Args:
        response: The decoded command result ({"result": {"status": ...}, ...})
        subject: What was being retrieved, used in error messages

    Returns:
        The `data` of a successful result

    Raises:
        ChainFailureError: If the result status is 'failure'
        UnknownOutcomeError: If the result has neither shape
    """
    result = response.get("result") if isinstance(response, dict) else None
    status = result.get("status") if isinstance(result, dict) else None

    if status == "success":
        return result.get("data")

    if status == "failure":
        error = result.get("error")
        raise ChainFailureError(
            code=ErrorCode.CHAIN_FAILURE.value,
            message=f"Failed to retrieve {subject}: {json.dumps(error, default=str)}",
            details={"subject": subject, "error": error},
        )

    raise UnknownOutcomeError(
        code=ErrorCode.UNKNOWN_OUTCOME.value,
        message=f"Failed to retrieve {subject}: Unknown error",
        details={"subject": subject},
    )


def parse_pact_decimal(value: Any) -> Optional[float]:
    """
    Decode a Pact number.

    Accepts plain numbers, {"decimal": "1.5"} and {"int": 2} (either as a
    number or a string). Returns None for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        for key in ("decimal", "int"):
            if key in value:
                raw = value[key]
                if isinstance(raw, bool):
                    return None
                try:
                    return float(Decimal(str(raw)))
                except (InvalidOperation, ValueError):
                    return None
    return None
