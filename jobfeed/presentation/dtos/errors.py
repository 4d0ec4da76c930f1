"""Error responses for request validation failures."""
from typing import Any, Dict, List, Sequence

from fastapi.responses import JSONResponse


def _format_errors(raw_errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    errors = []
    for error in raw_errors:
        # Drop the leading "body" segment FastAPI adds to request locations
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        error_type = error.get("type", "")
        error_msg = error.get("msg", "")

        if error_type == "greater_than_equal" and field.endswith("moneyPerSec"):
            error_msg = "moneyPerSec must be a non-negative integer"
        elif error_type == "json_invalid":
            error_msg = "Body must be valid JSON"

        errors.append({
            "field": field,
            "error": error_msg
        })
    return errors


def create_validation_error_response(raw_errors: Sequence[Dict[str, Any]]) -> JSONResponse:
    """Convert validation errors to the standard 400 response."""
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request",
            "errors": _format_errors(raw_errors)
        }
    )


def create_internal_error_response() -> JSONResponse:
    """Create standardized internal error response."""
    return JSONResponse(
        status_code=500,
        content={
            "message": "Internal error",
            "errors": []
        }
    )
