from __future__ import annotations

import dataclasses
from typing import Any

from app.utils.geohash import GeohashError, InvalidSymbol


@dataclasses.dataclass(slots=True)
class APIError(Exception):
    """Business error that must map to the standard error envelope."""

    code: str
    message: str
    status_code: int = 400
    details: Any | None = None


def make_error_payload(
    *, code: str, message: str, trace_id: str | None, details: Any | None
) -> dict[str, Any]:
    return {
        "code": code,
        "message": message,
        "details": details,
        "trace_id": trace_id,
    }


def geohash_api_error(exc: GeohashError, *, code: str | None = None) -> APIError:
    """Translate a codec error into a 400 APIError."""

    if isinstance(exc, InvalidSymbol):
        return APIError(
            code=code or "GEOHASH_INVALID_SYMBOL",
            message=str(exc),
            status_code=400,
            details={"symbol": exc.symbol, "index": exc.index},
        )
    return APIError(
        code=code or "GEOHASH_INVALID_ARGUMENT",
        message=str(exc),
        status_code=400,
    )
