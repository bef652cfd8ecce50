"""
Response envelope: one canonical shape for every API call.

The Bixo API answers in several shapes:
  • ``{"success": true, "data": ...}``                 enveloped success
  • ``{"success": false, "error": "..."}``             enveloped failure
  • ``{"success": false, "message": "..."}``           enveloped failure, older endpoints
  • bare JSON (object / list)                          no envelope at all
  • empty body                                         204 No Content and friends

``normalize_response`` collapses all of them into ``ApiResponse``.
"""
import json
import logging
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

INVALID_JSON_ERROR = "Invalid JSON response from server"
INVALID_PAYLOAD_ERROR = "Invalid response from server"


class ApiError(RuntimeError):
    """Raised by ``ApiResponse.unwrap`` when the call failed."""


class ApiResponse(BaseModel):
    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ApiResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse":
        return cls(success=False, error=error)

    def unwrap(self) -> Any:
        """Return ``data`` or raise ApiError with the failure message."""
        if not self.success:
            raise ApiError(self.error or "Request failed")
        return self.data

    def cast(self, parse: Callable[[Any], Any]) -> "ApiResponse":
        """
        Convert ``data`` with ``parse`` (e.g. ``Model.model_validate``).

        Failures and empty payloads pass through untouched. A payload that
        does not fit becomes a failure instead of an exception.
        """
        if not self.success or self.data is None:
            return self
        try:
            return ApiResponse.ok(parse(self.data))
        except ValidationError as exc:
            logger.warning("Response payload did not match %s: %s", getattr(parse, "__qualname__", parse), exc)
            return ApiResponse.fail(INVALID_PAYLOAD_ERROR)


def status_error(status_code: int) -> str:
    return f"Request failed with status {status_code}"


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else json.dumps(value)


def normalize_response(status_code: int, text: str) -> ApiResponse:
    """Turn an HTTP status and raw body into an ``ApiResponse``."""
    is_ok = 200 <= status_code < 300

    if not text:
        return ApiResponse.ok(None) if is_ok else ApiResponse.fail(status_error(status_code))

    try:
        result = json.loads(text)
    except ValueError:
        return ApiResponse.fail(INVALID_JSON_ERROR)

    if isinstance(result, dict) and "success" in result:
        # Only a JSON true counts as success; a string "false" does not.
        success = result["success"] is True
        error = _as_text(result.get("error"))
        if not success and not error:
            error = _as_text(result.get("message"))
        return ApiResponse(success=success, data=result.get("data"), error=error)

    if is_ok:
        return ApiResponse.ok(result)

    error = None
    if isinstance(result, dict):
        error = _as_text(result.get("message")) or _as_text(result.get("error"))
    return ApiResponse.fail(error or status_error(status_code))
