"""Error models"""

from enum import Enum
from typing import Optional
import uuid


class ErrorCode(str, Enum):
    """Error codes"""
    INVALID_PLACE_ID = "INVALID_PLACE_ID"
    FETCH_FAILED = "FETCH_FAILED"
    HOURS_PARSE_ERROR = "HOURS_PARSE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ApplicationError(Exception):
    """Application error carrying a code, a retry hint and an optional user-facing hint"""
    def __init__(self, code: ErrorCode, message: str, retryable: bool = False, hint: Optional[str] = None, place_id: Optional[str] = None):
        self.error_id = str(uuid.uuid4())
        self.code = code
        self.message = message
        self.retryable = retryable
        self.hint = hint
        self.place_id = place_id
        super().__init__(self.message)

    def model_dump(self):
        """Return dict representation for API responses"""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "message": self.message,
            "hint": self.hint,
            "retryable": self.retryable,
            "place_id": self.place_id
        }

    @classmethod
    def status_for(cls, code) -> int:
        """Map an error code (enum or its value) to HTTP status"""
        mapping = {
            ErrorCode.INVALID_PLACE_ID: 400,
            ErrorCode.FETCH_FAILED: 502,
            ErrorCode.HOURS_PARSE_ERROR: 422,
            ErrorCode.CONFIGURATION_ERROR: 500,
        }
        return mapping.get(ErrorCode(code), 500)

    @property
    def http_status(self) -> int:
        return self.status_for(self.code)


class HoursParseError(ApplicationError):
    """A single weekday-hours line could not be parsed"""
    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(
            code=ErrorCode.HOURS_PARSE_ERROR,
            message=f"Cannot parse opening hours line {line!r}: {reason}",
        )
