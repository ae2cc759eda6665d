"""HTTP error values and the mapping from raised errors to them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from . import domain_errors
from .domain_errors import DomainError, _error_chain


@dataclass(eq=False)
class ApiError(Exception):
    """An error as sent to API clients."""

    status: int
    code: str
    message: Optional[str] = None
    path: str = ""
    timestamp: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{self.status}: {self.code}"

    def with_message(self, message: str) -> "ApiError":
        return dataclasses.replace(self, message=message)

    def matches(self, err: BaseException) -> bool:
        return isinstance(err, ApiError) and (err.status, err.code) == (self.status, self.code)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body; ``message`` is left out when unset."""
        body: dict[str, Any] = {"status": self.status, "code": self.code}
        if self.message is not None:
            body["message"] = self.message
        body["path"] = self.path
        body["timestamp"] = _format_timestamp(self.timestamp)
        return body


def _format_timestamp(moment: Optional[datetime]) -> str:
    if moment is None:
        return "0001-01-01T00:00:00Z"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    fraction = f".{moment.microsecond:06d}".rstrip("0") if moment.microsecond else ""
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + fraction + "Z"


INTERNAL_ERROR = ApiError(status=500, code="internal server error")
VALIDATION_ERROR = ApiError(status=400, code="validation error")
BAD_REQUEST = ApiError(status=400, code="bad request")


def _first_of(err: BaseException, kind: type) -> Any:
    return next((e for e in _error_chain(err) if isinstance(e, kind)), None)


def handle_error(err: BaseException, path: str) -> ApiError:
    """Map ``err`` to the ``ApiError`` to send for a request to ``path``."""
    api_err = _first_of(err, ApiError)
    if api_err is None:
        domain_err = _first_of(err, DomainError)
        if domain_err is not None and domain_errors.BAD_REQUEST.matches(domain_err):
            api_err = BAD_REQUEST.with_message(str(domain_err))
        else:
            api_err = INTERNAL_ERROR
    return dataclasses.replace(api_err, path=path, timestamp=datetime.now(timezone.utc))