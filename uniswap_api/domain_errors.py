"""Domain-level error values shared by clients and services."""

from __future__ import annotations

import copy
from typing import Iterator, Optional

BUNDLE_SEPARATOR = "; "


class DomainError(Exception):
    """A client error identified by a code; modifiers return copies."""

    def __init__(
        self,
        code: str,
        message: str = "",
        cause: Optional[BaseException] = None,
        request_url: str = "",
        request_body: bytes = b"",
        response_code: int = 0,
    ) -> None:
        super().__init__(code)
        self.code = code
        self.message = message
        self.cause = cause
        self.request_url = request_url
        self.request_body = bytes(request_body)
        self.response_code = response_code

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message or self.code}: {self.cause}"
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code

    def _replace(self, name: str, value) -> "DomainError":
        clone = copy.copy(self)
        setattr(clone, name, value)
        return clone

    def with_message(self, message: str) -> "DomainError":
        return self._replace("message", message)

    def with_request_url(self, url: str) -> "DomainError":
        return self._replace("request_url", url)

    def with_request_body(self, body: bytes) -> "DomainError":
        return self._replace("request_body", bytes(body))

    def with_response_code(self, code: int) -> "DomainError":
        return self._replace("response_code", code)

    def wrap(self, err: BaseException) -> "DomainError":
        return self._replace("cause", err)

    def matches(self, err: BaseException) -> bool:
        """Tell whether the first domain error in ``err``'s chain has this code."""
        found = next((e for e in _error_chain(err) if isinstance(e, DomainError)), None)
        return found is not None and found.code == self.code


def _error_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.cause if isinstance(err, DomainError) else err.__cause__


NOT_FOUND = DomainError("not found")
INTERNAL = DomainError("internal error")
BAD_REQUEST = DomainError("bad request")
TOO_MANY_REQUESTS = DomainError("too many requests")


class ErrorBundle(Exception):
    """Accumulates errors and presents them as a single error."""

    def __init__(self) -> None:
        super().__init__()
        self._errors: list[BaseException] = []

    def add(self, *args: Optional[BaseException]) -> None:
        self._errors.extend(err for err in args if err is not None)

    def errors(self) -> list[BaseException]:
        return list(self._errors)

    def is_empty(self) -> bool:
        return not self._errors

    def error_or_none(self) -> Optional["ErrorBundle"]:
        return None if self.is_empty() else self

    def __str__(self) -> str:
        return BUNDLE_SEPARATOR.join(map(str, self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors())