"""Request ID management for request correlation.

The ID lives in a ContextVar so log records emitted anywhere while handling
a request carry it.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

MAX_REQUEST_ID_LENGTH = 128

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]+$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def accept_request_id(header_value: Optional[str]) -> str:
    """Reuse a caller supplied X-Request-ID when it is safe to log, else mint one.

    Examples:
        >>> accept_request_id("req-42")
        'req-42'
        >>> len(accept_request_id("bad id\\n")) == 36
        True
    """
    if (
        header_value
        and len(header_value) <= MAX_REQUEST_ID_LENGTH
        and _SAFE_REQUEST_ID.match(header_value)
    ):
        return header_value
    return generate_request_id()


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)
