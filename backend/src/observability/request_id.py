"""Request ID management for request correlation.

Log lines emitted while serving a request carry its ID, including lines
written by matchers deep in the pipeline.
"""

import re
import uuid
from contextvars import ContextVar, Token
from typing import Optional

# Context variable for request_id (async-safe)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# Client-supplied IDs are echoed into logs and headers; keep them short and printable
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def resolve_request_id(header_value: Optional[str]) -> str:
    """Use the caller's X-Request-ID when well-formed, otherwise generate one."""
    if header_value and _VALID_REQUEST_ID.match(header_value):
        return header_value
    return generate_request_id()


def get_request_id() -> str:
    """Current request ID, or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> Token:
    """Set request ID in current context.

    Returns:
        Token for restoring the previous value with reset_request_id
    """
    return request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)
