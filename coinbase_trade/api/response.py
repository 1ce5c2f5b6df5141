"""Decoding of raw API responses."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from .error import DecodeError, ErrorResponse, error_for_status

logger = logging.getLogger(__name__)

T = TypeVar("T")

MISSING_CREDENTIALS_HINT = " [API key or secret is missing]"


@dataclass
class PageInfo:
    """Continuation fields that list endpoints put beside their results."""

    has_next: bool = False
    cursor: str = ""
    total_count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict, count_field: Optional[str] = None) -> "PageInfo":
        try:
            total = None
            if count_field and data.get(count_field) is not None:
                total = int(data[count_field])
            return cls(
                has_next=bool(data.get("has_next", False)),
                cursor=data.get("cursor") or "",
                total_count=total,
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"unmarshal pagination result: {e}")


def _error_message(body: bytes, status: int) -> tuple[str, Optional[str]]:
    text = body.decode("utf-8", errors="replace")
    try:
        envelope = ErrorResponse.from_dict(json.loads(text))
    except ValueError:
        return f"({status}) {text}", None
    message = envelope.get_message()
    if message is None:
        return f"({status}) {text}", None
    details = envelope.details if envelope.details != message else None
    return message, details


def decode_response(
    body: bytes,
    status: int,
    parse: Optional[Callable[[dict], T]] = None,
    parse_page: Optional[Callable[[dict], PageInfo]] = None,
    credentials_missing: bool = False,
) -> tuple[Optional[T], Optional[PageInfo]]:
    """Turn a raw response into a result and optional pagination info.

    Args:
        body: The full response body.
        status: HTTP status code.
        parse: Builds the result from the decoded JSON object.
        parse_page: Builds pagination info from the same JSON object.
        credentials_missing: Append a hint to error messages when the client
            has no key or secret.

    Returns:
        ``(result, page)``; either is None when its parser was not given.

    Raises:
        ApiError: On any non-200 status.
        DecodeError: If a 200 body is not the expected JSON.
    """
    if status != 200:
        logger.debug("Error response (%d): %s", status, body)
        message, details = _error_message(body, status)
        if credentials_missing:
            message += MISSING_CREDENTIALS_HINT
        raise error_for_status(status, message, details)

    if parse is None and parse_page is None:
        return None, None

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.debug("API response causing error: %s", body)
        raise DecodeError(f"unmarshal api result: {e}")
    if not isinstance(data, dict):
        logger.debug("API response causing error: %s", body)
        raise DecodeError("unmarshal api result: expected a JSON object")

    result = None
    if parse is not None:
        try:
            result = parse(data)
        except DecodeError:
            logger.debug("API response causing error: %s", body)
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.debug("API response causing error: %s", body)
            raise DecodeError(f"unmarshal api result: {e}")

    page = parse_page(data) if parse_page is not None else None
    return result, page
