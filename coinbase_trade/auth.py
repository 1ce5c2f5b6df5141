"""Request signing for the Coinbase Advanced Trade API.

Every authenticated request carries three headers:

    CB-ACCESS-KEY        the API key
    CB-ACCESS-TIMESTAMP  Unix seconds, as a decimal string
    CB-ACCESS-SIGN       hex HMAC-SHA256 of timestamp + method + path + body

The timestamp in the header must be the one that was signed.
"""

import hashlib
import hmac
import time
from typing import Optional, Union

KEY_HEADER = "CB-ACCESS-KEY"
TIMESTAMP_HEADER = "CB-ACCESS-TIMESTAMP"
SIGN_HEADER = "CB-ACCESS-SIGN"


def current_timestamp() -> str:
    """Return the current Unix time in whole seconds, as a string."""
    return str(int(time.time()))


def sign(
    secret: str,
    timestamp: str,
    method: str,
    resource_path: str,
    body: Union[bytes, str] = b"",
) -> str:
    """Compute the request signature.

    Args:
        secret: The API secret, used as raw key bytes.
        timestamp: Unix seconds as a decimal string.
        method: HTTP method, e.g. ``GET``.
        resource_path: Base path plus endpoint, without the query string.
        body: Raw request body, empty for GET.

    Returns:
        Lowercase hex HMAC-SHA256 digest.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    message = f"{timestamp}{method}{resource_path}".encode("utf-8") + body
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def auth_headers(
    key: str,
    secret: str,
    method: str,
    resource_path: str,
    body: bytes = b"",
    timestamp: Optional[str] = None,
) -> dict[str, str]:
    """Build the three authentication headers for one request."""
    timestamp = timestamp or current_timestamp()
    return {
        KEY_HEADER: key,
        TIMESTAMP_HEADER: timestamp,
        SIGN_HEADER: sign(secret, timestamp, method, resource_path, body),
    }
