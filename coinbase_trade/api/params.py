"""Query string encoding for request parameter dataclasses.

Parameter types are plain dataclasses. A field takes part in the query only
when it is declared with :func:`query_field`, which records its wire key in
the field metadata; other fields are left alone.

Zero values are never sent:

    str / str enum     sent if non-empty
    int                sent if non-zero
    list of str        one ``key=value`` pair per element, in order
    datetime           RFC3339, sent if set
    Decimal            canonical decimal string, sent if non-zero

A query field of any other type, ``bool`` included, raises
:class:`EncodingError` rather than being dropped from the query.
"""

import dataclasses
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from ..shared import format_decimal, format_time
from .error import EncodingError

QUERY_KEY = "query"

QueryParams = list[tuple[str, str]]


def query_field(key: str, default: Any = None, **kwargs: Any) -> Any:
    """Declare a dataclass field that is sent as query parameter ``key``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[QUERY_KEY] = key
    if isinstance(default, (list, dict, set)):
        factory = type(default)
        return dataclasses.field(default_factory=factory, metadata=metadata, **kwargs)
    return dataclasses.field(default=default, metadata=metadata, **kwargs)


def _scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _encode_value(key: str, value: Any) -> QueryParams:
    if value is None:
        return []
    # bool is an int subclass; it has no wire form here
    if isinstance(value, bool):
        raise EncodingError(f"unsupported type bool for {key!r}")
    if isinstance(value, (str, Enum)):
        text = _scalar(value)
        return [(key, text)] if text else []
    if isinstance(value, int):
        return [(key, str(value))] if value != 0 else []
    if isinstance(value, Decimal):
        return [(key, format_decimal(value))] if value != 0 else []
    if isinstance(value, datetime):
        return [(key, format_time(value))]
    if isinstance(value, (list, tuple)):
        return [(key, _scalar(item)) for item in value]
    raise EncodingError(f"unsupported type {type(value).__name__} for {key!r}")


def encode_params(params: Any) -> QueryParams:
    """Encode a parameter dataclass into ordered ``(key, value)`` pairs.

    Args:
        params: A dataclass instance whose query fields are declared with
            :func:`query_field`.

    Returns:
        Query pairs in field declaration order; repeated keys appear once per
        list element.

    Raises:
        EncodingError: If ``params`` is None or not a dataclass instance.
    """
    if params is None:
        raise EncodingError("no parameters given")
    if not dataclasses.is_dataclass(params) or isinstance(params, type):
        raise EncodingError(f"expected a parameters dataclass, got {type(params).__name__}")

    query: QueryParams = []
    for f in dataclasses.fields(params):
        key = f.metadata.get(QUERY_KEY)
        if not key:
            continue
        query.extend(_encode_value(key, getattr(params, f.name)))
    return query
