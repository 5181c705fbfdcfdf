"""Cursor encoding and decoding for pagination.

A cursor pins one record's position under a given ordering. It is handed to
clients as an opaque URL-safe base64 string and decoded again when the
client asks for the records after or before it.

The payload depends on the ordering:

1. Ordering by the primary key: the bare key value, e.g. ``2`` -> ``Mg==``
2. Ordering by any other field: ``[order_field_value, primary_key_value]``,
   e.g. ``["Jane", 4]`` -> ``WyJKYW5lIiw0XQ==``

The primary key is always part of the payload so records sharing the same
order field value still have a distinct position.

``TimestampCursorCodec`` stores datetime order values as integer
microseconds since the Unix epoch, which keeps tokens short while
preserving microsecond ordering.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

from cursor_pager.core.exceptions import InvalidCursorError, ParameterError

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_KEY = "id"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True, slots=True)
class SimpleCursor:
    """Cursor for ordering by the primary key.

    Attributes:
        primary_key_value: Key of the referenced record
    """

    primary_key_value: Any

    @property
    def order_field_value(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class CompoundCursor:
    """Cursor for ordering by a field other than the primary key.

    Attributes:
        order_field: Name of the ordering field
        order_field_value: Value of that field on the referenced record
        primary_key_value: Key of the referenced record (tie breaker)

    Raises:
        ParameterError: If ``order_field_value`` is missing
    """

    order_field: str
    order_field_value: Any
    primary_key_value: Any

    def __post_init__(self) -> None:
        if self.order_field_value is None:
            raise ParameterError(
                f"The `order_field` was set to `{self.order_field!r}` "
                "but no `order_field_value` was set",
                details={"order_field": self.order_field, "order_field_value": None},
            )


Cursor = SimpleCursor | CompoundCursor


def _json_default(value: Any) -> Any:
    """Serialize values json can't handle natively."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not cursor serializable")


def _read_field(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record[field]
    return getattr(record, field)


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        codec = CursorCodec()

        # Encoding
        cursor = codec.from_record(post, order_field="author")
        token = codec.encode(cursor)  # "WyJKYW5lIiw0XQ=="

        # Decoding
        cursor = codec.decode(token, order_field="author")
        cursor.order_field_value, cursor.primary_key_value  # ("Jane", 4)
    """

    def from_record(
        self,
        record: Any,
        *,
        order_field: str = DEFAULT_PRIMARY_KEY,
        primary_key: str = DEFAULT_PRIMARY_KEY,
        getter: Callable[[Any, str], Any] = _read_field,
    ) -> Cursor:
        """Create the cursor pointing at ``record``.

        Args:
            record: Model instance, row or mapping
            order_field: Field the collection is ordered by
            primary_key: Name of the primary key field
            getter: Reads a field value from ``record``

        Returns:
            SimpleCursor or CompoundCursor depending on ``order_field``
        """
        key = getter(record, primary_key)
        if order_field == primary_key:
            return SimpleCursor(primary_key_value=key)
        return CompoundCursor(
            order_field=order_field,
            order_field_value=getter(record, order_field),
            primary_key_value=key,
        )

    def encode(self, cursor: Cursor) -> str:
        """Encode a cursor to an opaque string.

        Args:
            cursor: Cursor to encode

        Returns:
            URL-safe base64 encoded string
        """
        if isinstance(cursor, CompoundCursor):
            payload: Any = [self.dump_order_value(cursor), cursor.primary_key_value]
        else:
            payload = cursor.primary_key_value
        json_str = json.dumps(payload, separators=(",", ":"), default=_json_default)
        return base64.urlsafe_b64encode(json_str.encode()).decode()

    def decode(
        self,
        token: str,
        *,
        order_field: str = DEFAULT_PRIMARY_KEY,
        primary_key: str = DEFAULT_PRIMARY_KEY,
    ) -> Cursor:
        """Decode a cursor string for the given ordering.

        Args:
            token: Encoded cursor as received from the client
            order_field: Field the request orders by
            primary_key: Name of the primary key field

        Returns:
            SimpleCursor when ordering by the primary key, CompoundCursor otherwise

        Raises:
            InvalidCursorError: If the token is corrupted or has the wrong
                shape for ``order_field``
        """
        payload = self._load_payload(token)

        if order_field == primary_key:
            if payload is None or isinstance(payload, (list, dict)):
                raise self._shape_error(token, payload)
            return SimpleCursor(primary_key_value=payload)

        if not (isinstance(payload, list) and len(payload) == 2) or payload[0] is None:
            raise self._shape_error(token, payload)
        return CompoundCursor(
            order_field=order_field,
            order_field_value=self.load_order_value(payload[0], token),
            primary_key_value=payload[1],
        )

    def dump_order_value(self, cursor: CompoundCursor) -> Any:
        """Serializable form of ``cursor.order_field_value``."""
        return cursor.order_field_value

    def load_order_value(self, raw: Any, token: str) -> Any:
        """Reverse of ``dump_order_value``."""
        return raw

    @staticmethod
    def _load_payload(token: str) -> Any:
        try:
            raw = base64.b64decode(token, altchars=b"-_", validate=True)
            return json.loads(raw)
        except (binascii.Error, ValueError, TypeError) as e:
            logger.debug("Rejected undecodable cursor %r: %s", token, e)
            raise InvalidCursorError(
                f"The given cursor `{token}` could not be decoded",
                cursor=token,
            ) from e

    @staticmethod
    def _shape_error(token: str, payload: Any) -> InvalidCursorError:
        logger.debug("Rejected cursor %r with payload %r", token, payload)
        return InvalidCursorError(
            f"The given cursor `{token}` was decoded as `{payload!r}` "
            "but could not be parsed",
            cursor=token,
        )


class TimestampCursorCodec(CursorCodec):
    """Cursor codec for ordering by a datetime field.

    The order value is stored as integer microseconds since the Unix epoch
    and decoded back into an aware UTC datetime. Naive datetimes are
    treated as UTC.
    """

    def dump_order_value(self, cursor: CompoundCursor) -> int:
        value = cursor.order_field_value
        if not isinstance(value, datetime):
            raise ParameterError(
                f"Could not encode {cursor.order_field} with value {value}. "
                "It is not a datetime. Is it a timestamp?",
                details={cursor.order_field: value},
            )
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return (value - _EPOCH) // _MICROSECOND

    def load_order_value(self, raw: Any, token: str) -> datetime:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise InvalidCursorError(
                f"The given cursor `{token}` could not be decoded to a timestamp",
                cursor=token,
            )
        try:
            return _EPOCH + raw * _MICROSECOND
        except OverflowError as e:
            raise InvalidCursorError(
                f"The given cursor `{token}` could not be decoded to a timestamp",
                cursor=token,
            ) from e


__all__ = [
    "CompoundCursor",
    "Cursor",
    "CursorCodec",
    "SimpleCursor",
    "TimestampCursorCodec",
]
