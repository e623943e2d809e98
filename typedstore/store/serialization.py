"""Serialization of store values to and from their persisted source string."""

import json
from collections.abc import Mapping
from typing import Any

from ..exceptions import SerializationError
from ..schema.base import MISSING


class Serializer:
    """Encode values as JSON text and decode them back.

    Everything the type system can validate round-trips: mappings with
    string keys, lists (tuples come back as lists), strings, finite numbers,
    booleans and ``None``. NaN and infinities are rejected because JSON has
    no representation for them.

    Example:
        serializer = Serializer()
        source = serializer.dumps({"theme": "dark", "sizes": [12, 14]})
        # '{"theme":"dark","sizes":[12,14]}'
        serializer.loads(source)["sizes"]  # [12, 14]
    """

    def __init__(self, indent: Any = None, sort_keys: bool = False):
        """Initialize the serializer.

        Args:
            indent: Passed to json.dumps; None gives compact output
            sort_keys: Emit mapping keys in sorted order
        """
        self.indent = indent
        self.sort_keys = sort_keys

    def dumps(self, value: Any) -> str:
        """Serialize a value to its source string.

        Raises:
            SerializationError: If the value holds something JSON cannot encode
        """
        self._check(value)
        try:
            return json.dumps(
                value,
                indent=self.indent,
                sort_keys=self.sort_keys,
                allow_nan=False,
                ensure_ascii=False,
                separators=None if self.indent is not None else (",", ":"),
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def loads(self, source: str) -> Any:
        """Parse a source string.

        Raises:
            SerializationError: If the source is not valid JSON
        """
        try:
            return json.loads(source)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to parse stored source: {e}") from e

    def _check(self, value: Any) -> None:
        """Reject values json.dumps would silently mangle."""
        if value is MISSING:
            raise SerializationError("Cannot serialize a missing value")
        if isinstance(value, Mapping):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError(
                        f"Mapping keys must be strings, got {key!r}"
                    )
                self._check(item)
        elif isinstance(value, (list, tuple)):
            for item in value:
                self._check(item)
