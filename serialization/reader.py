"""
Pull-model JSON token reader.

JsonReader wraps any iterable of (JsonToken, value) pairs. Converters advance
it with read() and inspect token_type / value, the same way for JSON text,
YAML output or a hand-built token list.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, Iterator

from serialization.tokens import JsonToken, Token, iter_tokens
from utils.jsonc import strip_comments


class JsonReader:
    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self.token_type: JsonToken = JsonToken.NONE
        self.value: Any = None

    @classmethod
    def from_text(cls, text: str, parse_dates: bool = True) -> "JsonReader":
        """Decode JSON text (// and /* */ comments allowed). json.JSONDecodeError propagates."""
        return cls(iter_tokens(json.loads(strip_comments(text)), parse_dates))

    @classmethod
    def from_value(cls, obj: Any, parse_dates: bool = False) -> "JsonReader":
        return cls(iter_tokens(obj, parse_dates))

    def read(self) -> bool:
        """Advance to the next token. False once the source is exhausted."""
        try:
            self.token_type, self.value = next(self._tokens)
        except StopIteration:
            self.token_type, self.value = JsonToken.NONE, None
            return False
        return True

    def load_token(self) -> Any:
        """Materialize the current token (and its subtree) as a builtin value.

        Comments are dropped; everything else is kept as-is. Raises ValueError
        if the source ends inside an object or array.
        """
        while self.token_type is JsonToken.COMMENT:
            if not self.read():
                return None
        if self.token_type is JsonToken.START_OBJECT:
            obj: dict[str, Any] = {}
            while self._read_significant():
                if self.token_type is JsonToken.END_OBJECT:
                    return obj
                if self.token_type is not JsonToken.PROPERTY_NAME:
                    raise ValueError(f"Unexpected token {self.token_type.name} in object")
                key = str(self.value)
                if not self.read():
                    break
                obj[key] = self.load_token()
            raise ValueError("Unexpected end of input while reading object")
        if self.token_type is JsonToken.START_ARRAY:
            items: list[Any] = []
            while self._read_significant():
                if self.token_type is JsonToken.END_ARRAY:
                    return items
                items.append(self.load_token())
            raise ValueError("Unexpected end of input while reading array")
        return self.value

    def skip(self) -> None:
        """Consume the current token's subtree, leaving the reader on its last token."""
        if not self.token_type.is_start:
            return
        depth = 1
        while depth and self.read():
            if self.token_type.is_start:
                depth += 1
            elif self.token_type in (JsonToken.END_OBJECT, JsonToken.END_ARRAY):
                depth -= 1

    def _read_significant(self) -> bool:
        while self.read():
            if self.token_type is not JsonToken.COMMENT:
                return True
        return False
