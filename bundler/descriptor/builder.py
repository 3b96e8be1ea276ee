"""Ordered key/value document builder for HOCON-style configuration text.

A ConfigObject holds fields in insertion order. Values are strings,
numbers, string sequences or nested ConfigObjects. Rendering is pure and
deterministic:

    version    = "1.0.0"
    roles      = ["a", "b"]
    components = {
      "my-app" = {
        bind-port = 9000
      }
    }

Keys within one object are padded to the longest key of that object.
Nested objects are indented by two spaces per level. The root object is
rendered without surrounding braces.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

INDENT = "  "

Value = Union[str, int, float, list[str], "ConfigObject"]


def quote(text: str) -> str:
    """Double-quote a string, escaping it the way JSON (and HOCON) expects."""
    return json.dumps(text, ensure_ascii=False)


def format_seq(items: Iterable[str]) -> str:
    return "[" + ", ".join(quote(s) for s in items) + "]"


@dataclass
class ConfigField:
    key: str
    value: Value
    quoted_key: bool = False

    @property
    def rendered_key(self) -> str:
        return quote(self.key) if self.quoted_key else self.key


@dataclass
class ConfigObject:
    fields: list[ConfigField] = field(default_factory=list)

    def set(self, key: str, value: Value, quoted_key: bool = False) -> "ConfigObject":
        """Append a field. Returns self so calls can be chained."""
        if key in self.keys():
            raise ValueError(f"Duplicate key in config object: {key}")
        if isinstance(value, (tuple, set, frozenset)):
            value = list(value)
        self.fields.append(ConfigField(key, value, quoted_key))
        return self

    def keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def render(self) -> str:
        """Render as a top-level document (no braces, trailing newline)."""
        return "".join(line + "\n" for line in self._body_lines(0))

    def _body_lines(self, depth: int) -> list[str]:
        if not self.fields:
            return []
        pad = INDENT * depth
        width = max(len(f.rendered_key) for f in self.fields)
        lines: list[str] = []
        for f in self.fields:
            prefix = f"{pad}{f.rendered_key.ljust(width)} = "
            if isinstance(f.value, ConfigObject):
                nested = f.value._body_lines(depth + 1)
                if not nested:
                    lines.append(prefix + "{}")
                    continue
                lines.append(prefix + "{")
                lines.extend(nested)
                lines.append(pad + "}")
            else:
                lines.append(prefix + _format_scalar(f.value))
        return lines


def _format_scalar(value: Value) -> str:
    # bool is an int subclass; rendered the HOCON way
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, list):
        return format_seq(value)
    raise TypeError(f"Unsupported config value: {value!r}")
