# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Hierarchical configuration paths.

A ConfigPath is an ordered sequence of segments (property names or array
indices) rendered as ``Segment:Segment:0``. Paths compare and hash
case-insensitively, so ``MyApp:Teams`` and ``myapp:TEAMS`` address the same
entry, while the spelling a path was created with is kept for display.

Example:
    >>> path = ConfigPath.parse("MyApp:Teams").child(0)
    >>> str(path)
    'MyApp:Teams:0'
    >>> path == ConfigPath.parse("myapp:teams:0")
    True
"""

from dataclasses import dataclass, field
from typing import Union

KEY_DELIMITER = ":"
ENV_SEPARATOR = "__"


@dataclass(frozen=True, eq=False)
class ConfigPath:
    """Case-insensitive configuration path value type."""

    segments: tuple[str, ...] = ()
    _normalized: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        segments = tuple(str(segment) for segment in self.segments)
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "_normalized", tuple(s.casefold() for s in segments))

    @classmethod
    def parse(cls, key: str) -> "ConfigPath":
        """Split a rendered key on the key delimiter. The empty string is the root."""
        if not key:
            return cls(())
        return cls(tuple(key.split(KEY_DELIMITER)))

    @classmethod
    def from_env_name(cls, name: str) -> "ConfigPath":
        """Build a path from an environment variable name (``A__B`` -> ``A:B``)."""
        return cls.parse(name.replace(ENV_SEPARATOR, KEY_DELIMITER))

    @classmethod
    def coerce(cls, key: Union["ConfigPath", str]) -> "ConfigPath":
        if isinstance(key, ConfigPath):
            return key
        if isinstance(key, str):
            return cls.parse(key)
        raise TypeError(f"Configuration keys must be str or ConfigPath, not {type(key).__name__}")

    def child(self, segment: str | int) -> "ConfigPath":
        return ConfigPath((*self.segments, str(segment)))

    def join(self, other: Union["ConfigPath", str]) -> "ConfigPath":
        return ConfigPath((*self.segments, *ConfigPath.coerce(other).segments))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def key(self) -> str:
        """Last segment, or an empty string for the root."""
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> "ConfigPath | None":
        if not self.segments:
            return None
        return ConfigPath(self.segments[:-1])

    def is_ancestor_of(self, other: "ConfigPath") -> bool:
        """True if ``other`` lies strictly below this path."""
        depth = len(self._normalized)
        return len(other._normalized) > depth and other._normalized[:depth] == self._normalized

    def relative_to(self, ancestor: "ConfigPath") -> "ConfigPath":
        if ancestor != self and not ancestor.is_ancestor_of(self):
            raise ValueError(f"'{self}' is not below '{ancestor}'")
        return ConfigPath(self.segments[len(ancestor.segments) :])

    def __len__(self) -> int:
        return len(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigPath):
            return NotImplemented
        return self._normalized == other._normalized

    def __hash__(self) -> int:
        return hash(self._normalized)

    def __str__(self) -> str:
        return KEY_DELIMITER.join(self.segments)

    def __repr__(self) -> str:
        return f"ConfigPath({str(self)!r})"
