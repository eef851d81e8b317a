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

"""Override map: path-keyed, string-typed configuration entries."""

from collections.abc import Iterator, Mapping, MutableMapping

from .paths import ConfigPath

# str for a value, None for an explicit JSON null
OverrideValue = str | None


class OverrideMap(MutableMapping[ConfigPath, OverrideValue]):
    """Case-insensitive mapping from configuration path to value.

    Keys may be given as ConfigPath or as rendered strings (``"A:B:0"``).
    A stored ``None`` means the key is present with no value, which is
    different from the key being absent. Writing an existing path replaces
    its value but keeps the original key spelling and position.
    """

    def __init__(self, entries: Mapping[ConfigPath | str, OverrideValue] | None = None) -> None:
        self._entries: dict[ConfigPath, OverrideValue] = {}
        if entries:
            self.update(entries)

    def __getitem__(self, key: ConfigPath | str) -> OverrideValue:
        return self._entries[ConfigPath.coerce(key)]

    def __setitem__(self, key: ConfigPath | str, value: OverrideValue) -> None:
        if value is not None and not isinstance(value, str):
            raise TypeError(f"Override values must be str or None, not {type(value).__name__}")
        self._entries[ConfigPath.coerce(key)] = value

    def __delitem__(self, key: ConfigPath | str) -> None:
        del self._entries[ConfigPath.coerce(key)]

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, ConfigPath)):
            return ConfigPath.coerce(key) in self._entries
        return False

    def __iter__(self) -> Iterator[ConfigPath]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict[str, OverrideValue]:
        """Return a plain dict keyed by rendered paths."""
        return {str(path): value for path, value in self._entries.items()}

    def __repr__(self) -> str:
        return f"OverrideMap({self.to_dict()!r})"
