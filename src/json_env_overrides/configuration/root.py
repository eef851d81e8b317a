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

"""Built configuration and section views.

A Configuration is an immutable snapshot of the merged entries of every
source. Lookups use rendered keys (``"MyApp:Teams:0"``) and ignore case.
Sections are views rooted at a path; keys passed to a section are relative
to it.
"""

from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from ..overrides import OverrideValue
from ..paths import ConfigPath

ModelT = TypeVar("ModelT", bound=BaseModel)


class _Node:
    """Intermediate tree node used when rebuilding nested structures."""

    __slots__ = ("children", "value")

    def __init__(self) -> None:
        # casefolded segment -> (display segment, node)
        self.children: dict[str, tuple[str, _Node]] = {}
        self.value: OverrideValue = None

    def child(self, segment: str) -> "_Node":
        folded = segment.casefold()
        if folded not in self.children:
            self.children[folded] = (segment, _Node())
        return self.children[folded][1]

    def to_python(self) -> Any:
        # A node with children is a section; a scalar stored at the same
        # path is shadowed by it.
        if not self.children:
            return self.value
        names = [name for name, _ in self.children.values()]
        # Only canonical indices ("0", "1", not "00") count as list positions
        if all(name.isdecimal() and name == str(int(name)) for name in names) and sorted(
            int(n) for n in names
        ) == list(range(len(names))):
            ordered = sorted(self.children.values(), key=lambda item: int(item[0]))
            return [node.to_python() for _, node in ordered]
        return {name: node.to_python() for name, node in self.children.values()}


class Configuration(Mapping[str, OverrideValue]):
    """Read-only configuration view.

    Mapping access returns ``None`` for missing keys instead of raising,
    matching how hierarchical configuration is usually probed; use ``in``
    to tell a missing key from a key explicitly set to null.
    """

    def __init__(
        self,
        entries: Mapping[ConfigPath, OverrideValue],
        path: ConfigPath | None = None,
    ) -> None:
        self._entries = entries
        self._path = path if path is not None else ConfigPath()

    def _resolve(self, key: ConfigPath | str) -> ConfigPath:
        return self._path.join(key)

    def _descendants(self) -> Iterator[tuple[ConfigPath, OverrideValue]]:
        for path, value in self._entries.items():
            if self._path.is_ancestor_of(path):
                yield path, value

    @property
    def path(self) -> str:
        return str(self._path)

    @property
    def key(self) -> str:
        return self._path.key

    @property
    def value(self) -> OverrideValue:
        """Value stored at this section's own path, if any."""
        return self._entries.get(self._path)

    def get(self, key: ConfigPath | str, default: Any = None) -> Any:  # type: ignore[override]
        path = self._resolve(key)
        if path in self._entries:
            return self._entries[path]
        return default

    def __getitem__(self, key: ConfigPath | str) -> OverrideValue:  # type: ignore[override]
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, ConfigPath)):
            return False
        return self._resolve(key) in self._entries

    def __iter__(self) -> Iterator[str]:
        for path, _ in self._descendants():
            yield str(path.relative_to(self._path))

    def __len__(self) -> int:
        return sum(1 for _ in self._descendants())

    def exists(self) -> bool:
        """True if the section has a value or any entries below it."""
        return self._path in self._entries or any(True for _ in self._descendants())

    def get_section(self, key: ConfigPath | str) -> "Configuration":
        return Configuration(self._entries, self._resolve(key))

    def get_children_keys(self, key: ConfigPath | str = "") -> list[str]:
        """Immediate child segment names below ``key``, in first-seen order."""
        parent = self._resolve(key)
        depth = len(parent.segments)
        seen: dict[str, str] = {}
        for path in self._entries:
            if parent.is_ancestor_of(path):
                segment = path.segments[depth]
                seen.setdefault(segment.casefold(), segment)
        return list(seen.values())

    def as_dict(self, relative: bool = False) -> dict[str, OverrideValue]:
        """Flat dict of every entry below this view."""
        return {
            str(path.relative_to(self._path) if relative else path): value
            for path, value in self._descendants()
        }

    def to_nested(self) -> Any:
        """Rebuild dicts and lists from the flat entries below this view.

        Children whose names are the indices 0..n-1 become a list. Returns
        an empty dict for an empty view.
        """
        root = _Node()
        for path, value in self._descendants():
            node = root
            for segment in path.relative_to(self._path).segments:
                node = node.child(segment)
            node.value = value
        if not root.children:
            return {}
        return root.to_python()

    def bind(self, model_type: type[ModelT], key: ConfigPath | str = "") -> ModelT:
        """Validate the section at ``key`` into a pydantic model.

        Raises:
            pydantic.ValidationError: If the section does not fit the model
        """
        data = self.get_section(key).to_nested()
        return model_type.model_validate(data)

    def __repr__(self) -> str:
        return f"Configuration(path={self.path!r}, entries={len(self)})"
