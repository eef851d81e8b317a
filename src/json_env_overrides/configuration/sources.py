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

"""Configuration sources.

Each source loads into a flat mapping of ConfigPath to string value. The
builder stacks sources in the order they were added; later sources win.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

import yaml

from ..environment import snapshot_environment
from ..exceptions import ConfigurationLoadError
from ..expander import JsonNumber, expand_json_value, parse_json_document
from ..overrides import OverrideMap, OverrideValue
from ..paths import ConfigPath

logger = logging.getLogger(__name__)


class ConfigurationSource(ABC):
    """Abstract base class for all configuration sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get a short description of the source for logs and errors."""

    @abstractmethod
    def load(self) -> dict[ConfigPath, OverrideValue]:
        """Load the source's entries.

        Raises:
            ConfigurationLoadError: If the source cannot be read or parsed
        """


class MemoryConfigurationSource(ConfigurationSource):
    """Entries supplied directly by the caller, copied when the source is created."""

    def __init__(self, entries: Mapping[ConfigPath | str, OverrideValue]) -> None:
        self._entries = OverrideMap(entries)

    @property
    def name(self) -> str:
        return f"memory({len(self._entries)} entries)"

    def load(self) -> dict[ConfigPath, OverrideValue]:
        return dict(self._entries.items())


class EnvironmentVariablesSource(ConfigurationSource):
    """Plain environment variables with ``__`` read as the key delimiter.

    When a prefix is given only matching variables are loaded and the prefix
    is removed from their keys. Values are used as-is; JSON-looking values
    are not expanded here.
    """

    def __init__(self, prefix: str | None = None, environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix or ""
        self._environ = environ

    @property
    def name(self) -> str:
        return f"environment(prefix={self.prefix!r})"

    def load(self) -> dict[ConfigPath, OverrideValue]:
        entries: dict[ConfigPath, OverrideValue] = {}
        folded_prefix = self.prefix.casefold()
        for variable, value in snapshot_environment(self._environ).items():
            if not variable.casefold().startswith(folded_prefix):
                continue
            key = variable[len(self.prefix) :]
            if not key:
                continue
            entries[ConfigPath.from_env_name(key)] = value
        return entries


class FileConfigurationSource(ConfigurationSource):
    """Base for sources backed by a file holding a top-level object."""

    format_name = "file"

    def __init__(self, path: str | Path, optional: bool = False) -> None:
        self.path = Path(path)
        self.optional = optional

    @property
    def name(self) -> str:
        return f"{self.format_name}({self.path})"

    @abstractmethod
    def _parse(self, text: str) -> Any:
        """Parse the file content into nested dicts and lists."""

    def load(self) -> dict[ConfigPath, OverrideValue]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            if self.optional:
                logger.debug("Optional configuration file %s not found", self.path)
                return {}
            raise ConfigurationLoadError(
                f"Configuration file '{self.path}' was not found",
                source=self.name,
                original_error=e,
            ) from e
        except OSError as e:
            raise ConfigurationLoadError(
                f"Configuration file '{self.path}' could not be read: {e}",
                source=self.name,
                original_error=e,
            ) from e

        if not text.strip():
            return {}

        # RecursionError: nesting deeper than the interpreter can parse or flatten
        try:
            document = self._parse(text)
            if document is None:
                return {}
            if not isinstance(document, dict):
                raise ConfigurationLoadError(
                    f"Configuration file '{self.path}' must contain an object at the top level",
                    source=self.name,
                )
            entries = expand_json_value(ConfigPath(), document)
        except (ValueError, yaml.YAMLError, RecursionError) as e:
            raise ConfigurationLoadError(
                f"Configuration file '{self.path}' is not valid {self.format_name}: {e}",
                source=self.name,
                original_error=e,
            ) from e

        logger.debug("Loaded %d entries from %s", len(entries), self.path)
        return dict(entries.items())


class JsonFileSource(FileConfigurationSource):
    """JSON file source. Numbers keep their source text."""

    format_name = "json"

    def _parse(self, text: str) -> Any:
        return parse_json_document(text)


class _RawScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps numbers and timestamps as their source text."""


def _construct_raw_number(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> JsonNumber:
    return JsonNumber(loader.construct_scalar(node))


def _construct_raw_text(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return str(loader.construct_scalar(node))


_RawScalarLoader.add_constructor("tag:yaml.org,2002:int", _construct_raw_number)
_RawScalarLoader.add_constructor("tag:yaml.org,2002:float", _construct_raw_number)
_RawScalarLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_raw_text)


class YamlFileSource(FileConfigurationSource):
    """YAML file source, read with a safe loader."""

    format_name = "yaml"

    def _parse(self, text: str) -> Any:
        return yaml.load(text, Loader=_RawScalarLoader)  # noqa: S506 - SafeLoader subclass
