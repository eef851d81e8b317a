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

"""Layered configuration builder.

Example:
    >>> configuration = (
    ...     ConfigurationBuilder()
    ...     .add_json_file("appsettings.json", optional=True)
    ...     .add_environment_variables()
    ...     .build()
    ... )
    >>> configuration["MyApp:Teams:0"]
"""

from collections.abc import Mapping
import logging
from pathlib import Path

from ..overrides import OverrideValue
from ..paths import ConfigPath
from .root import Configuration
from .sources import (
    ConfigurationSource,
    EnvironmentVariablesSource,
    JsonFileSource,
    MemoryConfigurationSource,
    YamlFileSource,
)

logger = logging.getLogger(__name__)


class ConfigurationBuilder:
    """Ordered collection of configuration sources.

    Sources are loaded in the order they were added when build() is called,
    and each later source overrides same-path entries of earlier ones.
    Every ``add_*`` method returns the builder for chaining.
    """

    def __init__(self) -> None:
        self._sources: list[ConfigurationSource] = []

    @property
    def sources(self) -> list[ConfigurationSource]:
        """Registered sources, lowest precedence first."""
        return list(self._sources)

    def add(self, source: ConfigurationSource) -> "ConfigurationBuilder":
        if not isinstance(source, ConfigurationSource):
            raise TypeError(f"Expected a ConfigurationSource, got {type(source).__name__}")
        self._sources.append(source)
        return self

    def add_in_memory_collection(
        self,
        entries: Mapping[ConfigPath | str, OverrideValue],
    ) -> "ConfigurationBuilder":
        return self.add(MemoryConfigurationSource(entries))

    def add_environment_variables(
        self,
        prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "ConfigurationBuilder":
        return self.add(EnvironmentVariablesSource(prefix, environ))

    def add_json_file(self, path: str | Path, optional: bool = False) -> "ConfigurationBuilder":
        return self.add(JsonFileSource(path, optional))

    def add_yaml_file(self, path: str | Path, optional: bool = False) -> "ConfigurationBuilder":
        return self.add(YamlFileSource(path, optional))

    def build(self) -> Configuration:
        """Load every source and merge the results.

        Raises:
            ConfigurationLoadError: If any source fails to load
        """
        merged: dict[ConfigPath, OverrideValue] = {}
        for source in self._sources:
            entries = source.load()
            merged.update(entries)
            logger.debug("Loaded %d entries from %s", len(entries), source.name)

        logger.info(
            "Built configuration with %d entries from %d sources",
            len(merged),
            len(self._sources),
        )
        return Configuration(merged)
