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

"""Layered key/value configuration.

This package provides the configuration builder that JSON environment
overrides are added to:
- In-memory, environment variable, JSON file and YAML file sources
- Later sources take precedence over earlier ones
- Case-insensitive ``Section:Key:0`` lookups and section views
- Binding sections to pydantic models
"""

from .builder import ConfigurationBuilder
from .root import Configuration
from .sources import (
    ConfigurationSource,
    EnvironmentVariablesSource,
    FileConfigurationSource,
    JsonFileSource,
    MemoryConfigurationSource,
    YamlFileSource,
)

__all__ = [
    "Configuration",
    "ConfigurationBuilder",
    "ConfigurationSource",
    "EnvironmentVariablesSource",
    "FileConfigurationSource",
    "JsonFileSource",
    "MemoryConfigurationSource",
    "YamlFileSource",
]
