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

"""JSON environment overrides.

Override hierarchical configuration, arrays and objects included, with JSON
stored in environment variables. Useful wherever settings can only be given
as flat name/value pairs, such as cloud app-service configuration panels.

Example:
    Environment::

        MyApp__Teams=["prod1","prod2","prod3"]

    Code::

        builder = ConfigurationBuilder()
        builder.add_json_file("appsettings.json", optional=True)
        builder.add_environment_variables()
        add_json_env_overrides(builder, "MyApp")
        configuration = builder.build()

        configuration["MyApp:Teams:1"]  # "prod2"
"""

from .configuration import Configuration, ConfigurationBuilder
from .environment import is_eligible, normalize_prefix, snapshot_environment
from .exceptions import (
    ConfigurationLoadError,
    ExtraRegistrationError,
    InvalidJsonVariableError,
    JsonEnvOverridesError,
)
from .expander import JsonNumber, expand_json_value, parse_json_document
from .extras import (
    ExtrasRegistry,
    JsonEnvOverrideExtra,
    add_json_env_overrides_extras,
    extra,
)
from .loader import add_json_env_overrides, build_json_env_overrides
from .overrides import OverrideMap
from .paths import ConfigPath

__version__ = "1.0.0"

__all__ = [
    "ConfigPath",
    "Configuration",
    "ConfigurationBuilder",
    "ConfigurationLoadError",
    "ExtraRegistrationError",
    "ExtrasRegistry",
    "InvalidJsonVariableError",
    "JsonEnvOverrideExtra",
    "JsonEnvOverridesError",
    "JsonNumber",
    "OverrideMap",
    "add_json_env_overrides",
    "add_json_env_overrides_extras",
    "build_json_env_overrides",
    "expand_json_value",
    "extra",
    "is_eligible",
    "normalize_prefix",
    "parse_json_document",
    "snapshot_environment",
]
