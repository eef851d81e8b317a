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

"""Default settings for JSON environment overrides.

The defaults work without any environment variable or settings file.
"""

from pathlib import Path

from .schema import OverridesSettings

# Default settings instance
DEFAULT_SETTINGS = OverridesSettings()

# Environment variable mapping for easy reference
ENV_VAR_MAPPING = {
    "JEO_ROOT_PREFIX": "root_prefix",
    "JEO_CONTINUE_ON_ERROR": "continue_on_error",
    "JEO_LOG_LEVEL": "log_level",
    "JEO_OUTPUT_FORMAT": "output_format",
}

# Type mapping for environment variable conversion
ENV_VAR_TYPES = {
    "JEO_ROOT_PREFIX": str,
    "JEO_CONTINUE_ON_ERROR": bool,
    "JEO_LOG_LEVEL": str,
    "JEO_OUTPUT_FORMAT": str,
}

TRUE_VALUES = ("true", "1", "yes", "on")

# Searched in order; the first file found is used
DEFAULT_SETTINGS_PATHS = [
    Path("/etc/json-env-overrides/settings.json"),
    Path("/etc/json-env-overrides/settings.yaml"),
    Path.home() / ".config" / "json-env-overrides" / "settings.json",
    Path.home() / ".config" / "json-env-overrides" / "settings.yaml",
    Path("jeo.json"),
    Path("jeo.yaml"),
    Path("jeo.yml"),
]
