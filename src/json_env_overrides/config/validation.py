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

"""Settings validation for JSON environment overrides.

Hard errors come from the pydantic schema; this module adds the checks that
only produce warnings and recommendations.
"""

from typing import Any

from ..exceptions import JsonEnvOverridesError
from ..paths import ENV_SEPARATOR, KEY_DELIMITER
from .schema import OverridesSettings


class ConfigValidationError(JsonEnvOverridesError):
    """Settings validation error with detailed context."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "JEO_1000"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, user_message="Invalid settings", context={"errors": errors or []})
        self.errors = errors or []


class SettingsValidator:
    """Settings validator collecting warnings and recommendations."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.recommendations: list[str] = []

    def validate_settings(self, settings: OverridesSettings) -> None:
        """Check settings for combinations that load but behave surprisingly.

        Args:
            settings: Settings to inspect
        """
        self.warnings.clear()
        self.recommendations.clear()

        self._validate_root_prefix(settings)
        self._validate_error_reporting(settings)

    def _validate_root_prefix(self, settings: OverridesSettings) -> None:
        prefix = settings.root_prefix
        if prefix is None:
            return

        if KEY_DELIMITER in prefix:
            self.warnings.append(
                f"Root prefix '{prefix}' contains '{KEY_DELIMITER}', which environment "
                f"variable names cannot carry. Use '{ENV_SEPARATOR}' between segments.",
            )

        if prefix != prefix.strip():
            self.warnings.append(
                f"Root prefix '{prefix}' has leading or trailing whitespace "
                f"and will not match any environment variable.",
            )

        if prefix.endswith("_") and not prefix.endswith(ENV_SEPARATOR):
            self.warnings.append(
                f"Root prefix '{prefix}' ends with a single underscore. "
                f"Only variables named '{prefix}{ENV_SEPARATOR}...' will be expanded.",
            )

    def _validate_error_reporting(self, settings: OverridesSettings) -> None:
        if not settings.continue_on_error:
            return

        if settings.log_level in ("ERROR", "CRITICAL"):
            self.warnings.append(
                "continue_on_error is enabled but the log level hides warnings, "
                "so skipped variables will not be reported.",
            )

        self.recommendations.append(
            "continue_on_error silently drops variables with malformed JSON. "
            "Prefer strict mode outside of development.",
        )

    def get_validation_summary(self) -> dict[str, Any]:
        """Get summary of validation results including warnings and recommendations."""
        return {
            "status": "valid",
            "warnings": self.warnings,
            "recommendations": self.recommendations,
            "warning_count": len(self.warnings),
            "recommendation_count": len(self.recommendations),
        }
