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

"""Custom exceptions for JSON environment overrides."""

from datetime import datetime, timezone
from typing import Any


class JsonEnvOverridesError(Exception):
    """Base exception for all JSON environment override errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "JEO_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or "An error occurred"
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ConfigurationLoadError(JsonEnvOverridesError):
    """A configuration source could not be loaded.

    Raised in strict mode when an eligible environment variable holds
    malformed JSON, and by file sources that cannot be read or parsed.
    """

    ERROR_CATEGORY = "CONFIGURATION_ERROR"
    ERROR_CODE = "JEO_2000"

    def __init__(
        self,
        message: str,
        variable: str | None = None,
        source: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        context: dict[str, Any] = {}
        if variable:
            context["variable"] = variable
        if source:
            context["source"] = source
        if original_error:
            context["original_error"] = str(original_error)
        super().__init__(
            message,
            user_message="Configuration could not be loaded",
            context=context,
            recovery_suggestion="Fix or remove the offending configuration value",
        )
        self.variable = variable
        self.source = source
        self.original_error = original_error


class InvalidJsonVariableError(ConfigurationLoadError):
    """An eligible environment variable does not contain valid JSON."""

    ERROR_CODE = "JEO_2001"

    def __init__(self, variable: str, original_error: Exception) -> None:
        super().__init__(
            f"Invalid JSON in environment variable '{variable}': {original_error}",
            variable=variable,
            original_error=original_error,
        )
        self.recovery_suggestion = (
            f"Correct the JSON value of '{variable}' or enable continue_on_error"
        )


class ExtraRegistrationError(JsonEnvOverridesError):
    """Registering, looking up or instantiating an extra failed."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "JEO_3000"

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            f"Extra '{name}': {reason}",
            user_message=f"Invalid extra '{name}'",
            context={"extra": name, "reason": reason},
        )
        self.name = name
        self.reason = reason
