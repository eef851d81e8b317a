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

"""Settings schema for JSON environment overrides.

This module defines the tool's own settings using Pydantic models for type
safety and validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OverridesSettings(BaseModel):
    """Settings controlling how JSON environment overrides are expanded."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    root_prefix: str | None = Field(
        default=None,
        description="Logical root of the expanded section, e.g. 'MyApp'",
    )

    continue_on_error: bool = Field(
        default=False,
        description="Skip variables holding malformed JSON instead of failing",
    )

    log_level: str = Field(
        default="WARNING",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level used by the command line tool",
    )

    output_format: str = Field(
        default="json",
        pattern="^(json|yaml|env)$",
        description="Output format of the command line tool",
    )

    @field_validator("root_prefix")
    @classmethod
    def validate_root_prefix(cls, v):
        """Reject blank prefixes; None means 'not configured'."""
        if v is not None and not v.strip():
            raise ValueError("root_prefix must not be blank")
        return v

    @field_validator("log_level", "output_format", mode="before")
    @classmethod
    def normalize_case(cls, v, info):
        """Accept any casing for enumerated values."""
        if isinstance(v, str):
            return v.upper() if info.field_name == "log_level" else v.lower()
        return v
