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

"""Settings manager for JSON environment overrides.

This module provides the SettingsManager class that handles:
- Settings file loading (JSON/YAML)
- Environment variable loading with JEO_ prefix and type conversion
- Explicit overrides (e.g. from command line arguments)
- Validation with warnings and recommendations
"""

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from .defaults import (
    DEFAULT_SETTINGS,
    DEFAULT_SETTINGS_PATHS,
    ENV_VAR_MAPPING,
    ENV_VAR_TYPES,
    TRUE_VALUES,
)
from .schema import OverridesSettings
from .validation import ConfigValidationError, SettingsValidator

logger = logging.getLogger(__name__)


class SettingsManager:
    """Loads the tool's settings from files, environment and overrides.

    Precedence, lowest first: defaults, the first settings file found,
    ``JEO_*`` environment variables, explicit overrides.
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        settings_paths: list[Path] | None = None,
    ) -> None:
        self._environ = environ
        self._settings_paths = (
            DEFAULT_SETTINGS_PATHS if settings_paths is None else list(settings_paths)
        )
        self._validator = SettingsValidator()
        self._settings: OverridesSettings = DEFAULT_SETTINGS.model_copy(deep=True)
        self._loaded_from_env = False
        self._loaded_from_file: Path | None = None

    def load(self, overrides: Mapping[str, Any] | None = None) -> OverridesSettings:
        """Load and validate settings.

        Args:
            overrides: Field values that win over every other source;
                None values are ignored

        Raises:
            ConfigValidationError: If the merged settings are invalid
        """
        self._loaded_from_env = False
        self._loaded_from_file = None

        settings_data = DEFAULT_SETTINGS.model_dump()
        self._load_from_files(settings_data)
        self._load_from_environment(settings_data)
        if overrides:
            settings_data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            new_settings = OverridesSettings(**settings_data)
        except ValidationError as e:
            logger.debug("Settings validation failed: %s", e)
            raise ConfigValidationError(
                f"Invalid settings: {e}",
                [
                    {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                    for error in e.errors()
                ],
            ) from e

        self._validator.validate_settings(new_settings)
        for warning in self._validator.warnings:
            logger.warning("Settings warning: %s", warning)
        if self._validator.recommendations:
            logger.info("Settings recommendations: %s", self._validator.recommendations)

        self._settings = new_settings
        return self.settings

    def _load_from_files(self, settings_data: dict[str, Any]) -> None:
        """Merge the first readable settings file found."""
        for settings_path in self._settings_paths:
            if not settings_path.exists():
                continue
            try:
                with settings_path.open(encoding="utf-8") as f:
                    if settings_path.suffix in (".yaml", ".yml"):
                        file_settings = yaml.safe_load(f)
                    else:
                        file_settings = json.load(f)
            except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
                logger.warning("Failed to load settings from %s: %s", settings_path, e)
                continue

            if not isinstance(file_settings, dict):
                logger.warning("Ignoring settings file %s: not a mapping", settings_path)
                continue

            settings_data.update(file_settings)
            self._loaded_from_file = settings_path
            logger.info("Loaded settings from %s", settings_path)
            break

    def _load_from_environment(self, settings_data: dict[str, Any]) -> None:
        """Load settings from environment variables with JEO_ prefix."""
        environ = os.environ if self._environ is None else self._environ
        found = []

        for env_var, field_name in ENV_VAR_MAPPING.items():
            env_value = environ.get(env_var)
            if env_value is None:
                continue
            var_type = ENV_VAR_TYPES.get(env_var, str)
            if var_type is bool:
                settings_data[field_name] = env_value.strip().lower() in TRUE_VALUES
            else:
                settings_data[field_name] = var_type(env_value)
            found.append(env_var)

        if found:
            self._loaded_from_env = True
            logger.debug("Loaded %d settings from environment variables", len(found))

    @property
    def settings(self) -> OverridesSettings:
        """Get a copy of the current settings."""
        return self._settings.model_copy(deep=True)

    def update_settings(self, **kwargs: Any) -> OverridesSettings:
        """Update settings at runtime.

        Raises:
            ConfigValidationError: If the update produces invalid settings
        """
        settings_data = self._settings.model_dump()
        settings_data.update(kwargs)
        try:
            new_settings = OverridesSettings(**settings_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid settings update: {e}") from e

        self._validator.validate_settings(new_settings)
        self._settings = new_settings
        logger.info("Settings updated: %s", list(kwargs.keys()))
        return self.settings

    def get_settings_summary(self) -> dict[str, Any]:
        return {
            "root_prefix": self._settings.root_prefix,
            "continue_on_error": self._settings.continue_on_error,
            "loaded_from_env": self._loaded_from_env,
            "loaded_from_file": str(self._loaded_from_file) if self._loaded_from_file else None,
            "validation": self._validator.get_validation_summary(),
        }

    def get_env_var_help(self) -> dict[str, str]:
        """Get help text for all supported environment variables."""
        help_text = {}
        for env_var, field_name in ENV_VAR_MAPPING.items():
            var_type = ENV_VAR_TYPES.get(env_var, str)
            description = OverridesSettings.model_fields[field_name].description
            help_text[env_var] = f"Type: {var_type.__name__}, Setting: {field_name}. {description}"
        return help_text
