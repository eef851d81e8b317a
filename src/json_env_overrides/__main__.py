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

"""Command line entry point: print the overrides expanded from the environment.

Usage:
    python -m json_env_overrides --prefix MyApp
    python -m json_env_overrides --prefix MyApp --format env
    JEO_ROOT_PREFIX=MyApp json-env-overrides --format yaml

The expanded entries go to stdout; logs go to stderr.
"""

import argparse
import json
import logging
import sys

import yaml

from .config import ConfigValidationError, SettingsManager
from .exceptions import ConfigurationLoadError
from .loader import build_json_env_overrides
from .overrides import OverrideMap
from .paths import ENV_SEPARATOR, KEY_DELIMITER

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def format_overrides(overrides: OverrideMap, output_format: str) -> str:
    """Render an override map as JSON, YAML or ``NAME=value`` lines.

    The env format turns keys back into environment variable names, giving
    the indexed variables that would set the same entries one by one.
    """
    entries = overrides.to_dict()
    if output_format == "yaml":
        return yaml.safe_dump(entries, default_flow_style=False, sort_keys=False)
    if output_format == "env":
        lines = [
            f"{key.replace(KEY_DELIMITER, ENV_SEPARATOR)}={'' if value is None else value}"
            for key, value in entries.items()
        ]
        return "\n".join(lines) + ("\n" if lines else "")
    return json.dumps(entries, indent=2) + "\n"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-env-overrides",
        description="Expand JSON-valued environment variables into configuration keys.",
    )
    parser.add_argument("--prefix", help="Root prefix, e.g. MyApp (default: $JEO_ROOT_PREFIX)")
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        default=None,
        help="Skip variables with malformed JSON instead of failing",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["json", "yaml", "env"],
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Log level for messages on stderr (default: WARNING)",
    )
    parser.add_argument(
        "--env-help",
        action="store_true",
        help="List the JEO_* environment variables and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return its exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    manager = SettingsManager()
    if args.env_help:
        for env_var, help_text in manager.get_env_var_help().items():
            sys.stdout.write(f"{env_var}: {help_text}\n")
        return 0

    logging.basicConfig(level=logging.WARNING, stream=sys.stderr, format=LOG_FORMAT)

    try:
        settings = manager.load(
            {
                "root_prefix": args.prefix,
                "continue_on_error": args.continue_on_error,
                "output_format": args.output_format,
                "log_level": args.log_level,
            },
        )
    except ConfigValidationError as e:
        sys.stderr.write(f"error: {e}\n")
        return 2

    logging.getLogger("json_env_overrides").setLevel(settings.log_level)

    if settings.root_prefix is None:
        parser.error("a root prefix is required (--prefix or JEO_ROOT_PREFIX)")

    try:
        overrides = build_json_env_overrides(
            settings.root_prefix,
            continue_on_error=settings.continue_on_error,
        )
    except ConfigurationLoadError as e:
        logger.debug("Expansion failed", exc_info=True)
        sys.stderr.write(f"error: {e}\n")
        return 1

    sys.stdout.write(format_overrides(overrides, settings.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
