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

"""Expand JSON-valued environment variables into configuration overrides.

With ``root_prefix="MyApp"`` and the environment variable::

    MyApp__Teams=["prod1","prod2","prod3"]

the overlay contains::

    MyApp:Teams:0 = "prod1"
    MyApp:Teams:1 = "prod2"
    MyApp:Teams:2 = "prod3"

Only variables named ``<prefix>__...`` whose values start with ``{`` or
``[`` are expanded; everything else is left to the plain environment
variable source.
"""

from collections.abc import Mapping
import json
import logging

from .configuration import ConfigurationBuilder
from .environment import is_eligible, normalize_prefix, snapshot_environment
from .exceptions import InvalidJsonVariableError
from .expander import expand_json_value, parse_json_document
from .overrides import OverrideMap
from .paths import ConfigPath

logger = logging.getLogger(__name__)


def build_json_env_overrides(
    root_prefix: str,
    *,
    continue_on_error: bool = False,
    environ: Mapping[str, str] | None = None,
) -> OverrideMap:
    """Build the override map for every eligible environment variable.

    Variables are processed in case-insensitive name order, so when two of
    them produce the same path the later name wins (``MyApp__A__B`` over
    ``MyApp__A``) regardless of how the platform orders the environment.

    Args:
        root_prefix: Logical root such as ``"MyApp"``; ``"MyApp__"`` is accepted too
        continue_on_error: Skip variables holding malformed JSON instead of failing
        environ: Environment to read; defaults to a snapshot of ``os.environ``

    Returns:
        A new OverrideMap, empty if nothing was eligible

    Raises:
        ValueError: If root_prefix is blank
        InvalidJsonVariableError: If a variable holds malformed or too deeply
            nested JSON and continue_on_error is False
    """
    prefix = normalize_prefix(root_prefix)
    snapshot = snapshot_environment(environ)
    overrides = OverrideMap()
    expanded = 0

    for name in sorted(snapshot, key=lambda n: (n.casefold(), n)):
        value = snapshot[name]
        if not is_eligible(name, value, prefix):
            continue

        # Expanded into a separate map so a failure leaves no partial entries
        try:
            entries = expand_json_value(ConfigPath.from_env_name(name), parse_json_document(value))
        except (json.JSONDecodeError, RecursionError) as e:
            if not continue_on_error:
                raise InvalidJsonVariableError(name, e) from e
            logger.warning("Skipping environment variable %s: invalid JSON (%s)", name, e)
            continue

        overrides.update(entries)
        expanded += 1
        logger.debug("Expanded %s into %d entries", name, len(entries))

    if expanded:
        logger.info(
            "Expanded %d configuration entries from %d environment variables",
            len(overrides),
            expanded,
        )
    return overrides


def add_json_env_overrides(
    builder: ConfigurationBuilder,
    root_prefix: str,
    continue_on_error: bool = False,
    *,
    environ: Mapping[str, str] | None = None,
) -> ConfigurationBuilder:
    """Add JSON environment overrides to ``builder`` as its last source.

    Being added last, the overlay wins over every source already on the
    builder. Nothing is added when no entries were produced.

    Raises:
        ValueError: If root_prefix is blank
        InvalidJsonVariableError: In strict mode, for the first variable
            with malformed JSON; the builder is left unchanged
    """
    overrides = build_json_env_overrides(
        root_prefix,
        continue_on_error=continue_on_error,
        environ=environ,
    )
    if overrides:
        builder.add_in_memory_collection(overrides)
    return builder
