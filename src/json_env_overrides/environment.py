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

"""Environment variable selection for JSON expansion."""

from collections.abc import Mapping
import os

from .paths import ENV_SEPARATOR

JSON_START_CHARS = ("{", "[")


def normalize_prefix(root_prefix: str) -> str:
    """Return ``root_prefix`` terminated by the ``__`` separator.

    Raises:
        ValueError: If the prefix is empty or whitespace
    """
    if not root_prefix or not root_prefix.strip():
        raise ValueError("root_prefix must be non-empty")
    if root_prefix.endswith(ENV_SEPARATOR):
        return root_prefix
    return root_prefix + ENV_SEPARATOR


def is_eligible(name: str | None, value: str | None, prefix: str) -> bool:
    """Check whether a variable should be expanded as JSON.

    ``prefix`` is expected to be normalized already (see normalize_prefix).
    The name must start with it, ignoring case, and the value must start
    with ``{`` or ``[`` once leading whitespace is removed.
    """
    if not name:
        return False
    if not name.casefold().startswith(prefix.casefold()):
        return False
    if value is None:
        return False
    trimmed = value.lstrip()
    if not trimmed:
        return False
    return trimmed[0] in JSON_START_CHARS


def snapshot_environment(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy the environment (``os.environ`` by default) at call time."""
    return dict(os.environ if environ is None else environ)
