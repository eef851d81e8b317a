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

"""Flatten parsed JSON into path-keyed configuration entries.

Objects contribute one path segment per member name and arrays one segment
per zero-based index. Leaves are stored as strings:

    {"Teams": ["a", "b"], "Limit": 1.50, "Enabled": true, "Owner": null}

expanded at ``MyApp`` gives::

    MyApp:Teams:0   = "a"
    MyApp:Teams:1   = "b"
    MyApp:Limit     = "1.50"
    MyApp:Enabled   = "true"
    MyApp:Owner     = None
"""

import json
from typing import Any

from .overrides import OverrideMap
from .paths import ConfigPath


class JsonNumber(str):
    """A JSON number kept as its source text.

    ``1.50`` stays ``"1.50"`` and ``1e3`` stays ``"1e3"``; converting through
    float would lose trailing zeros and exponent notation.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"JsonNumber({str.__repr__(self)})"


def parse_json_document(text: str) -> Any:
    """Parse strict JSON text, keeping numbers as JsonNumber.

    Raises:
        json.JSONDecodeError: If the text is malformed, including the
            non-standard ``NaN`` and ``Infinity`` literals.
    """

    def reject_constant(name: str) -> Any:
        raise json.JSONDecodeError(f"Invalid literal {name}", text, max(text.find(name), 0))

    return json.loads(
        text,
        parse_int=JsonNumber,
        parse_float=JsonNumber,
        parse_constant=reject_constant,
    )


def _scalar_text(value: Any) -> str | None:
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    return None


def expand_json_value(
    path: ConfigPath | str,
    element: Any,
    overrides: OverrideMap | None = None,
) -> OverrideMap:
    """Recursively write the leaves of ``element`` under ``path``.

    Booleans are written in JSON spelling, ``"true"`` and ``"false"``. .NET
    overlays that format with ``bool.ToString()`` write ``"True"``/``"False"``
    for the same input. Both bind to bool, but compare raw values
    case-insensitively against such output.

    Args:
        path: Logical path of ``element`` itself
        element: Parsed JSON value (dict, list, str, JsonNumber, bool or None)
        overrides: Map to write into; a new one is created when omitted

    Returns:
        The map the entries were written to
    """
    if overrides is None:
        overrides = OverrideMap()
    _expand(ConfigPath.coerce(path), element, overrides)
    return overrides


def _expand(path: ConfigPath, element: Any, overrides: OverrideMap) -> None:
    if isinstance(element, dict):
        for name, value in element.items():
            _expand(path.child(name), value, overrides)
    elif isinstance(element, (list, tuple)):
        for index, item in enumerate(element):
            _expand(path.child(index), item, overrides)
    else:
        # Nulls and unrecognized node kinds are stored as present-without-value
        overrides[path] = _scalar_text(element)
