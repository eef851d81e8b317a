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

"""Registry of named configuration extras.

Extras are registered explicitly by the host application, either with
``registry.register(...)`` or the ``@extra`` class decorator, and applied to a
builder with ``add_json_env_overrides_extras``.

Example:
    >>> @extra("feature-flags", "Adds default feature flags")
    ... class FeatureFlagsExtra(JsonEnvOverrideExtra):
    ...     def apply(self, builder):
    ...         builder.add_in_memory_collection({"Features:Beta": "false"})
    >>> add_json_env_overrides_extras(ConfigurationBuilder())
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import logging
from typing import TypeVar

from ..configuration import ConfigurationBuilder
from ..exceptions import ExtraRegistrationError
from .base import JsonEnvOverrideExtra

logger = logging.getLogger(__name__)

ExtraFactory = Callable[[], JsonEnvOverrideExtra]
ExtraT = TypeVar("ExtraT", bound=type[JsonEnvOverrideExtra])


@dataclass(frozen=True)
class ExtraInfo:
    """Registration record for one extra."""

    name: str
    factory: ExtraFactory
    description: str | None = None


class ExtrasRegistry:
    """Mapping of extra names to factories, kept in registration order."""

    def __init__(self) -> None:
        self._extras: dict[str, ExtraInfo] = {}

    def register(
        self,
        name: str,
        factory: ExtraFactory,
        description: str | None = None,
    ) -> ExtraInfo:
        """Register a factory under a unique name.

        Raises:
            ExtraRegistrationError: If the name is blank or already taken
        """
        if not name or not name.strip():
            raise ExtraRegistrationError(repr(name), "name must be non-empty")
        if name in self._extras:
            raise ExtraRegistrationError(name, "already registered")
        if not callable(factory):
            raise ExtraRegistrationError(name, "factory is not callable")

        info = ExtraInfo(name=name, factory=factory, description=description)
        self._extras[name] = info
        logger.debug("Registered extra %s", name)
        return info

    def unregister(self, name: str) -> None:
        self._extras.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._extras

    def get(self, name: str) -> ExtraInfo | None:
        return self._extras.get(name)

    def names(self) -> list[str]:
        return list(self._extras.keys())

    def describe(self) -> list[ExtraInfo]:
        return list(self._extras.values())

    @property
    def size(self) -> int:
        return len(self._extras)

    def apply_all(
        self,
        builder: ConfigurationBuilder,
        names: Iterable[str] | None = None,
    ) -> ConfigurationBuilder:
        """Instantiate and apply extras to ``builder``.

        Args:
            builder: Builder to apply the extras to
            names: Extras to apply, in this order; all registered extras in
                registration order when omitted

        Raises:
            ExtraRegistrationError: If a name is unknown or a factory does
                not produce a JsonEnvOverrideExtra
        """
        if names is None:
            selected = self.describe()
        else:
            selected = []
            for name in names:
                info = self._extras.get(name)
                if info is None:
                    raise ExtraRegistrationError(name, "not registered")
                selected.append(info)

        for info in selected:
            instance = info.factory()
            if not isinstance(instance, JsonEnvOverrideExtra):
                raise ExtraRegistrationError(
                    info.name,
                    f"factory returned {type(instance).__name__}, not a JsonEnvOverrideExtra",
                )
            instance.apply(builder)
            logger.debug("Applied extra %s", info.name)

        return builder


default_registry = ExtrasRegistry()


def extra(
    name: str,
    description: str | None = None,
    registry: ExtrasRegistry | None = None,
) -> Callable[[ExtraT], ExtraT]:
    """Class decorator registering a JsonEnvOverrideExtra subclass."""

    def decorator(cls: ExtraT) -> ExtraT:
        if not (isinstance(cls, type) and issubclass(cls, JsonEnvOverrideExtra)):
            raise ExtraRegistrationError(name, "only JsonEnvOverrideExtra subclasses can be registered")
        (registry if registry is not None else default_registry).register(name, cls, description)
        return cls

    return decorator


def add_json_env_overrides_extras(
    builder: ConfigurationBuilder,
    registry: ExtrasRegistry | None = None,
    names: Iterable[str] | None = None,
) -> ConfigurationBuilder:
    """Apply registered extras (the default registry unless one is given)."""
    return (registry if registry is not None else default_registry).apply_all(builder, names)
