"""Tests for the extras registry"""

import pytest

from json_env_overrides import ConfigurationBuilder, ExtraRegistrationError
from json_env_overrides.extras import (
    JsonEnvOverrideExtra,
    add_json_env_overrides_extras,
    default_registry,
    extra,
)


class DummyTestExtra(JsonEnvOverrideExtra):
    """Adds a simple config value for testing."""

    def apply(self, builder):
        builder.add_in_memory_collection({"Extras:dummy": "from-extra"})


class SecondExtra(JsonEnvOverrideExtra):
    def apply(self, builder):
        builder.add_in_memory_collection({"Extras:dummy": "from-second"})


class TestExtrasRegistry:
    """Test registration, lookup and application of extras"""

    def test_register_and_lookup(self, registry):
        info = registry.register("DummyExtraForTests", DummyTestExtra, "Adds a simple config value")
        assert registry.has("DummyExtraForTests")
        assert registry.get("DummyExtraForTests") is info
        assert registry.get("missing") is None
        assert registry.names() == ["DummyExtraForTests"]
        assert registry.describe()[0].description == "Adds a simple config value"
        assert registry.size == 1

    def test_duplicate_name_is_rejected(self, registry):
        registry.register("dummy", DummyTestExtra)
        with pytest.raises(ExtraRegistrationError, match="already registered"):
            registry.register("dummy", SecondExtra)

    def test_blank_name_is_rejected(self, registry):
        with pytest.raises(ExtraRegistrationError):
            registry.register("  ", DummyTestExtra)

    def test_non_callable_factory_is_rejected(self, registry):
        with pytest.raises(ExtraRegistrationError, match="not callable"):
            registry.register("dummy", "not a factory")

    def test_unregister(self, registry):
        registry.register("dummy", DummyTestExtra)
        registry.unregister("dummy")
        registry.unregister("never-registered")
        assert not registry.has("dummy")

    def test_apply_all_discovers_and_applies(self, registry):
        registry.register("DummyExtraForTests", DummyTestExtra)
        builder = ConfigurationBuilder()

        assert add_json_env_overrides_extras(builder, registry) is builder
        assert builder.build()["Extras:dummy"] == "from-extra"

    def test_apply_all_uses_registration_order(self, registry):
        registry.register("first", DummyTestExtra)
        registry.register("second", SecondExtra)
        configuration = registry.apply_all(ConfigurationBuilder()).build()
        assert configuration["Extras:dummy"] == "from-second"

    def test_apply_selected_names_in_given_order(self, registry):
        registry.register("first", DummyTestExtra)
        registry.register("second", SecondExtra)
        configuration = registry.apply_all(ConfigurationBuilder(), names=["second", "first"]).build()
        assert configuration["Extras:dummy"] == "from-extra"

    def test_unknown_name_is_rejected(self, registry):
        with pytest.raises(ExtraRegistrationError, match="not registered"):
            registry.apply_all(ConfigurationBuilder(), names=["missing"])

    def test_factory_must_return_an_extra(self, registry):
        registry.register("bad", lambda: object())
        with pytest.raises(ExtraRegistrationError, match="factory returned object"):
            registry.apply_all(ConfigurationBuilder())

    def test_extra_errors_propagate(self, registry):
        class FailingExtra(JsonEnvOverrideExtra):
            def apply(self, builder):
                raise RuntimeError("boom")

        registry.register("failing", FailingExtra)
        with pytest.raises(RuntimeError, match="boom"):
            registry.apply_all(ConfigurationBuilder())

    def test_empty_registry_leaves_builder_unchanged(self, registry):
        builder = ConfigurationBuilder()
        registry.apply_all(builder)
        assert builder.sources == []


class TestExtraDecorator:
    """Test the @extra class decorator"""

    def test_decorator_registers_class(self, registry):
        @extra("decorated", "Decorated extra", registry=registry)
        class DecoratedExtra(DummyTestExtra):
            pass

        assert registry.get("decorated").factory is DecoratedExtra
        assert registry.get("decorated").description == "Decorated extra"

    def test_decorator_rejects_non_extras(self, registry):
        with pytest.raises(ExtraRegistrationError):

            @extra("plain", registry=registry)
            class Plain:
                pass

    def test_default_registry(self):
        @extra("test-default-registry-extra")
        class DefaultExtra(DummyTestExtra):
            pass

        try:
            assert default_registry.has("test-default-registry-extra")
            builder = add_json_env_overrides_extras(
                ConfigurationBuilder(),
                names=["test-default-registry-extra"],
            )
            assert builder.build()["Extras:dummy"] == "from-extra"
        finally:
            default_registry.unregister("test-default-registry-extra")
