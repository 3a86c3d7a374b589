import pytest

from focuskit.services.announcer import Announcer
from focuskit.services.service_locator import (
    ServiceAlreadyRegisteredError,
    ServiceKey,
    ServiceLocator,
    ServiceNotFoundError,
    services,
)


def setup_function(_):
    services.clear()


def test_register_and_get():
    services.register("settings", {"env": "test"})
    assert services.get("settings")["env"] == "test"


def test_double_register_raises():
    services.register("x", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        services.register("x", 2)
    services.register("x", 3, allow_override=True)
    assert services.get("x") == 3


def test_try_get_default_and_missing_key():
    assert services.try_get("missing", 123) == 123
    with pytest.raises(ServiceNotFoundError):
        services.get("missing")


def test_get_typed_checks_type(scheduler):
    announcer = Announcer(None, scheduler)
    services.register("announcer", announcer)
    assert services.get_typed("announcer", Announcer) is announcer
    services.register("wrong", "not an announcer")
    with pytest.raises(TypeError):
        services.get_typed("wrong", Announcer)


def test_unregister_and_list_keys():
    services.register("a", 1)
    services.register("b", 2)
    services.unregister("a")
    assert set(services.list_keys()) == {"b"}


def test_override_context_restores_previous():
    services.register("positioner", "real")
    with services.override_context(positioner="fake", extra=1):
        assert services.get("positioner") == "fake"
        assert services.get("extra") == 1
    assert services.get("positioner") == "real"
    assert services.try_get("extra") is None


def test_local_instance_isolated():
    local = ServiceLocator()
    local.register("foo", 1)
    assert services.try_get("foo") is None


def test_install_returns_replaced_values_and_records_origin():
    services.register(ServiceKey.ANNOUNCER, "old")
    replaced = services.install({ServiceKey.ANNOUNCER: "new", ServiceKey.POSITIONER: "pos"})
    assert replaced == {"announcer": "old"}
    assert services.get("announcer") == "new"
    assert services.origin(ServiceKey.POSITIONER) == "bootstrap"
    assert services.origin("missing") is None


def test_require_before_bootstrap_names_create_app(scheduler):
    with pytest.raises(ServiceNotFoundError, match="create_app"):
        services.require(ServiceKey.ANNOUNCER, Announcer)
    services.install({ServiceKey.ANNOUNCER: Announcer(None, scheduler)})
    assert isinstance(services.require(ServiceKey.ANNOUNCER, Announcer), Announcer)


def test_missing_lists_unregistered_standard_keys():
    assert set(services.missing()) == {k.value for k in ServiceKey}
    services.register(ServiceKey.SETTINGS, {})
    assert "settings" not in services.missing()
    assert services.missing(["settings", "extra"]) == ["extra"]
