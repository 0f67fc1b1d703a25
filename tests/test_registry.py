import pytest

from conftest import FakeHandle
from pairing_relay.core.registry import ConnectionRegistry
from pairing_relay.utils.error_codes import ErrorCodes, RelayError


def test_register_and_lookup():
    registry = ConnectionRegistry()
    handle = FakeHandle()
    registry.register("a", handle)

    record = registry.lookup("a")
    assert record.id == "a"
    assert record.handle is handle
    assert record.partner_id is None
    assert registry.lookup("missing") is None
    assert "a" in registry
    assert len(registry) == 1


def test_register_duplicate_id_raises():
    registry = ConnectionRegistry()
    registry.register("a", FakeHandle())
    with pytest.raises(RelayError) as exc:
        registry.register("a", FakeHandle())
    assert exc.value.code == ErrorCodes.ERR_DUPLICATE_ID


def test_is_open_follows_handle_state():
    registry = ConnectionRegistry()
    handle = FakeHandle()
    registry.register("a", handle)
    assert registry.is_open("a")
    handle.open = False
    assert not registry.is_open("a")
    assert not registry.is_open("nobody")


def test_remove_returns_record_once():
    registry = ConnectionRegistry()
    registry.register("a", FakeHandle())
    assert registry.remove("a").id == "a"
    assert registry.remove("a") is None
    assert registry.ids() == []


def test_set_partner_last_write_wins():
    registry = ConnectionRegistry()
    registry.register("a", FakeHandle())
    assert registry.set_partner("a", "b")
    assert registry.set_partner("a", "c")
    assert registry.partner_of("a") == "c"
    assert registry.set_partner("a", None)
    assert registry.partner_of("a") is None
    assert not registry.set_partner("ghost", "a")
