"""Permission scope resolution: active tenant vs. explicit override."""
import pytest

from tenants import scope


def test_defaults_to_central_scope():
    assert scope.current_scope() is None
    assert scope.get_active_tenant() is None


def test_active_tenant_sets_scope(acme):
    with scope.active_tenant(acme):
        assert scope.current_scope() == "acme"
        assert scope.get_active_tenant() is acme
    assert scope.current_scope() is None


def test_active_tenant_wins_over_override(acme):
    scope.set_scope("globex")
    with scope.active_tenant(acme):
        assert scope.current_scope() == "acme"
    assert scope.current_scope() == "globex"


def test_set_scope_accepts_raw_ids():
    scope.set_scope("acme")
    assert scope.current_scope() == "acme"
    scope.set_scope(42)
    assert scope.current_scope() == 42


def test_set_scope_accepts_entities(globex):
    scope.set_scope(globex)
    assert scope.current_scope() == "globex"


def test_set_scope_rejects_objects_without_pk():
    with pytest.raises(TypeError):
        scope.set_scope(object())


def test_clear_scope_returns_to_central():
    scope.set_scope("acme")
    scope.clear_scope()
    assert scope.current_scope() is None


def test_scope_override_restores_previous_value(acme):
    scope.set_scope("globex")
    with scope.scope_override(acme) as value:
        assert value == "acme"
        assert scope.current_scope() == "acme"
    assert scope.current_scope() == "globex"


def test_scope_override_restores_on_error():
    with pytest.raises(RuntimeError):
        with scope.scope_override("acme"):
            raise RuntimeError("job failed")
    assert scope.current_scope() is None


def test_override_to_central_inside_override():
    with scope.scope_override("acme"):
        with scope.scope_override(None):
            assert scope.current_scope() is None
        assert scope.current_scope() == "acme"
