import pytest

from omzetter import Registry, bootstrap, reset_registry
from omzetter.core.registry import CONFIG_ENV_VAR


@pytest.fixture
def registry():
    """A registry with only the pass-through creator."""
    return Registry(name="test")


@pytest.fixture
def empty_registry():
    """A registry with nothing registered at all."""
    return Registry(pass_through=False, name="empty")


@pytest.fixture
def catalog_registry():
    """A registry loaded with the built-in converter catalog."""
    return bootstrap(Registry(name="catalog"), include_entry_points=False)


@pytest.fixture
def default_registry(monkeypatch):
    """Gives each test a freshly built default registry."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_registry()
    yield
    reset_registry()
