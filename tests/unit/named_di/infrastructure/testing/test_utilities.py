"""Unit tests for testing utilities."""

import pytest

from named_di.application.container import Container
from named_di.domain import InvalidRegistrationError, Kind, Lifecycle, UnknownDependencyError
from named_di.infrastructure.testing.utilities import MockScope, TestContainer, create_mock_container


class EmailService:
    def send(self, to):
        return f"sent to {to}"


class UserService:
    def __init__(self, email):
        self.email = email


@pytest.fixture
def production_container():
    container = Container()
    container.service("emailService", EmailService)
    container.service("userService", UserService, ["emailService"])
    return container


class TestTestContainer:
    """Test cases for TestContainer."""

    def test_inherits_parent_registrations(self, production_container):
        test_container = TestContainer(production_container)

        service = test_container.get("userService")

        assert isinstance(service.email, EmailService)

    def test_without_parent_is_empty(self):
        with pytest.raises(UnknownDependencyError):
            TestContainer().get("userService")

    def test_mock_constant_replaces_nested_dependency(self, production_container):
        """Test that a mock wins even below an inherited APPLICATION service."""
        test_container = TestContainer(production_container)
        mock_email = object()

        test_container.mock_constant("emailService", mock_email)

        assert test_container.get("userService").email is mock_email

    def test_mocks_do_not_leak_into_parent(self, production_container):
        test_container = TestContainer(production_container)
        test_container.mock_constant("emailService", object())
        test_container.get("userService")

        assert isinstance(production_container.get("userService").email, EmailService)

    def test_explicit_overrides_win_over_mocks(self, production_container):
        test_container = TestContainer(production_container)
        test_container.mock_constant("emailService", "mock")

        service = test_container.get("userService", {"emailService": "explicit"})

        assert service.email == "explicit"

    def test_inject_uses_mocks(self, production_container):
        test_container = TestContainer(production_container)
        test_container.mock_constant("emailService", "mock")

        assert test_container.inject({"mail": "emailService"}) == {"mail": "mock"}

    def test_override_registration_is_local(self, production_container):
        test_container = TestContainer(production_container)

        test_container.override_registration("clock", Kind.FACTORY, lambda: 42, lifecycle=Lifecycle.NONE)

        assert test_container.get("clock") == 42
        assert not production_container.has("clock")

    def test_override_registration_validates(self):
        with pytest.raises(InvalidRegistrationError):
            TestContainer().override_registration("clock", "bogus", lambda: 42)

    def test_reset_overrides(self, production_container):
        test_container = TestContainer(production_container)
        test_container.mock_constant("emailService", "mock")
        test_container.override_registration("clock", Kind.CONSTANT, 1)

        test_container.reset_overrides()

        assert isinstance(test_container.get("userService").email, EmailService)
        assert not test_container.has("clock")

    def test_context_manager_cleans_up(self, production_container):
        with TestContainer(production_container) as test_container:
            test_container.mock_constant("emailService", "mock")
            assert test_container.get("userService").email == "mock"

        assert isinstance(test_container.get("userService").email, EmailService)

    def test_not_collected_by_pytest(self):
        assert TestContainer.__test__ is False


class TestCreateMockContainer:
    """Test cases for create_mock_container."""

    def test_creates_container_with_mocks(self):
        container = create_mock_container(("database", "db"), ("cache", "cache"))

        assert container.get("database") == "db"
        assert container.get("cache") == "cache"

    def test_with_parent(self, production_container):
        container = create_mock_container(("emailService", "mock"), parent=production_container)

        assert container.get("userService").email == "mock"


class TestMockScope:
    """Test cases for MockScope."""

    def test_spawns_inheriting_child(self, production_container):
        with MockScope(production_container) as child:
            assert child.parent is production_container
            assert isinstance(child.get("emailService"), EmailService)

    def test_isolated_scope(self, production_container):
        with MockScope(production_container, inherit=False) as child:
            assert child.parent is None
            assert not child.has("emailService")

    def test_child_state_dropped_on_exit(self, production_container):
        with MockScope(production_container) as child:
            child.constant("requestId", "abc")
            child.factory("context", object, lifecycle=Lifecycle.CLASS)
            child.get("context")

        assert not child.has("requestId")
        assert len(child.cache) == 0

    def test_exit_does_not_suppress_exceptions(self, production_container):
        with pytest.raises(ValueError):
            with MockScope(production_container):
                raise ValueError("test failure")
