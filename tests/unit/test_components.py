"""Unit tests for the scoped instance cache as seen through the broker."""

import pytest

from component_broker import ComponentNotFoundError, InvalidComponentError, InvalidKeyError, describe
from tests.fakes.repositories import EmployeeRepository, IEmployeeRepository

EMPLOYEE_REPO_KEY = describe(IEmployeeRepository).key


@pytest.mark.unit
class TestRegisterComponent:
    def test_register_by_type(self, broker):
        repo = EmployeeRepository()
        broker.register_component(IEmployeeRepository, repo)
        assert broker.retrieve(IEmployeeRepository) is repo

    def test_register_by_key(self, broker):
        repo = EmployeeRepository()
        broker.register_component(EMPLOYEE_REPO_KEY, repo)
        assert broker.retrieve(IEmployeeRepository) is repo

    def test_register_none_component(self, broker):
        with pytest.raises(InvalidComponentError) as exc:
            broker.register_component(EMPLOYEE_REPO_KEY, None)
        assert exc.value.param == "component"

    @pytest.mark.parametrize("key", [None, ""])
    def test_register_with_missing_key(self, broker, key):
        with pytest.raises(InvalidKeyError) as exc:
            broker.register_component(key, object())
        assert exc.value.param == "key"

    def test_second_registration_replaces_first(self, broker):
        first, second = EmployeeRepository(), EmployeeRepository()
        broker.register_component(IEmployeeRepository, first)
        broker.register_component(IEmployeeRepository, second)
        assert broker.retrieve_by_key(EMPLOYEE_REPO_KEY) is second

    def test_named_instances_of_one_type_coexist(self, broker):
        primary, replica = EmployeeRepository(), EmployeeRepository()
        broker.register_component("repo.primary", primary)
        broker.register_component("repo.replica", replica)
        assert broker.retrieve_by_key("repo.primary") is primary
        assert broker.retrieve_by_key("repo.replica") is replica


@pytest.mark.unit
class TestHasComponent:
    def test_exists(self, broker):
        broker.register_component(IEmployeeRepository, EmployeeRepository())
        assert broker.has_component(IEmployeeRepository)
        assert broker.has_component(EMPLOYEE_REPO_KEY)

    def test_does_not_exist(self, broker):
        assert not broker.has_component(IEmployeeRepository)
        assert not broker.has_component(EMPLOYEE_REPO_KEY)

    @pytest.mark.parametrize("key", [None, ""])
    def test_missing_key(self, broker, key):
        with pytest.raises(InvalidKeyError):
            broker.has_component(key)


@pytest.mark.unit
class TestUnregisterComponent:
    def test_unregister(self, broker):
        broker.register_component("now", 42)
        broker.unregister_component("now")
        assert not broker.has_component("now")

    def test_unregister_absent_is_noop(self, broker):
        broker.unregister_component("never-registered")

    @pytest.mark.parametrize("key", [None, ""])
    def test_missing_key(self, broker, key):
        with pytest.raises(InvalidKeyError):
            broker.unregister_component(key)

    def test_unregister_all(self, broker):
        broker.register_component("a", 1)
        broker.register_component("b", 2)
        broker.unregister_all_components()
        assert not broker.has_component("a")
        assert not broker.has_component("b")


@pytest.mark.unit
class TestRetrieveByKey:
    def test_exists(self, broker):
        broker.register_component("repo", EmployeeRepository())
        assert isinstance(broker.retrieve_by_key("repo"), EmployeeRepository)

    def test_as_type(self, broker):
        broker.register_component("repo", EmployeeRepository())
        assert isinstance(broker.retrieve_by_key("repo", IEmployeeRepository), EmployeeRepository)

    def test_as_wrong_type(self, broker):
        broker.register_component("repo", "not a repository")
        with pytest.raises(TypeError):
            broker.retrieve_by_key("repo", IEmployeeRepository)

    def test_does_not_exist(self, broker):
        with pytest.raises(ComponentNotFoundError) as exc:
            broker.retrieve_by_key(EMPLOYEE_REPO_KEY)
        assert exc.value.key == EMPLOYEE_REPO_KEY

    def test_never_constructs(self, broker):
        # a resolvable capability key still is not built by a key lookup
        with pytest.raises(ComponentNotFoundError):
            broker.retrieve_by_key(EMPLOYEE_REPO_KEY, IEmployeeRepository)
        assert not broker.has_component(EMPLOYEE_REPO_KEY)

    def test_plain_string_goes_through_key_lookup(self, broker):
        with pytest.raises(ComponentNotFoundError):
            broker.retrieve("now")

    @pytest.mark.parametrize("key", [None, ""])
    def test_missing_key(self, broker, key):
        with pytest.raises(InvalidKeyError) as exc:
            broker.retrieve_by_key(key)
        assert exc.value.param == "key"
