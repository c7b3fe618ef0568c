"""Unit tests for capability descriptors."""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

import pytest

from component_broker import (
    Capability,
    CapabilityKind,
    InvalidKeyError,
    abstract,
    concrete,
    describe,
    interface,
)
from component_broker.broker.capability import implements
from tests.fakes.markers import IMarker, Marker
from tests.fakes.repositories import EmployeeRepository, IEmployeeRepository
from tests.fakes.services import PeopleService


class Clock(Protocol):
    def now(self) -> float:
        ...


@runtime_checkable
class Greeter(Protocol):
    def greet(self) -> str:
        ...


class SystemClock:
    def now(self) -> float:
        return 0.0


@pytest.mark.unit
class TestDescribe:
    def test_key_is_qualified_name(self):
        cap = describe(IEmployeeRepository)
        assert cap.key == "tests.fakes.repositories.IEmployeeRepository"
        assert cap.name == "IEmployeeRepository"
        assert cap.type is IEmployeeRepository

    def test_pure_abc_is_interface(self):
        assert describe(IEmployeeRepository).kind is CapabilityKind.INTERFACE

    def test_abc_with_behaviour_is_abstract(self):
        assert describe(PeopleService).kind is CapabilityKind.ABSTRACT

    def test_instantiable_class_is_concrete(self):
        assert describe(EmployeeRepository).kind is CapabilityKind.CONCRETE

    def test_protocol_is_interface(self):
        assert describe(Clock).kind is CapabilityKind.INTERFACE

    def test_abstract_property_counts_as_abstract_member(self):
        class IHasName(ABC):
            @property
            @abstractmethod
            def name(self) -> str:
                ...

        assert describe(IHasName).kind is CapabilityKind.INTERFACE

    def test_empty_marker_abc_is_interface(self):
        assert describe(IMarker).kind is CapabilityKind.INTERFACE

    def test_empty_subclass_of_marker_is_concrete(self):
        assert describe(Marker).kind is CapabilityKind.CONCRETE

    def test_capability_passes_through(self):
        cap = Capability.named("reports")
        assert describe(cap) is cap

    def test_string_becomes_named_capability(self):
        cap = describe("app.reports.IReportStore")
        assert cap.key == "app.reports.IReportStore"
        assert cap.name == "IReportStore"
        assert cap.kind is CapabilityKind.INTERFACE
        assert cap.type is None

    def test_none_is_invalid(self):
        with pytest.raises(InvalidKeyError):
            describe(None)

    def test_instance_is_rejected(self):
        with pytest.raises(TypeError):
            describe(EmployeeRepository())

    def test_named_requires_key(self):
        with pytest.raises(InvalidKeyError):
            Capability.named("")


@pytest.mark.unit
class TestExplicitTags:
    def test_interface_tag_on_plain_class(self):
        @interface
        class ITagged:
            pass

        assert describe(ITagged).kind is CapabilityKind.INTERFACE

    def test_abstract_tag_wins_over_inference(self):
        @abstract
        class IRepo(ABC):
            @abstractmethod
            def get(self):
                ...

        assert describe(IRepo).kind is CapabilityKind.ABSTRACT

    def test_concrete_tag(self):
        @concrete
        class Thing:
            pass

        assert describe(Thing).kind is CapabilityKind.CONCRETE

    def test_tag_is_not_inherited(self):
        @interface
        class IBase:
            pass

        class Impl(IBase):
            pass

        assert describe(Impl).kind is CapabilityKind.CONCRETE


@pytest.mark.unit
class TestImplements:
    def test_abc_uses_isinstance(self):
        cap = describe(IEmployeeRepository)
        assert implements(EmployeeRepository(), cap)
        assert not implements(object(), cap)

    def test_structural_protocol(self):
        cap = describe(Clock)
        assert implements(SystemClock(), cap)
        assert not implements(object(), cap)

    def test_runtime_checkable_protocol(self):
        class Hello:
            def greet(self) -> str:
                return "hi"

        cap = describe(Greeter)
        assert implements(Hello(), cap)
        assert not implements(SystemClock(), cap)

    def test_named_capability_accepts_any_object(self):
        assert implements(object(), Capability.named("anything"))
        assert not implements(None, Capability.named("anything"))
