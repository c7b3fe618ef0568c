from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T_co = TypeVar("T_co", covariant=True)


class ComponentFactory(ABC, Generic[T_co]):
    """
    Produces instances of one capability.

    Register a factory when building the component needs more than a plain
    constructor call. Constructor arguments passed at resolution time go to
    the factory's own __init__; create() takes none.

    Usage:
        class UserServiceFactory(ComponentFactory[IUserService]):
            def __init__(self, repo):
                self.repo = repo

            def create(self) -> IUserService:
                return UserService(self.repo)

        broker.register_factory(IUserService, UserServiceFactory)
    """

    @abstractmethod
    def create(self) -> T_co:
        ...
