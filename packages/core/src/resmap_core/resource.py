"""Resource — base class of every storage-backed entity type."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from .domain.declarations import collect_properties
from .domain.registry import declare_model_name
from .domain.registry import describe as describe_resource
from .primitives.exceptions import DriverNotConfiguredError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .domain.columns import ResourceDescription
    from .ports.driver import ResourceDriver
    from .ports.query import IQuery

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Resource")


class dualmethod:  # noqa: N801
    """Method with one implementation for class access and one for instances."""

    def __init__(self, instance_impl: Callable[..., Any]) -> None:
        self._instance_impl = instance_impl
        self._class_impl: Callable[..., Any] | None = None
        self.__doc__ = instance_impl.__doc__

    def classmethod(self, class_impl: Callable[..., Any]) -> dualmethod:
        self._class_impl = class_impl
        return self

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            if self._class_impl is None:
                raise AttributeError("no class-level implementation")
            return self._class_impl.__get__(owner, type(owner))
        return self._instance_impl.__get__(obj, owner)


class Resource:
    """
    Plain property bag bound to a declared resource description.

    Subclasses declare their storage name and fields either with class
    keyword arguments and ``Property`` markers::

        class User(Resource, model="user"):
            id = Property(ColumnType.NUMBER, primary=True)
            name = Property(str)

    or with the decorators from :mod:`resmap_core.domain.declarations`.

    Every persistence operation delegates to a driver: the one passed as
    ``driver=`` or, failing that, the process-wide one installed with
    :meth:`use`. The resource itself adds no logic to what the driver
    returns or raises.
    """

    _driver: ClassVar[ResourceDriver | None] = None

    def __init_subclass__(cls, model: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if model is not None:
            declare_model_name(cls, model)
        collect_properties(cls)

    def __init__(self, props: Mapping[str, Any] | None = None, /, **kwargs: Any) -> None:
        if props:
            for key, value in props.items():
                setattr(self, key, value)
        for key, value in kwargs.items():
            setattr(self, key, value)

    # -- driver ----------------------------------------------------------------

    @staticmethod
    def use(driver: ResourceDriver | None) -> None:
        """Install ``driver`` for every resource; ``None`` uninstalls it."""
        Resource._driver = driver
        logger.debug("Installed resource driver %s", type(driver).__name__)

    @staticmethod
    def get_driver(driver: ResourceDriver | None = None) -> ResourceDriver:
        """Return ``driver`` or the installed one; raise if there is neither."""
        active = driver if driver is not None else Resource._driver
        if active is None:
            raise DriverNotConfiguredError()
        return active

    # -- class-level operations ----------------------------------------------

    @classmethod
    def describe(cls) -> ResourceDescription:
        return describe_resource(cls)

    @classmethod
    async def create(cls, *, driver: ResourceDriver | None = None) -> None:
        """Provision storage for this resource."""
        return await Resource.get_driver(driver).create(cls)

    @classmethod
    async def find_all(
        cls: type[R],
        query: IQuery | None = None,
        *,
        driver: ResourceDriver | None = None,
    ) -> list[R]:
        """Return every stored instance matching ``query`` (all of them if ``None``)."""
        return await Resource.get_driver(driver).find_all(cls, query)

    # -- instance operations -------------------------------------------------

    async def save(self, *, driver: ResourceDriver | None = None) -> Any:
        """Insert or replace this instance; returns the stored primary key."""
        return await Resource.get_driver(driver).save(self)

    async def remove(self, *, driver: ResourceDriver | None = None) -> None:
        return await Resource.get_driver(driver).remove(self)

    @dualmethod
    async def find(self: R, *, driver: ResourceDriver | None = None) -> R:
        """
        On an instance: reload it by primary key.
        On the class: ``await User.find(query)``, same as :meth:`find_all`.
        """
        return await Resource.get_driver(driver).find(self)

    @find.classmethod
    async def find(  # noqa: F811
        cls: type[R],
        query: IQuery | None = None,
        *,
        driver: ResourceDriver | None = None,
    ) -> list[R]:
        return await Resource.get_driver(driver).find_all(cls, query)

    # -- data ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return dict(vars(self))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        props = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({props})"
