"""Declaration front-ends: class decorators and ``Property`` markers.

Both write into the process-wide registry, so they can be mixed and
applied in any order::

    @unique("email")
    @model("user")
    class User(Resource):
        email = Property(str, not_null=True)
        age = Property(ColumnType.NUMBER, default=18)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .columns import ColumnType
from .registry import declare_field, declare_model_name

if TYPE_CHECKING:
    from collections.abc import Callable

C = TypeVar("C", bound=type)


def _flags(unique: bool, not_null: bool, primary: bool) -> dict[str, bool]:
    flags = {"unique": unique, "not_null": not_null, "primary": primary}
    return {key: True for key, on in flags.items() if on}


class Property:
    """Class-body marker declaring one field; collected when the class is created."""

    __slots__ = ("type", "default", "unique", "not_null", "primary")

    def __init__(
        self,
        type: ColumnType | type | str = ColumnType.TEXT,  # noqa: A002
        default: Any = None,
        *,
        unique: bool = False,
        not_null: bool = False,
        primary: bool = False,
    ) -> None:
        self.type = type
        self.default = default
        self.unique = unique
        self.not_null = not_null
        self.primary = primary

    def patch(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "default_value": self.default,
            **_flags(self.unique, self.not_null, self.primary),
        }

    def __repr__(self) -> str:
        return f"Property({self.type!r}, default={self.default!r})"


def collect_properties(resource: type) -> list[str]:
    """
    Declare every ``Property`` found in the body of ``resource``.

    The markers are removed from the class so instances never see them.
    Returns the collected names in class-body order.
    """
    names = [
        name for name, value in vars(resource).items() if isinstance(value, Property)
    ]
    for name in names:
        marker: Property = vars(resource)[name]
        declare_field(resource, name, **marker.patch())
        delattr(resource, name)
    return names


def model(name: str) -> Callable[[C], C]:
    """Set the storage name of the decorated resource."""

    def decorator(resource: C) -> C:
        declare_model_name(resource, name)
        return resource

    return decorator


def declare(
    name: str,
    type: ColumnType | type | str = ColumnType.TEXT,  # noqa: A002
    default: Any = None,
    *,
    unique: bool = False,
    not_null: bool = False,
    primary: bool = False,
) -> Callable[[C], C]:
    """Declare field ``name`` with its type and default value."""
    patch = {
        "type": type,
        "default_value": default,
        **_flags(unique, not_null, primary),
    }

    def decorator(resource: C) -> C:
        declare_field(resource, name, **patch)
        return resource

    return decorator


def _flag_decorator(flag: str, names: tuple[str, ...]) -> Callable[[C], C]:
    def decorator(resource: C) -> C:
        for name in names:
            declare_field(resource, name, **{flag: True})
        return resource

    return decorator


def unique(*names: str) -> Callable[[C], C]:
    return _flag_decorator("unique", names)


def not_null(*names: str) -> Callable[[C], C]:
    return _flag_decorator("not_null", names)


def primary(name: str) -> Callable[[C], C]:
    return _flag_decorator("primary", (name,))
