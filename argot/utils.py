"""
Argot utilities shared by the option, engine and parser layers.

Overview
- Unset: "not declared" marker, distinct from None (a default of None is
  rejected, an undeclared default is Unset).
- coalesce(value, default): Unset → default, anything else untouched.
- rename(): give generated accessors a readable __name__/__qualname__.
- mirror("attr"): read-only property handing out a copy of self._attr
  (the registry tables).
- StorageGuard / view("attr"): write-once records; option specs store their
  fields under '-attr' names during construction only.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """falsy singleton; repr "Unset"; cannot be subclassed."""

    def __or__(self, other, /):
        # str | Unset in annotations
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    swap Unset for a default.

    - coalesce(Unset, 1) -> 1
    - coalesce(None, 1)  -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    rename(callable, name) renames in place; rename(name) returns a decorator.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _copied(object):
    # lists, dicts and sets are copied all the way down; specs are shared
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_copied, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_copied, object.values())))
    elif isinstance(object, Set):
        return set(map(_copied, object))
    else:
        return object


def mirror(name, /):
    """property returning a fresh copy of self._<name>."""
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _copied(getattr(self, "_" + name))

    return property(getter)


class StorageGuard:
    """
    base for write-once records.

    attributes named '-field' are hidden from normal attribute access and can
    only be assigned inside the construction block:

        with super().__new__(cls) as self:
            setattr(self, "-names", names)
    """
    __slots__ = ("__building",)

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if isinstance(name, str) and name.startswith("-") and not self.__building:
            raise AttributeError("internal storage is read-only")
        return object.__setattr__(self, name, value)


def view(name):
    """
    property over the '-<name>' field: sequences come back as tuples,
    mappings as MappingProxyType, sets as frozensets.
    """

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "view",
    "UnsetType",
    "StorageGuard",
    "Unset",
)
