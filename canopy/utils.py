"""
Canopy utilities (small helpers shared by the model and the renderers)

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “value not provided”, distinct from None and "".
  • Falsey, printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; every other value (None, 0, "") is kept.

- rename(callable, name) / @rename("name")
  • Give generated callables a stable __name__/__qualname__.

- mirror("attr")
  • Read-only property exposing the private backing field self._attr; containers
    are copied on access so callers cannot mutate a node through its public API.

Quick examples
    >>> coalesce(Unset, 25)
    25
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for “not provided”.

    Used for parameters where None or an empty string is a meaningful value
    (an empty footer, an empty group) and the API still has to tell apart
    “the caller said nothing” from “the caller said nothing on purpose”.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
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
    Resolve the Unset sentinel to a concrete default.

    Returns object unless it is Unset, in which case default is returned.
    Falsey values such as None, 0 or "" are preserved as-is.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
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


def _immortalize(object):
    """
    Copy container values one level at a time, recursing into nested containers.

    Nodes found inside the containers are returned as-is: a copied list of
    children still holds the very same child objects, so identity checks used
    by the renderers (last sibling, hidden help option) keep working.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Container values are returned as fresh copies (see _immortalize).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()
"""
The single “not provided” marker. Materialize it with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
