"""
Small building blocks shared by the step, command and program layers.

- Unset: the "not provided" sentinel. It lets a step tell "no default" apart from
  a default of None. It is falsy, a per-process singleton, and usable in unions
  (isinstance(x, str | Unset)).
- coalesce(value, default): replace Unset (and only Unset) with a default.
- rename("name"): decorator giving generated functions a stable name for tracebacks.
- mirror("field"): read-only property over "_field" handing out snapshots, so the
  state of a step or of the context cannot be changed from the outside.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """Type of the Unset sentinel (one instance per process, not subclassable)."""
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        return object.__new__(cls)

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __or__(self, other, /):
        return type(self) | other

    def __ror__(self, other, /):
        return other | type(self)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"


def coalesce(object, default=None, /):
    """Return object unless it is Unset, in which case return default."""
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of a generated function.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _snapshot(object):
    # only builtin containers are copied; any other object is handed out as is
    if type(object) in (dict, MappingProxyType):
        return {key: _snapshot(value) for key, value in object.items()}
    if type(object) in (list, tuple, set, frozenset):
        return type(object)(map(_snapshot, object))
    return object


def mirror(name, /):
    """
    Read-only property exposing self._<name>.

    Builtin containers are returned as fresh copies (mapping proxies as plain dicts).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _snapshot(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
