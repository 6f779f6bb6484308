"""
Introspection plumbing shared by steps, commands and the context store.

IntrospectableType
- __typename__: hyphenated lower-case class name ("CommandMetadata" ->
  "command-metadata"), used in error messages.
- every name listed in __introspectable__ becomes a read-only property over the
  private "_<name>" field (see utils.mirror).
- __repr__ / __rich_repr__ list the fields of __displayable__ (all introspectable
  fields when unset), e.g. "task(key='build', label='Building', ...)".
"""
import re

from .utils import Unset, coalesce, mirror


def _fields(self):
    cls = type(self)
    for name in coalesce(cls.__displayable__, cls.__introspectable__):
        yield name, getattr(self, name)


def _repr(self):
    return "%s(%s)" % (type(self).__typename__, ", ".join("%s=%r" % field for field in _fields(self)))


class IntrospectableType(type):
    """
    Metaclass for read-only records.

    Class attributes
    - __introspectable__: public field names, each backed by "_<name>".
    - __displayable__: optional subset shown by the representations.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        namespace = dict(namespace, __typename__=re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower())
        for field in namespace.get("__introspectable__", ()):
            namespace[field] = mirror(field)
        namespace.setdefault("__repr__", _repr)
        namespace.setdefault("__rich_repr__", _fields)
        return super().__new__(cls, name, bases, namespace, **options)


__all__ = ("IntrospectableType",)
