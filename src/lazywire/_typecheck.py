from __future__ import annotations

import builtins
import inspect
import typing
from typing import TYPE_CHECKING, Protocol

from ._exceptions import EntryTypeError
from ._protocols import Autowire, AutowireContainer, ContainerLike


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


_OWN_TYPES: dict[str, type] = {t.__name__: t for t in (Autowire, AutowireContainer, ContainerLike)}


class TypeAssertion:
    """Check that an entry is an instance of the type named by its identifier.

    Only identifiers that start with an upper-case letter and contain no `.` are
    considered type names. A name is known if it was passed via `types`, is one of
    the lazywire protocols, or is a builtin type. Unknown names are not checked.

    Subclass and override `lookup` to plug in another type registry.
    """

    def __init__(self, types: Iterable[type] | Mapping[str, type] = ()) -> None:
        if hasattr(types, "items"):
            self._types = dict(types.items())  # type: ignore[union-attr]
        else:
            self._types = {t.__name__: t for t in types}  # type: ignore[union-attr]

    def __call__(self, instance: object, identifier: str) -> None:
        if not self.applies(identifier):
            return

        expected = self.lookup(identifier)
        if expected is None or self.matches(instance, expected):
            return

        kind = type(instance)
        msg = f"Entry is a {kind.__module__}.{kind.__qualname__}, which does not implement {identifier}"
        raise EntryTypeError(msg)

    def applies(self, identifier: str) -> bool:
        return identifier[:1].isupper() and "." not in identifier

    def lookup(self, name: str) -> type | None:
        if name in self._types:
            return self._types[name]

        if name in _OWN_TYPES:
            return _OWN_TYPES[name]

        candidate = getattr(builtins, name, None)
        return candidate if inspect.isclass(candidate) else None

    def matches(self, instance: object, expected: type) -> bool:
        if _is_protocol(expected) and not getattr(expected, "_is_runtime_protocol", False):
            # plain protocols can't be checked with isinstance
            return True

        return isinstance(instance, expected)


if hasattr(typing, "is_protocol"):

    def _is_protocol(tp: type) -> bool:
        return typing.is_protocol(tp)

else:

    def _is_protocol(tp: type) -> bool:
        return issubclass(tp, Protocol) and getattr(tp, "_is_protocol", False)  # type: ignore[arg-type]
