from __future__ import annotations

import copy
import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ._exceptions import NoSubContainerError, NotFoundError
from ._protocols import Autowire, ContainerLike
from ._typecheck import TypeAssertion


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping

    Factory = Callable[[ContainerLike], Any]
    Entries = Mapping[str, Factory] | Iterable[tuple[str, Factory]]
    TypeCheck = Callable[[object, str], None]


# Identifier of the autowiring service used by `Container.autowire`.
AUTOWIRE = Autowire.__name__


class Container:
    """Minimalist lazy DI container.

    - entries are factories, called with the delegate container on first `get`
    - every entry is a singleton within the container
    - dotted identifiers are resolved through sub-containers
    - `autowire` instantiates classes through the `AUTOWIRE` entry.

    Example:
      container = Container({
          AUTOWIRE: lambda c: ReflectionAutowire(c),
          "config": lambda c: Container({"db.dsn": lambda _: "sqlite://"}),
          "Database": lambda c: Database(c.get("config.db.dsn")),
      })

    """

    def __init__(
        self,
        entries: Entries = (),
        delegate: ContainerLike | None = None,
        *,
        type_check: TypeCheck | None = None,
    ) -> None:
        self._factories: Mapping[str, Factory] = MappingProxyType(dict(entries))
        self._instances: dict[str, Any] = {}
        self._delegate: ContainerLike = delegate if delegate is not None else self
        self._type_check = type_check if type_check is not None else TypeAssertion()
        self._lock = threading.RLock()

    def with_entries(self, entries: Entries) -> Container:
        """Get a copy with added or replaced entries.

        The copy starts without instances. If this container is its own delegate,
        the copy delegates to itself.
        """
        clone = copy.copy(self)
        clone._factories = MappingProxyType({**self._factories, **dict(entries)})
        clone._instances = {}
        clone._lock = threading.RLock()

        if self._delegate is self:
            clone._delegate = clone

        return clone

    def get(self, identifier: str) -> Any:
        """Get an entry, instantiating it on first use.

        Raises:
          NotFoundError: no entry or sub-container entry for the identifier
          NoSubContainerError: a prefix of the identifier is an entry that isn't a container
          EntryTypeError: the entry doesn't implement the type named by the identifier

        """
        _assert_identifier(identifier)

        with self._lock:
            if identifier in self._instances:
                return self._instances[identifier]

            if identifier not in self._factories:
                return self._get_sub(identifier)

            logger.debug("Instantiating container entry '%s'", identifier)
            instance = self._factories[identifier](self._delegate)
            self._type_check(instance, identifier)

            self._instances[identifier] = instance
            return instance

    def has(self, identifier: str) -> bool:
        """Check if the container can resolve an identifier, directly or via a sub-container."""
        _assert_identifier(identifier)

        return identifier in self._factories or self._has_sub(identifier)

    def autowire(self, cls: type | str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate a new object, autowiring its dependencies."""
        return self.get(AUTOWIRE).instantiate(cls, *args, **kwargs)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.has(identifier)

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} entries={list(self._factories)!r}>"

    def _get_sub(self, identifier: str) -> Any:
        subcontainer, container_id, sub_id = self._find_sub_container(identifier)

        if container_id is None:
            msg = f'Entry "{identifier}" is not defined.'
            raise NotFoundError(msg)

        if not isinstance(subcontainer, ContainerLike):
            msg = f'Entry "{container_id}" is not a container'
            raise NoSubContainerError(msg)

        logger.debug("Delegating '%s' to sub-container '%s'", sub_id, container_id)
        return subcontainer.get(sub_id)

    def _has_sub(self, identifier: str) -> bool:
        subcontainer, container_id, sub_id = self._find_sub_container(identifier)

        return container_id is not None and isinstance(subcontainer, ContainerLike) and subcontainer.has(sub_id)

    def _find_sub_container(self, identifier: str) -> tuple[Any, str | None, str | None]:
        """Find the sub-container with the longest registered prefix of the identifier.

        Returns (sub-container, container id, sub-identifier), all `None` when no prefix is registered.
        """
        parts = identifier.split(".")

        for cut in range(len(parts) - 1, 0, -1):
            container_id = ".".join(parts[:cut])

            if container_id in self._factories:
                return self.get(container_id), container_id, ".".join(parts[cut:])

        return None, None, None


def _assert_identifier(identifier: object) -> None:
    if not isinstance(identifier, str):
        msg = f"Container identifier must be a str, got {type(identifier).__name__}"
        raise TypeError(msg)
