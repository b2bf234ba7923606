from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContainerLike(Protocol):
    """Anything that can be used as a (sub-)container or a delegate container."""

    def get(self, identifier: str) -> Any: ...

    def has(self, identifier: str) -> bool: ...


@runtime_checkable
class AutowireContainer(ContainerLike, Protocol):
    """Container that can instantiate classes, autowiring their dependencies."""

    def autowire(self, cls: type | str, *args: Any, **kwargs: Any) -> Any: ...


@runtime_checkable
class Autowire(Protocol):
    """Autowiring service; `__call__` must be an alias of `instantiate`."""

    def instantiate(self, cls: type | str, *args: Any, **kwargs: Any) -> Any: ...

    def __call__(self, cls: type | str, *args: Any, **kwargs: Any) -> Any: ...
