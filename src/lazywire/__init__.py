"""Lazy dependency injection container.

This package provides a minimalist dependency injection container for Python,
mapping string identifiers to factories that are instantiated on first use,
with delegation to sub-containers through dotted identifiers and autowiring of
constructor dependencies.

Exports:
- `Container`: Lazy container of singleton entries, with sub-container delegation.
- `ReflectionAutowire`: Instantiates classes, taking constructor dependencies
  from a container based on type hints and docstring annotations.
- `Inject`: `Annotated` marker naming the container identifier of a parameter.
- `TypeAssertion`: Default policy checking entries against the type named by
  their identifier.
- `AUTOWIRE`: Identifier of the autowiring service used by `Container.autowire`.
"""

from ._autowire import Dependency, ReflectionAutowire
from ._container import AUTOWIRE, Container
from ._exceptions import (
    AutowireError,
    ContainerError,
    EntryTypeError,
    NoSubContainerError,
    NotFoundError,
    ReflectionError,
)
from ._metadata import Inject, InspectMetadataProvider, MetadataProvider, ParameterMetadata, TypeMetadata
from ._protocols import Autowire, AutowireContainer, ContainerLike
from ._typecheck import TypeAssertion


__all__ = [
    "AUTOWIRE",
    "Autowire",
    "AutowireContainer",
    "AutowireError",
    "Container",
    "ContainerError",
    "ContainerLike",
    "Dependency",
    "EntryTypeError",
    "Inject",
    "InspectMetadataProvider",
    "MetadataProvider",
    "NoSubContainerError",
    "NotFoundError",
    "ParameterMetadata",
    "ReflectionAutowire",
    "ReflectionError",
    "TypeAssertion",
    "TypeMetadata",
]
