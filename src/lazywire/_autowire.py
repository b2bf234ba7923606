from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._annotations import extract_param_annotations
from ._exceptions import AutowireError, ReflectionError
from ._metadata import InspectMetadataProvider


if TYPE_CHECKING:
    from collections.abc import Collection

    from ._metadata import MetadataProvider, ParameterMetadata, TypeMetadata
    from ._protocols import ContainerLike


logger = logging.getLogger(__name__)

# Optional dependency that is missing; the parameter default applies.
_ABSENT = object()


@dataclass(frozen=True)
class Dependency:
    key: str
    optional: bool = False


class ReflectionAutowire:
    """Autowiring using type hints and docstring annotations.

    Example:
      class Palette:
          def __init__(self, color: ColorInterface, hue: int):
              '''
              :param ColorInterface color:
              :param int hue: "config.hue"
              '''

      autowire = ReflectionAutowire(container)
      palette = autowire.instantiate(Palette)

    Resolution precedence per constructor parameter:
    1. quoted identifier in the docstring `:param` tag at the parameter's position
    2. `Inject` marker in an `Annotated` type hint
    3. name of the declared type.
    """

    def __init__(self, container: ContainerLike, metadata: MetadataProvider | None = None) -> None:
        self._container = container
        self._metadata = metadata if metadata is not None else InspectMetadataProvider()

    def instantiate(self, cls: type | str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate a new object, automatically injecting dependencies.

        Positional `args` are passed as the first constructor arguments and
        `kwargs` by name. Only the remaining parameters are taken from the container.
        """
        meta = self._reflect(cls)
        wanted = self._determine_dependencies(meta, len(args), kwargs.keys())

        logger.debug(
            "Autowiring %s with dependencies %s",
            meta.cls.__qualname__,
            [dep.key for _, dep in wanted],
        )

        resolved = {param.name: self._get_dependency(param, dep) for param, dep in wanted}
        call_args, call_kwargs = self._materialize_call(meta, args, kwargs, resolved)

        return meta.cls(*call_args, **call_kwargs)

    def __call__(self, cls: type | str, *args: Any, **kwargs: Any) -> Any:
        """Alias of `instantiate`."""
        return self.instantiate(cls, *args, **kwargs)

    def dependencies(self, cls: type | str, skip: int = 0) -> list[Dependency]:
        """Get the dependencies of the constructor, skipping the first `skip` parameters."""
        meta = self._reflect(cls)
        return [dep for _, dep in self._determine_dependencies(meta, skip, ())]

    def _reflect(self, cls: type | str) -> TypeMetadata:
        try:
            return self._metadata.reflect(cls)
        except ReflectionError as e:
            name = getattr(cls, "__qualname__", cls)
            msg = f"Unable to autowire {name}: {e}"
            raise AutowireError(msg) from e

    def _determine_dependencies(
        self,
        meta: TypeMetadata,
        skip: int,
        named: Collection[str],
    ) -> list[tuple[ParameterMetadata, Dependency]]:
        if not meta.has_constructor:
            return []

        annotations = extract_param_annotations(meta.doc)
        dependencies = []

        for index, param in enumerate(meta.parameters):
            if (index < skip and not param.keyword_only) or param.name in named:
                continue

            override = annotations[index] if index < len(annotations) else None
            key = override or param.inject or self._param_type(meta.cls, param)
            dependencies.append((param, Dependency(key=key, optional=param.is_optional)))

        return dependencies

    def _param_type(self, cls: type, param: ParameterMetadata) -> str:
        """Get the declared type of a parameter as container identifier."""
        if param.type_name is None:
            msg = f"Unable to autowire {cls.__qualname__}: Unknown type for parameter '{param.name}'."
            raise AutowireError(msg)

        if param.is_builtin:
            msg = (
                f"Unable to autowire {cls.__qualname__}: Built-in type '{param.type_name}' for parameter "
                f"'{param.name}' can't be used as container id. Please use annotations."
            )
            raise AutowireError(msg)

        return param.type_name

    def _get_dependency(self, param: ParameterMetadata, dep: Dependency) -> Any:
        if not dep.optional or self._container.has(dep.key):
            return self._container.get(dep.key)

        return _ABSENT if param.has_default else None

    def _materialize_call(
        self,
        meta: TypeMetadata,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        resolved: dict[str, Any],
    ) -> tuple[list[Any], dict[str, Any]]:
        call_args, call_kwargs = list(args), dict(kwargs)
        # once a parameter is left out, the following ones must be passed by name
        by_name = False

        for param in meta.parameters:
            if param.name not in resolved:
                by_name = by_name or param.name in kwargs
                continue

            value = resolved[param.name]
            if value is _ABSENT and param.positional_only:
                # can't be left out when later positional-only parameters follow
                call_args.append(param.default)
            elif value is _ABSENT:
                by_name = True
            elif param.keyword_only or (by_name and not param.positional_only):
                call_kwargs[param.name] = value
            else:
                call_args.append(value)

        return call_args, call_kwargs
