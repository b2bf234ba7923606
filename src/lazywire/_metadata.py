from __future__ import annotations

import builtins
import importlib
import inspect
import logging
import re
import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    ForwardRef,
    NamedTuple,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from ._exceptions import ReflectionError


logger = logging.getLogger(__name__)

_UNION_TYPES = (Union, types.UnionType)
_NONE_TYPE = type(None)
_STRING_INJECT = re.compile(r"""Inject\(\s*(?:key\s*=\s*)?['"]([^'"]+)['"]\s*\)""")


class Inject(NamedTuple):
    """Marker naming the container identifier for a constructor parameter.

    Example:
      def __init__(self, hue: Annotated[int, Inject("config.hue")]): ...

    """

    key: str


@dataclass(frozen=True)
class ParameterMetadata:
    name: str
    type_name: str | None
    is_builtin: bool = False
    is_optional: bool = False
    positional_only: bool = False
    keyword_only: bool = False
    has_default: bool = False
    default: Any = None
    inject: str | None = None  # identifier from an `Inject` marker


@dataclass(frozen=True)
class TypeMetadata:
    cls: type
    has_constructor: bool
    parameters: tuple[ParameterMetadata, ...] = ()
    doc: str | None = None


@runtime_checkable
class MetadataProvider(Protocol):
    """Describe the constructor of a type."""

    def reflect(self, target: type | str) -> TypeMetadata: ...


class InspectMetadataProvider:
    """Metadata provider backed by `inspect` and `typing`.

    Targets are classes or import strings, either `"package.module:Name"` or
    `"package.module.Name"`. Variadic parameters (`*args`, `**kwargs`) are not
    reported since they can't be mapped to a single dependency.
    """

    def reflect(self, target: type | str) -> TypeMetadata:
        cls = self.locate(target)

        if not _has_constructor(cls):
            return TypeMetadata(cls=cls, has_constructor=False, doc=_constructor_doc(cls))

        try:
            sig = inspect.signature(cls)
        except (TypeError, ValueError) as e:
            msg = f"Unable to inspect the constructor of {cls.__qualname__}: {e}"
            raise ReflectionError(msg) from e

        hints = _get_init_type_hints(cls)
        parameters = tuple(
            self._describe(p, hints.get(name, p.annotation))
            for name, p in sig.parameters.items()
            if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        )

        return TypeMetadata(cls=cls, has_constructor=True, parameters=parameters, doc=_constructor_doc(cls))

    def locate(self, target: type | str) -> type:
        """Get the class for a class or an import string."""
        if inspect.isclass(target):
            return target

        if not isinstance(target, str) or not target:
            msg = f"Expected a class or an import string, got {target!r}"
            raise ReflectionError(msg)

        if ":" in target:
            module_name, _, attr_path = target.partition(":")
        else:
            module_name, _, attr_path = target.rpartition(".")

        if not module_name or not attr_path:
            msg = f"Class {target!r} does not exist: not an import path"
            raise ReflectionError(msg)

        try:
            obj: Any = importlib.import_module(module_name)
            for attr in attr_path.split("."):
                obj = getattr(obj, attr)
        except (ImportError, AttributeError) as e:
            msg = f"Class {target!r} does not exist: {e}"
            raise ReflectionError(msg) from e

        if not inspect.isclass(obj):
            msg = f"{target!r} is a {type(obj).__name__}, not a class"
            raise ReflectionError(msg)

        return obj

    def _describe(self, p: inspect.Parameter, hint: Any) -> ParameterMetadata:
        hint, nullable, inject = _unwrap(hint)
        type_name, is_builtin = _type_name(hint)

        return ParameterMetadata(
            name=p.name,
            type_name=type_name,
            is_builtin=is_builtin,
            is_optional=nullable or p.default is not p.empty,
            has_default=p.default is not p.empty,
            default=None if p.default is p.empty else p.default,
            positional_only=p.kind is p.POSITIONAL_ONLY,
            keyword_only=p.kind is p.KEYWORD_ONLY,
            inject=inject,
        )


def _has_constructor(cls: type) -> bool:
    return getattr(cls, "__init__", object.__init__) is not object.__init__


def _constructor_doc(cls: type) -> str | None:
    init = getattr(cls, "__init__", object.__init__)
    doc = init.__doc__ if init is not object.__init__ else None
    return doc or cls.__doc__


def _get_init_type_hints(cls: type) -> dict[str, Any]:
    try:
        hints = get_type_hints(cls.__init__, include_extras=True)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning("'%s' name error retrieving %s (%s) type hints", exc.name, cls.__name__, cls.__qualname__)
        hints = {}

    return hints


def _unwrap(hint: Any) -> tuple[Any, bool, str | None]:
    """Strip `Annotated` and `Optional` wrappers.

    Returns the inner hint, whether `None` is allowed, and the `Inject` key if any.
    """
    nullable = False
    inject = None

    while True:
        if isinstance(hint, (str, ForwardRef)):
            return _unwrap_string(hint, nullable, inject)

        origin = get_origin(hint)

        if origin is Annotated:
            base, *extras = get_args(hint)
            if inject is None:
                inject = next((m.key for m in extras if isinstance(m, Inject)), None)
            hint = base
        elif origin in _UNION_TYPES and _NONE_TYPE in get_args(hint):
            nullable = True
            args = tuple(a for a in get_args(hint) if a is not _NONE_TYPE)
            if len(args) != 1:
                return inspect.Parameter.empty, nullable, inject
            hint = args[0]
        else:
            return hint, nullable, inject


def _unwrap_string(hint: str | ForwardRef, nullable: bool, inject: str | None) -> tuple[Any, bool, str | None]:
    # Unresolved forward references are unwrapped textually.
    text = hint.__forward_arg__ if isinstance(hint, ForwardRef) else hint
    text = text.strip().strip("'\"")

    while True:
        parts = _split_top_level(text, "|")
        if "None" in parts:
            nullable = True
            parts = [part for part in parts if part != "None"]

        if len(parts) != 1 or not parts[0]:
            return inspect.Parameter.empty, nullable, inject

        head, args = _split_subscript(parts[0])

        if head in ("Annotated", "typing.Annotated") and args:
            if inject is None:
                match = next(filter(None, (_STRING_INJECT.fullmatch(arg) for arg in args[1:])), None)
                inject = match.group(1) if match else None
            text = args[0]
        elif head in ("Optional", "typing.Optional") and len(args) == 1:
            nullable = True
            text = args[0]
        elif head in ("Union", "typing.Union") and args:
            text = " | ".join(args)
        else:
            # generics such as list[int] are named after their origin
            return head, nullable, inject


def _split_subscript(text: str) -> tuple[str, list[str]]:
    if not text.endswith("]") or "[" not in text:
        return text, []

    start = text.index("[")
    return text[:start].strip(), _split_top_level(text[start + 1 : -1], ",")


def _split_top_level(text: str, sep: str) -> list[str]:
    parts, depth, start = [], 0, 0

    for i, char in enumerate(text):
        if char in "[(":
            depth += 1
        elif char in "])":
            depth -= 1
        elif char == sep and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1

    parts.append(text[start:].strip())
    return parts


def _type_name(hint: Any) -> tuple[str | None, bool]:
    if hint is inspect.Parameter.empty or hint is Any:
        return None, False

    if isinstance(hint, str):
        if hint in ("Any", "typing.Any"):
            return None, False
        return hint, isinstance(getattr(builtins, hint, None), type)

    if inspect.isclass(hint):
        return hint.__name__, hint.__module__ == "builtins"

    # Parametrized generics such as list[int]
    origin = get_origin(hint)
    if inspect.isclass(origin) and origin not in _UNION_TYPES:
        return origin.__name__, origin.__module__ == "builtins"

    return None, False
