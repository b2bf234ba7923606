class ContainerError(Exception):
    """Base class for all lazywire failures."""


class NotFoundError(ContainerError, LookupError):
    """No entry is registered under the identifier and no sub-container can resolve it."""


class NoSubContainerError(ContainerError, LookupError):
    """A dotted identifier prefix matched an entry that isn't a container.

    Raised instead of `NotFoundError` so a misconfigured entry can be told apart
    from a missing one.
    """


class EntryTypeError(ContainerError, TypeError):
    """The resolved entry is not an instance of the type named by its identifier."""


class ReflectionError(ContainerError, LookupError):
    """The metadata provider can't locate or inspect a type."""


class AutowireError(ContainerError, RuntimeError):
    """A class can't be autowired.

    Either the class can't be reflected, or one of its constructor parameters
    can't be mapped to a container identifier.
    """
