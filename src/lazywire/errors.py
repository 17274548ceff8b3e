"""Exceptions raised while resolving services.

Every error carries the service type that failed and the resolution path
that was active at the time, so a misconfigured dependency graph can be
diagnosed from the message alone.
"""

from typing import Any, Iterable, Optional

__all__ = ["InjectorError", "CycleError", "ConstructionError", "format_path", "type_name"]


def type_name(service_type: Any) -> str:
    """Return a short, human readable name for a service type."""
    return getattr(service_type, "__qualname__", None) or str(service_type)


def format_path(path: Iterable[Any], closing: Optional[Any] = None) -> str:
    """Render a resolution path as ``A -> B -> C``.

    Args:
        path: The types currently being resolved, outermost first.
        closing: An optional type appended at the end, used to show the type
            that closes a cycle.

    Returns:
        The arrow-separated chain of type names.
    """
    names = [type_name(t) for t in path]
    if closing is not None:
        names.append(type_name(closing))
    return " -> ".join(names)


class InjectorError(Exception):
    """Base class for all errors raised by the injector."""

    def __init__(self, message: str, service_type: Any, path: Iterable[Any] = ()):
        super().__init__(message)
        self.service_type = service_type
        self.path = tuple(path)


class CycleError(InjectorError):
    """Raised when a service is requested while it is still being constructed."""

    def __init__(self, service_type: Any, path: Iterable[Any]):
        path = tuple(path)
        super().__init__(
            f"A circular dependency has been detected: {format_path(path, service_type)}",
            service_type,
            path,
        )

    @property
    def cycle(self) -> tuple:
        """The part of the path that forms the cycle, closed by the offending type."""
        start = self.path.index(self.service_type)
        return self.path[start:] + (self.service_type,)


class ConstructionError(InjectorError):
    """Raised when a service has no usable constructor or its constructor fails."""

    def __init__(self, service_type: Any, path: Iterable[Any], reason: str):
        path = tuple(path)
        super().__init__(
            f"Cannot construct {type_name(service_type)}: {reason} "
            f"(dependency path: {format_path(path) or type_name(service_type)})",
            service_type,
            path,
        )
        self.reason = reason
