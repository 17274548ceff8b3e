"""Registration of alternative constructors for service types.

A class is normally constructed through its own ``__init__``. Factories
registered here act as additional public constructors for the type they
produce, which lets the injector build types it cannot instantiate directly
(abstract bases, third-party classes, objects assembled from configuration).
"""

import inspect
from collections import defaultdict
from typing import Any, Callable, Optional, get_type_hints

from lazywire.errors import InjectorError

__all__ = ["ConstructorRegistry"]


class ConstructorRegistry:
    """Registry of factory functions, keyed by the service type they produce."""

    def __init__(self):
        self._factories: dict[Any, list[Callable]] = defaultdict(list)

    def register(self, service_type: Any, factory: Callable):
        """Register a factory explicitly.

        Args:
            service_type: The type the factory produces.
            factory: A callable whose parameters are resolved like constructor parameters.
        """
        if not callable(factory):
            raise InjectorError(f"{factory!r} is not callable", service_type)
        self._factories[service_type].append(factory)

    def factories_for(self, service_type: Any) -> list[Callable]:
        """Return the factories registered for a type, in registration order."""
        return list(self._factories.get(service_type, ()))

    def provides(self, service_type: Optional[Any] = None) -> Callable:
        """Decorator to register a function as a constructor of a service type.

        Args:
            service_type: The type produced. Defaults to the function's annotated
                return type.

        Returns:
            A decorator that registers the function and returns it unchanged.

        Example:
            @registry.provides()
            def make_database(settings: Settings) -> Database:
                return Database(settings.url)
        """

        def decorator(func: Callable) -> Callable:
            target = service_type or _return_type_of(func)
            self.register(target, func)
            return func

        return decorator


def _return_type_of(func: Callable) -> Any:
    target = inspect.unwrap(func)
    return_type = get_type_hints(target).get("return", None)
    if return_type is None:
        raise InjectorError(
            "Factory <%s> has no return annotation and no explicit service type"
            % getattr(func, "__name__", func),
            None,
        )
    return return_type
