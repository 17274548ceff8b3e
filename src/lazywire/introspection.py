"""Discovery of constructors and their parameter types.

The resolver never inspects classes itself: it asks a :class:`TypeIntrospector`
for the public constructors of a type and hands the chosen one back to it,
together with the resolved arguments, to build the instance. The default
:class:`SignatureIntrospector` reads parameter types from type hints.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Annotated, Any, Callable, Optional, get_args, get_origin, get_type_hints

from lazywire.domain import Constructor, Dependency
from lazywire.registry import ConstructorRegistry

__all__ = ["TypeIntrospector", "SignatureIntrospector", "make_constructor"]


class TypeIntrospector(ABC):
    """Capability to list and invoke the public constructors of a type."""

    @abstractmethod
    def constructors(self, service_type: Any) -> list[Constructor]:
        """Return every public constructor of ``service_type``.

        An empty list means the type cannot be constructed.
        """

    def construct(self, constructor: Constructor, args: list[Any], kwargs: dict[str, Any]) -> Any:
        """Invoke a constructor with already-resolved arguments."""
        return constructor.func(*args, **kwargs)


class SignatureIntrospector(TypeIntrospector):
    """Introspector based on ``inspect.signature`` and type hints.

    A concrete class contributes its own ``__init__``. Abstract classes,
    protocols and classes declaring ``__injectable__ = False`` contribute
    nothing. Factories found in the optional registry are added after it.
    """

    def __init__(self, registry: Optional[ConstructorRegistry] = None):
        self._registry = registry or ConstructorRegistry()

    @property
    def registry(self) -> ConstructorRegistry:
        return self._registry

    def constructors(self, service_type: Any) -> list[Constructor]:
        result = []
        if _is_directly_constructible(service_type):
            result.append(make_constructor(service_type))
        result.extend(make_constructor(f) for f in self._registry.factories_for(service_type))
        return result


def make_constructor(func: Callable) -> Constructor:
    """Describe a class or factory function as a :class:`Constructor`.

    Args:
        func: A class, or any callable returning an instance.

    Returns:
        The constructor with one :class:`Dependency` per named parameter.
        ``*args`` and ``**kwargs`` are ignored.

    Raises:
        TypeError, ValueError: If the signature cannot be read.
        NameError: If a type hint refers to an undefined name.
    """
    sig = inspect.signature(func)
    hints = _hints_for(func)
    return Constructor(
        func,
        tuple(
            Dependency.from_parameter(param, _base_type(hints.get(name)))
            for name, param in sig.parameters.items()
            if param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ),
    )


def _hints_for(func: Callable) -> dict[str, Any]:
    target = func.__init__ if inspect.isclass(func) else func
    if not hasattr(target, "__annotations__"):
        return {}
    return get_type_hints(target, include_extras=True)


def _base_type(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        base_type, *_metadata = get_args(annotation)
        return base_type
    return annotation


def _is_directly_constructible(service_type: Any) -> bool:
    if not inspect.isclass(service_type):
        return False
    if inspect.isabstract(service_type) or getattr(service_type, "_is_protocol", False):
        return False
    return vars(service_type).get("__injectable__", True)
