"""Domain models describing how a service type can be constructed."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional

__all__ = ["Dependency", "Constructor"]


@dataclass(frozen=True)
class Dependency:
    """A single parameter of a constructor.

    Attributes:
        parameter_name: The name of the parameter in the constructor's signature.
        declared_type: The annotated type of the parameter, or None when unannotated.
        keyword_only: Whether the parameter must be passed by keyword.
        has_default: Whether the constructor supplies a default value for it.
        positional_only: Whether the parameter cannot be passed by keyword.
    """

    parameter_name: str
    declared_type: Optional[Any]
    keyword_only: bool = False
    has_default: bool = False
    positional_only: bool = False

    @staticmethod
    def from_parameter(parameter: inspect.Parameter, declared_type: Optional[Any]) -> "Dependency":
        return Dependency(
            parameter.name,
            declared_type,
            parameter.kind is inspect.Parameter.KEYWORD_ONLY,
            parameter.default is not inspect.Parameter.empty,
            parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
        )


@dataclass(frozen=True)
class Constructor:
    """A callable able to build an instance of a service type.

    Attributes:
        func: The class itself, or a factory function returning an instance.
        dependencies: The constructor's parameters, in declaration order.
    """

    func: Callable
    dependencies: tuple[Dependency, ...]

    @property
    def required(self) -> tuple[Dependency, ...]:
        """Parameters the caller must supply, either resolved or as extras."""
        return tuple(d for d in self.dependencies if not d.has_default)

    @property
    def is_default(self) -> bool:
        """True when the constructor can be invoked without any argument."""
        return not self.required

    @property
    def name(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))
