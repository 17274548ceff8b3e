"""Lazy, dependency-resolving object container.

Lazywire builds objects on demand from their constructors. Asking the
injector for a type constructs it, after first constructing every type its
constructor parameters are annotated with, and so on recursively. Each type
is constructed once; every later request returns the same instance.

Key Features:
    - Constructor injection driven by standard type hints
    - One instance per type for the lifetime of the injector
    - Cycle detection with the full dependency path in the error
    - Alternative constructors registered as factory functions
    - Dependency graph export in Graphviz DOT format

Basic Usage:
    >>> from lazywire import Injector
    >>>
    >>> class Database:
    ...     pass
    >>>
    >>> class UserService:
    ...     def __init__(self, db: Database):
    ...         self.db = db
    >>>
    >>> injector = Injector()
    >>> service = injector.resolve(UserService)
    >>> service.db is injector.resolve(Database)
    True

The package consists of several modules:
    - container: the Injector and its resolution algorithm
    - introspection: constructor discovery from signatures and type hints
    - registry: registration of factory functions as extra constructors
    - graph: dependency graph export
    - errors: framework-specific exceptions
    - config, logging: settings and structured logging setup
"""

from lazywire.config import InjectorSettings, get_settings
from lazywire.container import Injector
from lazywire.domain import Constructor, Dependency
from lazywire.errors import ConstructionError, CycleError, InjectorError
from lazywire.graph import DotGraphExporter
from lazywire.introspection import SignatureIntrospector, TypeIntrospector
from lazywire.registry import ConstructorRegistry

__all__ = [
    "Injector",
    "InjectorError",
    "CycleError",
    "ConstructionError",
    "Constructor",
    "Dependency",
    "ConstructorRegistry",
    "TypeIntrospector",
    "SignatureIntrospector",
    "DotGraphExporter",
    "InjectorSettings",
    "get_settings",
]
