"""
The injector: a lazy container building services from their constructors.

Requesting a type constructs it, after recursively constructing every type its
constructor depends on. Each type is constructed at most once for the lifetime
of the injector; later requests return the cached instance.

Resolution is a depth-first walk over constructor parameters. The chain of
types under construction (the resolution path) is threaded through the
recursive calls, and meeting a type that is already on the path means the
dependency declarations are cyclic. The cache is checked before the path, so a
type reached twice through a diamond is never mistaken for a cycle.

The first construction of each type also records its direct dependencies in a
dependency graph, which can be exported for diagnostics.
"""

import threading
from pathlib import Path
from typing import Any, Optional, TextIO, TypeVar, Union

from lazywire.config import InjectorSettings, get_settings
from lazywire.domain import Constructor, Dependency
from lazywire.errors import ConstructionError, CycleError, InjectorError, format_path, type_name
from lazywire.graph import DotGraphExporter
from lazywire.introspection import SignatureIntrospector, TypeIntrospector
from lazywire.logging import get_logger

__all__ = ["Injector"]

S = TypeVar("S")

logger = get_logger(__name__)

_ABSENT = object()


class Injector:
    """Container owning the instance cache and the dependency graph.

    All operations are serialised behind a single re-entrant lock, so
    concurrent callers never construct the same type twice and never observe
    a half-built graph. The resolution path is kept per thread: a constructor
    calling back into the injector extends the path of the resolution that
    is building it, so a constructor requesting its own type is a cycle.

    Example:
        >>> injector = Injector()
        >>> service = injector.resolve(UserService)
        >>> injector.resolve(UserService) is service
        True
    """

    def __init__(
        self,
        introspector: Optional[TypeIntrospector] = None,
        settings: Optional[InjectorSettings] = None,
    ):
        self._introspector = introspector or SignatureIntrospector()
        self._settings = settings or get_settings()
        self._instances: dict[Any, Any] = {}
        self._graph: dict[Any, set[Any]] = {}
        self._lock = threading.RLock()
        self._local = threading.local()

    def resolve(self, service_type: type[S], *extra: Any) -> S:
        """Return the instance of ``service_type``, constructing it if needed.

        Args:
            service_type: The concrete type to construct.
            *extra: Values for the trailing parameters of the constructor,
                supplied as-is instead of being resolved. Ignored if the type
                is already cached.

        Returns:
            The single instance of ``service_type`` held by this injector.

        Raises:
            CycleError: If the type depends on itself, directly or not.
            ConstructionError: If the type or one of its dependencies has no
                usable constructor, or a constructor raised.
        """
        with self._lock:
            path = getattr(self._local, "path", None)
            if path is not None:
                return self._resolve(service_type, path, extra)

            self._local.path = path = []
            try:
                return self._resolve(service_type, path, extra)
            finally:
                del self._local.path

    def get_existing(self, service_type: type[S], default: Any = None) -> Optional[S]:
        """Return the cached instance of a type without ever constructing it."""
        with self._lock:
            return self._instances.get(service_type, default)

    def has_service(self, service_type: Any) -> bool:
        with self._lock:
            return service_type in self._instances

    __contains__ = has_service

    def add_service(self, instance: Any, service_type: Optional[Any] = None) -> None:
        """Seed the cache with an externally built instance.

        Args:
            instance: The object to hand out for ``service_type``.
            service_type: The key to store it under; defaults to the
                instance's own class. Use a base class or protocol here to
                satisfy dependencies declared on that type.
        """
        key = service_type if service_type is not None else type(instance)
        with self._lock:
            replaced = key in self._instances
            self._instances[key] = instance
        logger.debug("service_added", service=type_name(key), replaced=replaced)

    def remove_service(self, service_type: Any) -> None:
        """Evict a cached instance, so the next request constructs a new one.

        The type's node in the dependency graph is kept.
        """
        with self._lock:
            removed = self._instances.pop(service_type, _ABSENT) is not _ABSENT
        if removed:
            logger.debug("service_removed", service=type_name(service_type))

    def dependency_graph(self) -> dict[Any, frozenset]:
        """Return a snapshot of the dependency graph recorded so far."""
        with self._lock:
            return {node: frozenset(edges) for node, edges in self._graph.items()}

    def export_graph(self, sink: TextIO, exporter: Optional[DotGraphExporter] = None) -> None:
        """Write the dependency graph to a text sink."""
        exporter = exporter or DotGraphExporter(self._settings.graph_name)
        exporter.export(self.dependency_graph(), sink)

    def save_graph(self, path: Optional[Union[str, Path]] = None) -> Path:
        """Write the dependency graph to a file.

        Args:
            path: Destination file; defaults to the configured ``graph_path``.

        Returns:
            The path written to.
        """
        target = Path(path if path is not None else self._settings.graph_path)
        with target.open("w", encoding="utf-8") as sink:
            self.export_graph(sink)
        logger.info("dependency_graph_saved", path=str(target))
        return target

    def _resolve(self, service_type: Any, path: list, extra: tuple = ()) -> Any:
        if service_type in self._instances:
            return self._instances[service_type]

        if service_type in path:
            logger.warning(
                "dependency_cycle_detected",
                service=type_name(service_type),
                path=format_path(path, service_type),
            )
            raise CycleError(service_type, path)

        path.append(service_type)
        try:
            constructor = self._select_constructor(service_type, path)
            resolved, supplied = self._split_parameters(constructor, service_type, path, extra)

            self._graph.setdefault(service_type, set()).update(d.declared_type for d in resolved)

            values = {d.parameter_name: self._resolve(d.declared_type, path) for d in resolved}
            values.update((d.parameter_name, value) for d, value in zip(supplied, extra))
            args, kwargs = self._bind(constructor, values, service_type, path)

            try:
                instance = self._introspector.construct(constructor, args, kwargs)
            except InjectorError:
                raise
            except Exception as exc:
                raise ConstructionError(
                    service_type,
                    path,
                    f"{constructor.name} raised {type(exc).__name__}: {exc}",
                ) from exc

            self._instances[service_type] = instance
            logger.debug(
                "service_constructed",
                service=type_name(service_type),
                dependencies=[type_name(d.declared_type) for d in resolved],
            )
            return instance
        finally:
            path.pop()

    def _select_constructor(self, service_type: Any, path: list) -> Constructor:
        try:
            constructors = self._introspector.constructors(service_type)
        except InjectorError:
            raise
        except Exception as exc:
            raise ConstructionError(
                service_type, path, f"cannot introspect constructors ({exc})"
            ) from exc

        if len(constructors) == 1:
            return constructors[0]
        if not constructors:
            raise ConstructionError(service_type, path, "no public constructor")

        defaults = [c for c in constructors if c.is_default]
        if not defaults:
            raise ConstructionError(
                service_type,
                path,
                "ambiguous constructors, no default constructor among "
                + ", ".join(c.name for c in constructors),
            )
        return defaults[0]

    @staticmethod
    def _split_parameters(
        constructor: Constructor, service_type: Any, path: list, extra: tuple
    ) -> tuple[list[Dependency], list[Dependency]]:
        dependencies = list(constructor.dependencies)
        if len(extra) > len(dependencies):
            raise ConstructionError(
                service_type,
                path,
                f"{len(extra)} extra parameters supplied but {constructor.name} "
                f"takes {len(dependencies)} parameters",
            )

        split = len(dependencies) - len(extra)
        resolved = [d for d in dependencies[:split] if not d.has_default]
        supplied = dependencies[split:]
        for dependency in resolved:
            if dependency.declared_type is None:
                raise ConstructionError(
                    service_type,
                    path,
                    f"parameter '{dependency.parameter_name}' of {constructor.name} is not annotated",
                )
        return resolved, supplied

    @staticmethod
    def _bind(
        constructor: Constructor, values: dict[str, Any], service_type: Any, path: list
    ) -> tuple[list[Any], dict[str, Any]]:
        # positional arguments stop at the first defaulted parameter left unset
        args, kwargs = [], {}
        positional = True
        for dependency in constructor.dependencies:
            name = dependency.parameter_name
            if name not in values:
                positional = positional and dependency.keyword_only
                continue
            if dependency.keyword_only:
                kwargs[name] = values[name]
            elif positional:
                args.append(values[name])
            elif dependency.positional_only:
                raise ConstructionError(
                    service_type,
                    path,
                    f"positional-only parameter '{name}' of {constructor.name} "
                    "follows a defaulted parameter left unset",
                )
            else:
                kwargs[name] = values[name]
        return args, kwargs
