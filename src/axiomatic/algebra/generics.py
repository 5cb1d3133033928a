"""
Generic functions with capability bounds.

A generic function names its type variables in parameter annotations and
states bounds in a ``where`` clause:

    V = TypeVariable("V")
    F = TypeVariable("F")

    @generic(where={V: VECTOR_SPACE(F)})
    def axpy(a: F, x: V, y: V) -> V:
        return x * a + y

Instantiating the function resolves every bound against the registry and
raises CapabilityError before the body can run:

    axpy.instantiate(V=List[F64, 3], F=F64)      # ok
    axpy.instantiate(V=Complex[F64], F=F64)      # CapabilityError

Calling it infers the type arguments from the argument values and
instantiates implicitly. Instantiations are cached per type assignment.
"""

from __future__ import annotations

import functools
import inspect
import logging
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from axiomatic.algebra.capabilities import (
    Bound,
    CapabilityRegistry,
    Constraint,
    get_default_registry,
)
from axiomatic.core.types import Type, TypeVariable, as_type, type_of
from axiomatic.utils.errors import CapabilityError, TypeMismatchError

logger = logging.getLogger("axiomatic.generics")

BoundSpec = Union[Bound, Constraint, Iterable[Union[Bound, Constraint]]]


def _normalize_bounds(spec: BoundSpec) -> tuple[Bound, ...]:
    if isinstance(spec, (Bound, Constraint)):
        spec = [spec]
    bounds = []
    for item in spec:
        if isinstance(item, Bound):
            bounds.append(item)
        elif isinstance(item, Constraint):
            bounds.append(Bound(item))
        else:
            raise TypeMismatchError(f"`{item!r}` is not a capability bound")
    return tuple(bounds)


def _annotation_namespace(func: Callable[..., Any], where_vars: Iterable[TypeVariable]) -> dict[str, Any]:
    # Type variables named in the where clause shadow globals and closure cells
    namespace = dict(getattr(func, "__globals__", {}))
    if inspect.isfunction(func):
        namespace.update(inspect.getclosurevars(func).nonlocals)
    namespace.update({var.name: var for var in where_vars})
    return namespace


def _resolve_annotation(annotation: Any, namespace: Mapping[str, Any]) -> Any:
    """Evaluate a string annotation; unresolvable ones take no part in inference."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, dict(namespace))
    except (NameError, AttributeError, SyntaxError):
        logger.debug(f"Ignoring unresolvable annotation {annotation!r}")
        return inspect.Parameter.empty


class Instantiation:
    """A generic function bound to concrete type arguments whose bounds hold."""

    def __init__(self, generic: GenericFunction, type_args: Mapping[str, Type]) -> None:
        self.generic = generic
        self.type_args = MappingProxyType(dict(type_args))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        inferred = self.generic.infer(*args, **kwargs)
        for name, actual in inferred.items():
            expected = self.type_args[name]
            if actual != expected:
                raise TypeMismatchError(
                    f"`{self!r}` expects {name} = `{expected}`, found `{actual}`"
                )
        return self.generic.__wrapped__(*args, **kwargs)

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={t}" for name, t in self.type_args.items())
        return f"{self.generic.__name__}[{args}]"


class GenericFunction:
    """
    A function whose type variables carry capability bounds.

    Attributes:
        type_params: Type variables in order of first appearance
        bounds: Bounds per type variable name
    """

    def __init__(
        self,
        func: Callable[..., Any],
        where: Optional[Mapping[TypeVariable, BoundSpec]] = None,
        registry: Optional[CapabilityRegistry] = None,
    ) -> None:
        functools.update_wrapper(self, func)
        self._registry = registry
        self._signature = inspect.signature(func)
        self._instances: dict[tuple[Type, ...], Instantiation] = {}

        params: dict[str, TypeVariable] = {}
        self.bounds: dict[str, tuple[Bound, ...]] = {}
        for var, spec in (where or {}).items():
            if not isinstance(var, TypeVariable):
                raise TypeMismatchError(f"where-clause keys must be type variables, got `{var!r}`")
            self._add_type_param(params, var)
            self.bounds[var.name] = _normalize_bounds(spec)
            for bound in self.bounds[var.name]:
                if isinstance(bound.scalar, TypeVariable):
                    self._add_type_param(params, bound.scalar)

        # Parameters annotated with a type variable drive inference
        self._param_vars: dict[str, TypeVariable] = {}
        namespace = _annotation_namespace(func, params.values())
        for name, param in self._signature.parameters.items():
            annotation = _resolve_annotation(param.annotation, namespace)
            if isinstance(annotation, TypeVariable):
                self._add_type_param(params, annotation)
                self._param_vars[name] = annotation
        self.type_params: tuple[TypeVariable, ...] = tuple(params.values())

    def _add_type_param(self, params: dict[str, TypeVariable], var: TypeVariable) -> None:
        existing = params.setdefault(var.name, var)
        if existing != var:
            raise TypeMismatchError(
                f"two different type variables are named `{var.name}` in `{self.__name__}`"
            )

    @property
    def registry(self) -> CapabilityRegistry:
        return self._registry or get_default_registry()

    def __repr__(self) -> str:
        clauses = []
        for name, bounds in self.bounds.items():
            clauses.append(f"{name}: " + " + ".join(str(b) for b in bounds))
        where = f" where {', '.join(clauses)}" if clauses else ""
        return f"<generic {self.__name__}{where}>"

    # -------------------------------------------------------------------------
    # Instantiation
    # -------------------------------------------------------------------------

    def instantiate(self, **type_args: Any) -> Instantiation:
        """
        Bind every type variable and check all bounds.

        Raises:
            TypeMismatchError: A type variable is missing or unknown
            CapabilityError: A bound does not hold; the diagnostic names
                every missing axiom
        """
        known = {var.name for var in self.type_params}
        unknown = set(type_args) - known
        if unknown:
            raise TypeMismatchError(
                f"`{self.__name__}` has no type parameter(s) {', '.join(sorted(unknown))}"
            )
        missing = [var.name for var in self.type_params if var.name not in type_args]
        if missing:
            raise TypeMismatchError(
                f"cannot infer type parameter(s) {', '.join(missing)} of `{self.__name__}`"
            )

        resolved = {name: as_type(t) for name, t in type_args.items()}
        key = tuple(resolved[var.name] for var in self.type_params)
        cached = self._instances.get(key)
        if cached is not None:
            return cached

        for name, bounds in self.bounds.items():
            for bound in bounds:
                self.registry.require(
                    bound.constraint,
                    resolved[name],
                    bound.substitute(resolved),
                    required_by=f"`{name}: {bound}` in `{self.__name__}`",
                )

        instance = Instantiation(self, {var.name: resolved[var.name] for var in self.type_params})
        self._instances[key] = instance
        logger.info(f"Instantiated {instance!r}")
        return instance

    def accepts(self, **type_args: Any) -> bool:
        """Check whether the type arguments satisfy every bound."""
        try:
            self.instantiate(**type_args)
        except CapabilityError:
            return False
        return True

    def infer(self, *args: Any, **kwargs: Any) -> dict[str, Type]:
        """
        Infer type arguments from call arguments.

        Raises:
            TypeMismatchError: Two arguments imply different types for the
                same type variable
        """
        bound_args = self._signature.bind(*args, **kwargs)
        inferred: dict[str, Type] = {}
        for param_name, var in self._param_vars.items():
            if param_name not in bound_args.arguments:
                continue
            actual = type_of(bound_args.arguments[param_name])
            previous = inferred.setdefault(var.name, actual)
            if previous != actual:
                raise TypeMismatchError(
                    f"conflicting types for `{var.name}` in `{self.__name__}`: "
                    f"`{previous}` and `{actual}`"
                )
        return inferred

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.instantiate(**self.infer(*args, **kwargs))
        return self.__wrapped__(*args, **kwargs)


def generic(
    where: Optional[Mapping[TypeVariable, BoundSpec]] = None,
    registry: Optional[CapabilityRegistry] = None,
) -> Callable[[Callable[..., Any]], GenericFunction]:
    """
    Decorator declaring a bounded generic function.

    Args:
        where: Bounds per type variable; a single constraint, a Bound, or a
            list of them
        registry: Registry used to resolve bounds; the default registry when
            omitted
    """

    def decorator(func: Callable[..., Any]) -> GenericFunction:
        return GenericFunction(func, where, registry)

    return decorator
