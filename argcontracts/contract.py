"""
Contracts and the fluent builder.

A Contract is an immutable, ordered tuple of ParameterSpec. Every registered
type name is available as a builder method that returns a *new* Contract with
one more parameter, so a contract handed to a wrapper can never change under it.

Usage:
    from argcontracts import expects

    add = expects.number('a').number('b', 0).wrap(lambda a, b: a + b)
    add(1)          # 1
    add(1, 2)       # 3
    add('x')        # ValidationFailure: Expected number for "a"

    # A trailing "?" marks a parameter optional without giving a default
    greet = expects.string('name?').wrap(lambda name: f"hi {name or 'there'}")
"""

from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .config import Config
from .registry import DEFAULT_REGISTRY, ConfigurationError, TypeRegistry
from .validate import ParseResult, parse, required_count
from .wrapper import ContractWrapper, FailureMode


class _NoDefault:
    """Marker for "no default supplied" (None is a legitimate default)."""

    def __repr__(self):
        return 'NO_DEFAULT'

    def __bool__(self):
        return False


NO_DEFAULT = _NoDefault()


class ParameterSpec(BaseModel):
    """
    One declared parameter.

    Invariants:
    - name never contains the optional marker
    - optional is True when the declared name ended with the marker or a
      default was supplied
    - frozen: specs are never modified after construction
    """
    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )

    name: str
    type: str
    optional: bool = False
    default: Any = None

    @field_validator('name')
    @classmethod
    def strip_optional_marker(cls, v: str) -> str:
        return v.replace(Config.optional_marker(), '')

    @classmethod
    def declare(cls, name: str, type_name: str, default: Any = NO_DEFAULT) -> 'ParameterSpec':
        """Build a spec from a declared name such as "limit" or "limit?"."""
        has_default = default is not NO_DEFAULT
        return cls(
            name=name,
            type=type_name,
            optional=name.endswith(Config.optional_marker()) or has_default,
            default=default if has_default else None,
        )


class Contract:
    """
    Ordered parameter list bound to a type registry.

    Builder methods are resolved from the registry on attribute access, so a
    type registered after this contract was created is still available.
    Type names that collide with Contract's own attributes (param, wrap,
    parse, ...) are reachable through param().
    """

    def __init__(
        self,
        params: Sequence[ParameterSpec] = (),
        registry: Optional[TypeRegistry] = None,
    ):
        self._params: Tuple[ParameterSpec, ...] = tuple(params)
        self._registry = registry if registry is not None else DEFAULT_REGISTRY

    @property
    def params(self) -> Tuple[ParameterSpec, ...]:
        return self._params

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def required_count(self) -> int:
        return required_count(self._params)

    def param(self, type_name: str, name: str, default: Any = NO_DEFAULT) -> 'Contract':
        """
        Return a new contract with one more parameter appended.

        Raises:
            ConfigurationError: If type_name is not registered
        """
        if type_name not in self._registry:
            raise ConfigurationError(type_name)
        spec = ParameterSpec.declare(name, type_name, default)
        return Contract(self._params + (spec,), self._registry)

    def __getattr__(self, type_name: str) -> Callable[..., 'Contract']:
        # Private and dunder lookups (copy, pickle, repr helpers) never name types
        if type_name.startswith('_') or type_name not in self._registry:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute or registered type '{type_name}'"
            )

        def append(name: str, default: Any = NO_DEFAULT) -> 'Contract':
            return self.param(type_name, name, default)

        append.__name__ = type_name
        append.__qualname__ = f"{type(self).__name__}.{type_name}"
        return append

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._registry.names()))

    # -- inspection ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._params)

    def __iter__(self) -> Iterator[ParameterSpec]:
        return iter(self._params)

    def __getitem__(self, index):
        return self._params[index]

    def __repr__(self) -> str:
        marker = Config.optional_marker()
        inner = ', '.join(
            f"{p.type} {p.name}{marker if p.optional else ''}" for p in self._params
        )
        return f"Contract({inner})"

    def callback_index(self) -> Optional[int]:
        """Position of the first "callback" parameter, or None."""
        for i, spec in enumerate(self._params):
            if spec.type == 'callback':
                return i
        return None

    def has_callback(self) -> bool:
        return self.callback_index() is not None

    def describe(self) -> List[dict]:
        """Plain-dict view of the parameters, for documentation generators."""
        return [spec.model_dump() for spec in self._params]

    # -- use ----------------------------------------------------------------

    def parse(self, payload: Any) -> ParseResult:
        """Validate a payload without dispatching. See validate.parse()."""
        return parse(self, payload)

    def wrap(self, fn: Callable, mode: Optional[FailureMode] = None) -> ContractWrapper:
        """
        Bind this contract to `fn`.

        Also usable as a decorator:

            @expects.array('items').callback('done').wrap
            def process(items, done):
                ...
        """
        return ContractWrapper(self, fn, mode=mode)


class ContractFactory:
    """
    Entry point that starts new contracts: `expects.<type>(name, default)`.

    Bound to one registry; pass a custom TypeRegistry for isolated setups.
    """

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self._registry = registry if registry is not None else DEFAULT_REGISTRY

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def empty(self) -> Contract:
        """A contract with no parameters."""
        return Contract(registry=self._registry)

    def param(self, type_name: str, name: str, default: Any = NO_DEFAULT) -> Contract:
        return self.empty().param(type_name, name, default)

    def __getattr__(self, type_name: str) -> Callable[..., Contract]:
        if type_name.startswith('_'):
            raise AttributeError(type_name)
        return getattr(self.empty(), type_name)

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._registry.names()))


# Factory bound to the default registry
expects = ContractFactory()
