"""
Type Registry - maps type names to validating predicates.

Each contract parameter names a type; the registry resolves that name to a
`(value) -> bool` predicate at validation time.

Usage:
    from argcontracts.registry import register_type

    register_type('int', lambda v: isinstance(v, int) and not isinstance(v, bool))
    register_type({'even': lambda v: v % 2 == 0})

Registration is a setup-time activity. The registry is plain shared state with
no locking: registering a type while another thread validates against that
same type is a data race the caller must avoid (finish registration before
first use).
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .types import BUILTIN_TYPES

logger = logging.getLogger('argcontracts.registry')


Predicate = Callable[[Any], bool]


class ConfigurationError(LookupError):
    """
    Raised when a contract references a type name that is not registered.

    This is a broken contract definition, not bad caller input, so it is
    raised instead of being returned as a ValidationFailure.
    """

    def __init__(self, type_name: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown argument type: '{type_name}'")
        self.type_name = type_name


class TypeRegistry:
    """
    Mutable mapping of type name -> predicate.

    Entries can be added or overwritten but never removed.
    """

    def __init__(self, include_builtins: bool = True):
        self._predicates: Dict[str, Predicate] = {}
        if include_builtins:
            register_builtin_types(self)

    def register(
        self,
        name_or_types: Union[str, Mapping],
        predicate: Optional[Predicate] = None,
    ) -> 'TypeRegistry':
        """
        Install one type, or many from a mapping.

        Mapping entries are installed one at a time in iteration order; an
        invalid entry stops the loop but leaves earlier entries in place.

        Returns:
            The registry itself, for chaining.

        Raises:
            TypeError: If a name is not a string or a predicate is not callable
        """
        if isinstance(name_or_types, Mapping):
            if predicate is not None:
                raise TypeError("predicate must be omitted when registering a mapping")
            for name, fn in name_or_types.items():
                self._install(name, fn)
        else:
            self._install(name_or_types, predicate)
        return self

    def _install(self, name: Any, predicate: Any) -> None:
        if not isinstance(name, str) or not name:
            raise TypeError(f"Type name must be a non-empty string, got {name!r}")
        if not callable(predicate):
            raise TypeError(f"Predicate for type '{name}' must be callable")

        if name in self._predicates and name in BUILTIN_TYPES:
            logger.warning(f"Overriding built-in argument type '{name}'")
        self._predicates[name] = predicate
        logger.debug(f"Registered argument type '{name}'")

    def get(self, name: str) -> Predicate:
        """
        Resolve a type name to its predicate.

        Raises:
            ConfigurationError: If the name was never registered
        """
        try:
            return self._predicates[name]
        except KeyError:
            raise ConfigurationError(name) from None

    def test(self, name: str, value: Any) -> bool:
        """Run the predicate registered under `name` against `value`."""
        return bool(self.get(name)(value))

    def names(self) -> List[str]:
        """Registered type names in registration order."""
        return list(self._predicates.keys())

    def as_dict(self) -> Dict[str, Predicate]:
        """Snapshot copy of the registry contents."""
        return dict(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._predicates))

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"TypeRegistry({', '.join(self._predicates)})"


def register_builtin_types(registry: TypeRegistry) -> TypeRegistry:
    """Install the bundled predicates (array, bool/boolean, callback, ...)."""
    return registry.register(BUILTIN_TYPES)


# Global registry instance
DEFAULT_REGISTRY = TypeRegistry()


def register_type(
    name_or_types: Union[str, Mapping],
    predicate: Optional[Predicate] = None,
) -> TypeRegistry:
    """Register one type (or a mapping of types) on the default registry."""
    return DEFAULT_REGISTRY.register(name_or_types, predicate)


def get_predicate(name: str) -> Predicate:
    """Get predicate for a type name from the default registry."""
    return DEFAULT_REGISTRY.get(name)


def list_types() -> List[str]:
    """Get list of type names registered on the default registry."""
    return DEFAULT_REGISTRY.names()
