"""
Runtime argument contracts.

Declare a function's parameters once (name, type, optional/default), then
validate calls made positionally or with a single keyed bundle.
"""

from .registry import (
    DEFAULT_REGISTRY,
    ConfigurationError,
    TypeRegistry,
    get_predicate,
    list_types,
    register_builtin_types,
    register_type,
)
from .contract import (
    NO_DEFAULT,
    Contract,
    ContractFactory,
    ParameterSpec,
    expects,
)
from .validate import (
    FailureKind,
    ParseMode,
    ValidationFailure,
    is_failure,
    parse,
)
from .wrapper import ContractWrapper, FailureMode, set_failure_mode

__all__ = [
    'DEFAULT_REGISTRY',
    'ConfigurationError',
    'TypeRegistry',
    'get_predicate',
    'list_types',
    'register_builtin_types',
    'register_type',
    'NO_DEFAULT',
    'Contract',
    'ContractFactory',
    'ParameterSpec',
    'expects',
    'FailureKind',
    'ParseMode',
    'ValidationFailure',
    'is_failure',
    'parse',
    'ContractWrapper',
    'FailureMode',
    'set_failure_mode',
]
