"""
Argument parsing against a contract.

Two payload shapes are accepted:
- Positional: a sequence of values aligned by index with the contract
- Keyed: a single mapping of parameter name -> value

Both paths return the same thing on success: a list of values in declared
parameter order, exactly one per parameter, with defaults filled in. On failure
they return (never raise) a ValidationFailure so the caller decides how to
deliver it. Validation is fail-fast: the first bad parameter wins.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Tuple, Union

from .registry import TypeRegistry
from .types import is_plain_mapping

if TYPE_CHECKING:
    from .contract import Contract, ParameterSpec


class FailureKind(Enum):
    """Why a payload was rejected."""
    COUNT_MISMATCH = "count_mismatch"
    TYPE_MISMATCH = "type_mismatch"
    MISSING_PARAMETER = "missing_parameter"


class ParseMode(Enum):
    POSITIONAL = "positional"
    KEYED = "keyed"


@dataclass
class ValidationFailure(Exception):
    """Returned when call arguments do not satisfy a contract."""
    message: str
    kind: FailureKind
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self):
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


ParseResult = Union[List[Any], ValidationFailure]


def is_failure(result: Any) -> bool:
    """True if `result` is a ValidationFailure rather than parsed values."""
    return isinstance(result, ValidationFailure)


def parse(contract: 'Contract', payload: Any) -> ParseResult:
    """
    Validate a raw call payload against a contract.

    Args:
        contract: Contract supplying the parameter specs and type registry
        payload: Sequence of positional values, or a mapping of name -> value

    Returns:
        List of values in contract order, or a ValidationFailure

    Raises:
        ConfigurationError: If a parameter's type is not registered
        TypeError: If payload is neither a sequence nor a mapping
    """
    params = contract.params
    mode, values = select_mode(params, payload)
    if mode is ParseMode.KEYED:
        return parse_keyed(params, values, contract.registry)
    return parse_positional(params, values, contract.registry)


def select_mode(
    params: Sequence['ParameterSpec'],
    payload: Any,
) -> Tuple[ParseMode, Any]:
    """
    Decide whether a payload is positional or keyed.

    A lone mapping is a keyed bundle. A one-element sequence holding a mapping
    is also a keyed bundle, unless the first parameter is typed "object", in
    which case that mapping is the positional value for it. Only the first
    parameter is consulted.
    """
    if is_plain_mapping(payload):
        return ParseMode.KEYED, payload

    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise TypeError(
            f"Payload must be a sequence of arguments or a mapping, "
            f"got {type(payload).__name__}"
        )

    if len(payload) == 1 and is_plain_mapping(payload[0]):
        first_is_object = bool(params) and params[0].type == 'object'
        if not first_is_object:
            return ParseMode.KEYED, payload[0]

    return ParseMode.POSITIONAL, payload


def required_count(params: Sequence['ParameterSpec']) -> int:
    return sum(1 for spec in params if not spec.optional)


def _count_mismatch(required: int, found: int) -> ValidationFailure:
    return ValidationFailure(
        message=f"Incorrect number of parameters. Expected {required} found {found}.",
        kind=FailureKind.COUNT_MISMATCH,
        details={"expected": required, "found": found},
    )


def parse_positional(
    params: Sequence['ParameterSpec'],
    args: Sequence[Any],
    registry: TypeRegistry,
) -> ParseResult:
    """
    Validate values aligned by index.

    A value failing its predicate is replaced by the default only when the
    parameter is optional and the value is None or was not supplied.
    Surplus values beyond the contract are dropped.
    """
    required = required_count(params)
    if len(args) < required:
        return _count_mismatch(required, len(args))

    parsed = []
    for i, spec in enumerate(params):
        val = args[i] if i < len(args) else None

        if registry.test(spec.type, val):
            parsed.append(val)
        elif spec.optional and val is None:
            parsed.append(spec.default)
        else:
            return ValidationFailure(
                message=f'Expected {spec.type} for "{spec.name}"',
                kind=FailureKind.TYPE_MISMATCH,
                details={"param": spec.name, "expected": spec.type},
            )
    return parsed


def parse_keyed(
    params: Sequence['ParameterSpec'],
    options: Mapping,
    registry: TypeRegistry,
) -> ParseResult:
    """
    Validate a mapping of name -> value.

    Every key counts toward the required total, including keys that match no
    parameter. A key that is present is always validated, even if its value
    is None.
    """
    required = required_count(params)
    if len(options) < required:
        return _count_mismatch(required, len(options))

    parsed = []
    for spec in params:
        if spec.name in options:
            val = options[spec.name]
            if not registry.test(spec.type, val):
                return ValidationFailure(
                    message=(
                        f'Parameter "{spec.name}" is not the correct type. '
                        f'Expected type "{spec.type}"'
                    ),
                    kind=FailureKind.TYPE_MISMATCH,
                    details={"param": spec.name, "expected": spec.type},
                )
            parsed.append(val)
        elif spec.optional:
            parsed.append(spec.default)
        else:
            return ValidationFailure(
                message=f"Missing parameter: {spec.name}",
                kind=FailureKind.MISSING_PARAMETER,
                details={"param": spec.name},
            )
    return parsed
