"""
ContractWrapper - applies a contract to every call of a function.

On each call the wrapper:
1. Collects the raw arguments into a payload (positional tuple, or a keyed
   mapping when keyword arguments are used)
2. Parses the payload against the contract
3. On success, calls the target with the normalized values in contract order
4. On failure, delivers the ValidationFailure:
   - to the call's "callback" argument, if the contract has a callback
     parameter and the caller passed something callable for it
   - otherwise back to the caller (returned, or raised in RAISE mode)

Wrappers are descriptors, so wrapping a method keeps `self` out of validation:

    class Cache:
        @expects.string('key').callback('done').wrap
        def fetch(self, key, done):
            ...
"""

import functools
import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from .config import Config
from .validate import ValidationFailure, is_failure, parse

if TYPE_CHECKING:
    from .contract import Contract, ParameterSpec

logger = logging.getLogger('argcontracts.wrapper')


class FailureMode(Enum):
    """What a wrapper does with a failure no callback picked up."""
    RETURN = "return"  # Hand the failure back as the call's return value (default)
    RAISE = "raise"    # Raise the ValidationFailure


def _get_default_mode() -> FailureMode:
    """Get failure mode from environment."""
    return FailureMode.RAISE if Config.failure_mode_name() == 'raise' else FailureMode.RETURN


class ContractWrapper:
    """Callable that validates arguments before delegating to `fn`."""

    def __init__(self, contract: 'Contract', fn: Callable, mode: Optional[FailureMode] = None):
        if not callable(fn):
            raise TypeError(f"Cannot wrap non-callable {fn!r}")
        # Copy metadata first: update_wrapper merges fn.__dict__ into ours
        functools.update_wrapper(self, fn)
        self.contract = contract
        self.fn = fn
        self.mode = mode if mode is not None else _get_default_mode()

    @property
    def expects(self) -> Tuple['ParameterSpec', ...]:
        """The ordered parameter specs this wrapper enforces."""
        return self.contract.params

    def __call__(self, *args, **kwargs):
        return self._invoke((), args, kwargs)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return BoundContractWrapper(self, instance)

    def __repr__(self) -> str:
        name = getattr(self.fn, '__qualname__', repr(self.fn))
        return f"<ContractWrapper {name} {self.contract!r}>"

    def _invoke(self, receiver: Tuple[Any, ...], args: Tuple[Any, ...], kwargs: Dict[str, Any]):
        payload = self._collect_payload(args, kwargs)
        result = parse(self.contract, payload)
        if is_failure(result):
            return self._deliver_failure(result, args, kwargs)
        return self.fn(*receiver, *result)

    def _collect_payload(self, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        """
        Build the parse payload from the raw call.

        Positional-only calls pass the tuple through unchanged so the usual
        positional/keyed detection applies. Any keyword argument turns the
        call into a keyed payload, with positionals bound to parameter names
        in contract order.
        """
        if not kwargs:
            return args
        if not args:
            return dict(kwargs)

        params = self.contract.params
        if len(args) > len(params):
            raise TypeError(
                f"{self._fn_name()}() takes {len(params)} positional argument(s) "
                f"but {len(args)} were given"
            )
        bundle = {spec.name: value for spec, value in zip(params, args)}
        for key, value in kwargs.items():
            if key in bundle:
                raise TypeError(f"{self._fn_name()}() got multiple values for argument '{key}'")
            bundle[key] = value
        return bundle

    def _deliver_failure(
        self,
        failure: ValidationFailure,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Optional[ValidationFailure]:
        callback = self._callback_from_arguments(args, kwargs)
        if callback is not None:
            self._log_failure(failure, delivery="callback")
            callback(failure)
            return None

        if self.mode == FailureMode.RAISE:
            self._log_failure(failure, delivery="raise")
            raise failure

        self._log_failure(failure, delivery="return")
        return failure

    def _callback_from_arguments(
        self,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Optional[Callable]:
        """
        Find the caller's callback in the *raw* arguments.

        Looks at the position of the contract's first callback parameter, or
        at its name when it was passed by keyword. Non-callables are ignored.
        """
        index = self.contract.callback_index()
        if index is None:
            return None
        if index < len(args):
            candidate = args[index]
        else:
            candidate = kwargs.get(self.contract.params[index].name)
        return candidate if callable(candidate) else None

    def _fn_name(self) -> str:
        return getattr(self.fn, '__name__', 'function')

    def _log_failure(self, failure: ValidationFailure, delivery: str) -> None:
        """Log contract failure for observability."""
        logger.log(
            Config.failure_log_level(),
            f"Argument contract failure: function={self._fn_name()} "
            f"kind={failure.kind.value} delivery={delivery} message={failure.message}",
            extra={
                "event": "argument_contract_failure",
                "function": self._fn_name(),
                "kind": failure.kind.value,
                "delivery": delivery,
                "details": failure.details,
            }
        )


class BoundContractWrapper:
    """A ContractWrapper accessed through an instance; passes the receiver through."""

    def __init__(self, wrapper: ContractWrapper, instance: Any):
        self.__wrapped__ = wrapper.fn
        self._wrapper = wrapper
        self._instance = instance

    @property
    def expects(self) -> Tuple['ParameterSpec', ...]:
        return self._wrapper.expects

    @property
    def contract(self) -> 'Contract':
        return self._wrapper.contract

    def __call__(self, *args, **kwargs):
        return self._wrapper._invoke((self._instance,), args, kwargs)

    def __repr__(self) -> str:
        return f"<bound {self._wrapper!r} of {self._instance!r}>"


def set_failure_mode(wrapper: ContractWrapper, mode: FailureMode) -> None:
    """
    Set failure mode for a single wrapper.

    Useful for gradual rollout (e.g., switch one function to RAISE at a time).
    """
    wrapper.mode = mode
