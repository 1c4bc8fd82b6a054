"""
Built-in type predicates.

Each predicate is a plain `(value) -> bool` function. They are registered
under their type names by registry.register_builtin_types(); nothing here
knows about contracts.
"""

import numbers
import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Callable, Dict


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_callable(value: Any) -> bool:
    return callable(value)


def is_date(value: Any) -> bool:
    # datetime is a date subclass
    return isinstance(value, date)


def is_number(value: Any) -> bool:
    """
    Numeric check that rejects bools.

    bool is an int subclass in Python, so `isinstance(True, int)` holds;
    a contract asking for a number should not accept True/False.
    """
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_object(value: Any) -> bool:
    """
    Anything that is not None and not a scalar.

    Mappings, sequences, callables, dates and arbitrary instances pass;
    str, bytes, numbers and bools do not.
    """
    if value is None:
        return False
    return not isinstance(value, (str, bytes, numbers.Number, bool))


def is_regex(value: Any) -> bool:
    return isinstance(value, re.Pattern)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_plain_mapping(value: Any) -> bool:
    """True for dict-like values (used by keyed-mode detection)."""
    return isinstance(value, Mapping)


BUILTIN_TYPES: Dict[str, Callable[[Any], bool]] = {
    'array': is_array,
    'bool': is_boolean,
    'boolean': is_boolean,
    'callback': is_callable,
    'date': is_date,
    'func': is_callable,
    'number': is_number,
    'object': is_object,
    'regex': is_regex,
    'string': is_string,
}
