"""
Value classification for the object printer.

Every visited value falls into exactly one ValueKind, checked in this order:
null, text, collection, terminal, composite.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime as dt
import numbers
import uuid

from decimal import Decimal
from enum import Enum, unique
from fractions import Fraction
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import PrintingConfig

# Values of these exact types are printed directly, never expanded into members or entries
TERMINAL_TYPES = frozenset({
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    dt.date,
    dt.datetime,
    dt.time,
    dt.timedelta,
    uuid.UUID,
})


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ValueKind(str, Enum):
    """Classification of a visited value."""
    NULL = "null"
    TEXT = "text"
    TERMINAL = "terminal"
    COLLECTION = "collection"
    COMPOSITE = "composite"


# Methods --------------------------------------------------------------------------------------------------------------

def is_terminal_type(typ: type) -> bool:
    """
    Check whether values of typ are terminal scalars.

    Terminal types are the fixed TERMINAL_TYPES set, any Enum subclass and any other
    numbers.Number type such as numpy scalars.

    Examples:
        >>> is_terminal_type(int)
        True
        >>> is_terminal_type(list)
        False
    """
    if typ in TERMINAL_TYPES:
        return True
    try:
        return issubclass(typ, (Enum, numbers.Number))
    except TypeError:
        # Generic aliases and other non-class objects
        return False


def classify(obj: Any, config: "PrintingConfig | None" = None) -> ValueKind:
    """
    Classify a value for printing.

    Rules:
        - NULL: obj is None
        - TEXT: obj is a str that is not an Enum member, regardless of registered formatters
        - COLLECTION: obj is iterable and its type is not terminal
        - TERMINAL: type is terminal, or a type formatter is registered for the exact type
        - COMPOSITE: anything else

    Examples:
        >>> classify(None).value
        'null'
        >>> classify("abc").value
        'text'
        >>> classify([1, 2]).value
        'collection'
        >>> classify(3.14).value
        'terminal'
    """
    if obj is None:
        return ValueKind.NULL

    if isinstance(obj, str) and not isinstance(obj, Enum):
        return ValueKind.TEXT

    typ = type(obj)
    terminal = is_terminal_type(typ)

    if isinstance(obj, abc.Iterable) and not terminal:
        return ValueKind.COLLECTION

    if terminal or (config is not None and config.has_type_formatter(typ)):
        return ValueKind.TERMINAL

    return ValueKind.COMPOSITE
