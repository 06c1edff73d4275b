"""
Value formatters for the object printer.

Renders the leaves of a printed object graph: null tokens, quoted text, cycle markers,
terminal scalars in their default textual form and locale-aware numbers and dates.
Also provides fmt_type() and fmt_value() used in exception messages across the package.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import datetime as dt
import math
import numbers

from decimal import Decimal
from enum import Enum
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal, format_scientific

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

# Floats at or above this magnitude keep their repr, e.g. 1e+16
_INTEGRAL_FLOAT_LIMIT = 1e16


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_null(null: str = "null") -> str:
    """Return the null literal token."""
    return null


def fmt_text(text: str, quote: str = '"') -> str:
    """
    Wrap text in quotes.

    Embedded quotes and newlines are NOT escaped, the output is for reading, not for parsing.

    Examples:
        >>> fmt_text("Alexandra")
        '"Alexandra"'
        >>> fmt_text('say "hi"')
        '"say "hi""'
    """
    return f"{quote}{text}{quote}"


def fmt_cyclic(obj: Any, template: str = "Cyclic reference detected ({type_name})",
               fully_qualified: bool = False) -> str:
    """
    Return the marker printed instead of an object already present on the active path.

    Examples:
        >>> fmt_cyclic([])
        'Cyclic reference detected (list)'
    """
    return template.format(type_name=class_name(obj, fully_qualified=fully_qualified))


def fmt_scalar(obj: Any) -> str:
    """
    Default textual form of a terminal value.

    Rules:
        - Enum members print their member name
        - Integral finite floats print without a fractional part, 152.0 -> '152'
        - Everything else prints via str()

    Examples:
        >>> fmt_scalar(52)
        '52'
        >>> fmt_scalar(152.0)
        '152'
        >>> fmt_scalar(180.5)
        '180.5'
    """
    if isinstance(obj, Enum):
        return obj.name
    if type(obj) is float and math.isfinite(obj) and obj.is_integer() and abs(obj) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(obj))
    return str(obj)


def supports_locale(obj: Any) -> bool:
    """
    Check whether obj has a locale-aware textual form.

    Real numbers (except bool), Decimals, dates, datetimes and times are locale-aware.
    """
    if isinstance(obj, bool):
        return False
    if isinstance(obj, (dt.date, dt.time)):
        return True
    return isinstance(obj, (numbers.Real, Decimal))


def fmt_localized(obj: Any, locale: Locale | str) -> str:
    """
    Format a locale-aware value for the given locale.

    Numbers are printed without group separators and without rounding to the locale pattern,
    so only the decimal symbol changes between locales. Floats which repr() shows in exponent
    form keep it, in the locale scientific pattern: 1e+20 -> 1E20. Dates and times use the
    locale's medium format.

    Raises:
        TypeError: If obj does not support locale-aware formatting.

    Examples:
        >>> fmt_localized(180.5, "ru_RU")
        '180,5'
        >>> fmt_localized(180.5, "en_US")
        '180.5'
    """
    if not supports_locale(obj):
        raise TypeError(f"locale-aware formatting not supported for {fmt_type(obj)}")

    # datetime is a subclass of date, check it first
    if isinstance(obj, dt.datetime):
        return format_datetime(obj, locale=locale)
    if isinstance(obj, dt.date):
        return format_date(obj, locale=locale)
    if isinstance(obj, dt.time):
        return format_time(obj, locale=locale)

    if not isinstance(obj, (int, float, Decimal)):
        # Fractions and foreign numeric scalars go through float
        obj = float(obj)
    if isinstance(obj, float) and not math.isfinite(obj):
        return fmt_scalar(obj)
    if isinstance(obj, float) and "e" in repr(obj):
        # Same magnitudes that repr() prints in exponent form, e.g. 1e+20 or 1e-07
        return format_scientific(obj, locale=locale, decimal_quantization=False)
    return format_decimal(obj, locale=locale, group_separator=False, decimal_quantization=False)


def fmt_type(obj: Any, fully_qualified: bool = False) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj, fully_qualified=fully_qualified)}>"


def fmt_value(obj: Any, max_repr: int = 120) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Examples:
        >>> fmt_value(-1)
        '<int: -1>'
    """
    repr_ = _safe_repr(obj)
    if max_repr > 0 and len(repr_) > max_repr:
        repr_ = repr_[:max_repr] + "..."
    return f"<{class_name(obj)}: {repr_}>"


# Private Methods ------------------------------------------------------------------------------------------------------

def _safe_repr(obj) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        repr_ = repr(obj)
    except Exception as e:
        # Fallback for broken __repr__: show type and exception info
        exc_type = type(e).__name__
        repr_ = f"<{type(obj).__name__} object (repr failed: {exc_type})>"
    return repr_
