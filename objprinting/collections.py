"""
Collection printing: indexed sequence entries and keyed map entries.

Every element, key and value is printed back through the printer's visit(), so nested
collections, composites and cycles inside collections are handled by the same rules.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import logging

from typing import Any, Iterable, TYPE_CHECKING

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

if TYPE_CHECKING:
    from .printer import ObjectPrinter, VisitContext

logger = logging.getLogger(__name__)


# Methods --------------------------------------------------------------------------------------------------------------

def is_map_like(obj: Any) -> bool:
    """
    Check whether obj exposes key/value pairs.

    Mappings and dict-like objects with a callable items() method (frozendict, pandas Series,
    custom mapping implementations) are map-like.
    """
    if isinstance(obj, abc.Mapping):
        return True
    return callable(getattr(obj, "items", None))


def print_collection(printer: "ObjectPrinter", obj: Iterable[Any], depth: int, ctx: "VisitContext") -> str:
    """
    Print a collection header followed by its entries.

    Map-like collections print one `[<key>] = <value>` line per item in native iteration order,
    with the key rendered inline. Other iterables print `[<index>] = <element>` lines, indexed from 0.
    A map-like object whose items() does not yield key/value pairs is printed as a sequence.

    Args:
        printer: The printer which owns configuration and visit().
        obj: Collection to print.
        depth: Nesting depth of the collection itself.
        ctx: Visit context of the current top-level print call.

    Returns:
        Header line and entry lines, each terminated with a newline.
    """
    options = printer.options
    indent = options.indent * (depth + 1)

    parts = [class_name(obj, fully_qualified=options.fully_qualified) + options.newline]

    pairs = _map_items(obj) if is_map_like(obj) else None
    if pairs is not None:
        for key, value in pairs:
            key_str = printer.visit(key, depth + 1, ctx).removesuffix(options.newline)
            parts.append(f"{indent}[{key_str}] = {printer.visit(value, depth + 1, ctx)}")
    else:
        for index, item in enumerate(obj):
            parts.append(f"{indent}[{index}] = {printer.visit(item, depth + 1, ctx)}")

    return "".join(parts)


# Private Methods ------------------------------------------------------------------------------------------------------

def _map_items(obj: Any) -> list[tuple[Any, Any]] | None:
    """
    Return key/value pairs of a map-like object, None if its items() does not yield pairs.

    Pairs are collected before printing, so a failing items() never leaves partial output.
    """
    try:
        return [(key, value) for key, value in obj.items()]
    except (TypeError, ValueError, AttributeError):
        # items() exists but doesn't work as expected
        logger.debug("%s.items() does not yield key/value pairs, printing as a sequence", class_name(obj))
        return None
