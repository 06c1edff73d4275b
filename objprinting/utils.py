"""
Objprinting utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.
    This is the name printed in composite and collection header lines.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix the module name for non-builtin objects or classes.
            Builtins always print their bare name, so headers read `list`, never `builtins.list`.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name([], fully_qualified=True)
        'list'
        >>> class Person: ...
        >>> class_name(Person())
        'Person'
        >>> class_name(Person, fully_qualified=True)
        'objprinting.utils.Person'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    module = getattr(cls, "__module__", None)

    if fully_qualified and module not in (None, "builtins"):
        return module + "." + cls.__name__
    return cls.__name__
