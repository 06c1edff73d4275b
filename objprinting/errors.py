"""
Objprinting exceptions.
"""


# Classes --------------------------------------------------------------------------------------------------------------

class ObjectPrintingError(Exception):
    """Base class for all errors raised by objprinting."""


class InvalidSelectorError(ObjectPrintingError, ValueError):
    """
    A member selector does not resolve to a direct member access on the owner type.

    Raised at configuration time, before any printing occurs.
    """


class SerializerError(ObjectPrintingError, RuntimeError):
    """
    A registered formatter failed while printing.

    The original exception is chained as ``__cause__``. The whole print call is aborted.
    """
