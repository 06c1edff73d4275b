"""
Object printer: renders an object graph into indented, human-readable text.

Designed for diagnostics and snapshot output, one-way only (object -> text).
Composite objects print a header line with the type name followed by one line per public
member; collections print indexed or keyed entries; self-references print an inline marker.

Example:
    >>> @dataclass
    ... class Person:
    ...     name: str
    ...     height: float
    ...     age: int
    >>> print(print_to_string(Person("Alexandra", 152.0, 52)), end="")
    Person
        name = "Alexandra"
        height = 152
        age = 52
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging

from contextlib import contextmanager
from dataclasses import dataclass, field, replace as dataclasses_replace
from typing import Any, Callable, Generic, Iterator, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import ValueKind, classify
from .collections import print_collection
from .config import Formatter, PrintingConfig, TOwner
from .errors import SerializerError
from .formatters import fmt_cyclic, fmt_localized, fmt_null, fmt_scalar, fmt_text, fmt_type, supports_locale
from .members import MemberInfo, get_members
from .utils import class_name

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrintOptions:
    """
    Text layout of printed output.

    Attributes:
        indent: Indentation unit, repeated depth + 1 times before member and entry lines.
        newline: Line terminator.
        null: Literal printed for None.
        quote: Quote wrapped around text values.
        cyclic: Template of the cycle marker, {type_name} is replaced with the type name.
        fully_qualified: Print module-qualified type names in headers and cycle markers.
        skip_failing_properties: Skip properties whose getter raises instead of aborting the print call.
    """
    indent: str = "\t"
    newline: str = "\n"
    null: str = "null"
    quote: str = '"'
    cyclic: str = "Cyclic reference detected ({type_name})"
    fully_qualified: bool = False
    skip_failing_properties: bool = False

    def __post_init__(self):
        for name in ("indent", "newline", "null", "quote", "cyclic"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"PrintOptions.{name} must be a str, got {fmt_type(val)}")
        if not self.newline:
            raise ValueError("PrintOptions.newline must be a non-empty str")
        for name in ("fully_qualified", "skip_failing_properties"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"PrintOptions.{name} must be a bool, got {fmt_type(val)}")

    @classmethod
    def default(cls) -> Self:
        """Tab indentation, LF line terminator."""
        return cls()

    @classmethod
    def spaces(cls, width: int = 4) -> Self:
        """Indentation with width spaces instead of a tab."""
        if isinstance(width, bool) or not isinstance(width, int):
            raise TypeError(f"width must be an int, got {fmt_type(width)}")
        if width < 0:
            raise ValueError(f"width must be >=0, but got {width}")
        return cls(indent=" " * width)

    def merge(self, **kwargs) -> Self:
        """Return a copy with the given attributes replaced."""
        return dataclasses_replace(self, **kwargs)


@dataclass
class VisitContext:
    """
    State of one top-level print call.

    Holds identities of the objects on the active recursion path (ancestors of the node
    being printed). An object is an ancestor only while its own subtree is printed, so the
    same object may appear again elsewhere as a sibling without being reported as a cycle.
    """
    ancestors: set[int] = field(default_factory=set)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self.ancestors

    @contextmanager
    def entered(self, obj: Any) -> Iterator[None]:
        """Mark obj as an ancestor for the duration of the block."""
        self.ancestors.add(id(obj))
        try:
            yield
        finally:
            self.ancestors.discard(id(obj))


class ObjectPrinter(Generic[TOwner]):
    """
    Recursive printing engine.

    The printer holds no per-call state, the visit context is passed through the recursion,
    so one instance can serve concurrent print calls. The configuration must not be
    modified while printing.

    Processing Order (visit):
        1. None -> null literal
        2. Object on the active path -> cycle marker, no recursion
        3. Text -> quoted text
        4. Collection -> header and entries, see print_collection()
        5. Terminal -> type formatter > locale-aware form > default text
        6. Composite -> header and one line per member, fields first, then properties

    Member Precedence:
        None -> member formatter -> text truncation -> type formatter -> visit()
    """

    def __init__(self, config: PrintingConfig[TOwner] | None = None, options: PrintOptions | None = None):
        if not isinstance(config, (PrintingConfig, type(None))):
            raise TypeError(f"config must be a PrintingConfig instance, but found {fmt_type(config)}")
        if not isinstance(options, (PrintOptions, type(None))):
            raise TypeError(f"options must be a PrintOptions instance, but found {fmt_type(options)}")
        self._config = config if config is not None else PrintingConfig()
        self._options = options if options is not None else PrintOptions()

    @property
    def config(self) -> PrintingConfig[TOwner]:
        return self._config

    @property
    def options(self) -> PrintOptions:
        return self._options

    def print_to_string(self, obj: TOwner) -> str:
        """
        Print an object graph into text.

        Raises:
            SerializerError: If a registered formatter raises or returns a non-str value.
            Exception: Whatever a member getter raises, unless options.skip_failing_properties is set
                and the member is a property.
        """
        logger.debug("Printing %s", class_name(obj))
        return self.visit(obj, 0, VisitContext())

    def visit(self, obj: Any, depth: int, ctx: VisitContext) -> str:
        """Print one node at the given depth, result ends with a newline."""
        if obj is None:
            return self._line(fmt_null(self._options.null))

        if obj in ctx:
            logger.debug("Cyclic reference to %s at depth %d", class_name(obj), depth)
            return self._line(fmt_cyclic(obj, self._options.cyclic, self._options.fully_qualified))

        with ctx.entered(obj):
            kind = classify(obj, self._config)

            if kind == ValueKind.TEXT:
                return self._line(fmt_text(obj, self._options.quote))
            if kind == ValueKind.COLLECTION:
                return print_collection(self, obj, depth, ctx)
            if kind == ValueKind.TERMINAL:
                return self._line(self._format_value(obj))
            return self._print_object(obj, depth, ctx)

    # Private Methods -------------------------------

    def _print_object(self, obj: Any, depth: int, ctx: VisitContext) -> str:
        indent = self._options.indent * (depth + 1)
        parts = [class_name(obj, fully_qualified=self._options.fully_qualified) + self._options.newline]

        for member in get_members(obj):
            if self._config.is_excluded(member.name, member.declared_type):
                continue

            try:
                value = member.get_value(obj)
            except Exception as exc:
                if not (member.is_property and self._options.skip_failing_properties):
                    raise
                logger.debug("Skipping property %s.%s, getter raised %s",
                             class_name(obj), member.name, fmt_type(exc))
                continue  # Skip if instance property getter raises exception

            # Unannotated members are matched by their runtime type
            if member.declared_type is None and self._config.is_excluded(member.name, type(value)):
                continue

            parts.append(f"{indent}{member.name} = {self._serialize_member(member, value, depth, ctx)}")

        return "".join(parts)

    def _serialize_member(self, member: MemberInfo, value: Any, depth: int, ctx: VisitContext) -> str:
        if value is None:
            return self._line(fmt_null(self._options.null))

        if (formatter := self._config.get_member_formatter(member.name)) is not None:
            return self._line(_apply_formatter(formatter, value, f"member '{member.name}'"))

        if classify(value) == ValueKind.TEXT and (max_length := self._config.get_trim_length(member.name)) is not None:
            return self._line(fmt_text(value[:max_length], self._options.quote))

        if (formatter := self._config.get_type_formatter(type(value))) is not None:
            return self._line(_apply_formatter(formatter, value, f"type {fmt_type(value)}"))

        return self.visit(value, depth + 1, ctx)

    def _format_value(self, obj: Any) -> str:
        """Terminal value text: type formatter > locale-aware form > default text."""
        typ = type(obj)
        if (formatter := self._config.get_type_formatter(typ)) is not None:
            return _apply_formatter(formatter, obj, f"type {fmt_type(typ)}")

        locale = self._config.get_locale(typ)
        if locale is not None and supports_locale(obj):
            return fmt_localized(obj, locale)

        return fmt_scalar(obj)

    def _line(self, text: str) -> str:
        return text + self._options.newline


# Methods --------------------------------------------------------------------------------------------------------------

def print_to_string(obj: TOwner,
                    configure: Callable[[PrintingConfig[TOwner]], Any] | None = None,
                    *,
                    options: PrintOptions | None = None) -> str:
    """
    Print obj with an optional configuration callback.

    The callback receives a fresh PrintingConfig owned by type(obj) and may chain builder calls;
    its return value is ignored unless it is a PrintingConfig.

    Examples:
        >>> print_to_string(person, lambda c: c.excluding(uuid.UUID).printing(int).using(lambda i: f"{i} years"))
        'Person\\n\\tname = "Alexandra"\\n\\theight = 152\\n\\tage = 52 years\\n'
    """
    config = PrintingConfig(type(obj))
    if configure is not None:
        result = configure(config)
        if isinstance(result, PrintingConfig):
            config = result
    return ObjectPrinter(config, options=options).print_to_string(obj)


# Private Methods ------------------------------------------------------------------------------------------------------

def _apply_formatter(formatter: Formatter, value: Any, target: str) -> str:
    try:
        text = formatter(value)
    except Exception as exc:
        raise SerializerError(f"formatter for {target} failed on {fmt_type(value)}: {exc}") from exc
    if not isinstance(text, str):
        raise SerializerError(f"formatter for {target} must return str, got {fmt_type(text)}")
    return text
