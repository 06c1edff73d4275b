"""
Printing configuration: exclusion rules, formatters, locales and truncation lengths.

PrintingConfig is the rule store consumed by the printer, and also offers a chainable
builder surface in the style of option classes with add_/remove_ methods:

    >>> config = (
    ...     PrintingConfig(Person)
    ...     .excluding(uuid.UUID)
    ...     .excluding_member(lambda p: p.height)
    ...     .printing(int).using(lambda i: f"{i} years")
    ...     .printing_member(lambda p: p.name).trimmed_to_length(3)
    ... )
    >>> print(config.print_to_string(person))
    Person
        name = "Ale"
        age = 52 years

Member-level rules are keyed by bare member name, so two unrelated types sharing a member
name share the rule. No rule is validated against the owner type, an unknown name or type
never matches anything.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import typing

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

# Third-party ----------------------------------------------------------------------------------------------------------
from babel import Locale

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidSelectorError
from .formatters import fmt_type, fmt_value
from .members import class_members

logger = logging.getLogger(__name__)

TOwner = TypeVar("TOwner")

Formatter = Callable[[Any], str]
Selector = Callable[[Any], Any] | str


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class PrintingConfig(Generic[TOwner]):
    """
    Resolved printing rules for one owner type.

    Attributes:
        owner: Owner type, used to resolve declared member types for member locales.
        excluded_types: Members whose declared type is in this set are not printed.
        excluded_members: Members with these names are not printed.
        type_formatters: Formatters applied to values of the exact runtime type.
        member_formatters: Formatters applied to members with the given name, highest priority.
        locales: Locales used for locale-aware values of the exact runtime type.
        trim_lengths: Maximum text length for members with the given name.

    All add_* methods are last-write-wins on their key and return self for chaining.
    """
    owner: type = object

    excluded_types: set[Any] = field(default_factory=set)
    excluded_members: set[str] = field(default_factory=set)
    type_formatters: dict[type, Formatter] = field(default_factory=dict)
    member_formatters: dict[str, Formatter] = field(default_factory=dict)
    locales: dict[type, Locale] = field(default_factory=dict)
    trim_lengths: dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.owner, type):
            raise TypeError(f"owner must be a type, got {fmt_type(self.owner)}")

    # Builder ---------------------------------------

    def excluding(self, typ: Any) -> "PrintingConfig[TOwner]":
        """Exclude every member declared with the exact type typ."""
        return self.add_excluded_type(typ)

    def excluding_member(self, selector: Selector) -> "PrintingConfig[TOwner]":
        """
        Exclude a member by selector, e.g. lambda p: p.height or "height".

        Raises:
            InvalidSelectorError: If selector is not a direct member access.
        """
        return self.add_excluded_member(resolve_member_name(selector))

    def printing(self, typ: type) -> "TypePrintingConfig[TOwner]":
        """Configure printing of all values of the exact runtime type typ."""
        _validate_type(typ)
        return TypePrintingConfig(self, typ)

    def printing_member(self, selector: Selector, member_type: Any = None) -> "MemberPrintingConfig[TOwner]":
        """
        Configure printing of one member by selector, e.g. lambda p: p.name or "name".

        Args:
            selector: Direct member access on the owner, or a member name.
            member_type: Declared member type; resolved from owner annotations if omitted.

        Raises:
            InvalidSelectorError: If selector is not a direct member access.
        """
        name = resolve_member_name(selector)
        if member_type is None:
            member_type = self.declared_type_of(name)
        return MemberPrintingConfig(self, name, member_type)

    def print_to_string(self, obj: TOwner, options: Any = None) -> str:
        """Print obj with this configuration, see ObjectPrinter."""
        from .printer import ObjectPrinter

        return ObjectPrinter(self, options=options).print_to_string(obj)

    # Store -----------------------------------------

    def add_excluded_type(self, typ: Any) -> "PrintingConfig[TOwner]":
        if not isinstance(typ, type) and typing.get_origin(typ) is None:
            raise TypeError(f"excluded type must be a type or a generic alias, got {fmt_type(typ)}")
        self.excluded_types.add(typ)
        return self

    def remove_excluded_type(self, typ: Any) -> "PrintingConfig[TOwner]":
        self.excluded_types.discard(typ)
        return self

    def add_excluded_member(self, name: str) -> "PrintingConfig[TOwner]":
        _validate_name(name)
        self.excluded_members.add(name)
        return self

    def remove_excluded_member(self, name: str) -> "PrintingConfig[TOwner]":
        self.excluded_members.discard(name)
        return self

    def add_type_formatter(self, typ: type, formatter: Formatter) -> "PrintingConfig[TOwner]":
        _validate_type(typ)
        _validate_formatter(formatter)
        self.type_formatters[typ] = formatter
        return self

    def remove_type_formatter(self, typ: type) -> "PrintingConfig[TOwner]":
        self.type_formatters.pop(typ, None)
        return self

    def add_member_formatter(self, name: str, formatter: Formatter) -> "PrintingConfig[TOwner]":
        _validate_name(name)
        _validate_formatter(formatter)
        self.member_formatters[name] = formatter
        return self

    def remove_member_formatter(self, name: str) -> "PrintingConfig[TOwner]":
        self.member_formatters.pop(name, None)
        return self

    def add_locale(self, typ: type, locale: Locale | str) -> "PrintingConfig[TOwner]":
        _validate_type(typ)
        self.locales[typ] = _parse_locale(locale)
        return self

    def remove_locale(self, typ: type) -> "PrintingConfig[TOwner]":
        self.locales.pop(typ, None)
        return self

    def add_trim_length(self, name: str, max_length: int) -> "PrintingConfig[TOwner]":
        _validate_name(name)
        if isinstance(max_length, bool) or not isinstance(max_length, int):
            raise TypeError(f"max_length must be an int, got {fmt_type(max_length)}")
        if max_length < 0:
            raise ValueError(f"max_length must be >=0, but got {fmt_value(max_length)}")
        self.trim_lengths[name] = max_length
        return self

    def remove_trim_length(self, name: str) -> "PrintingConfig[TOwner]":
        self.trim_lengths.pop(name, None)
        return self

    # Lookups ---------------------------------------

    def is_excluded(self, name: str, declared_type: Any = None) -> bool:
        """Check member exclusion by exact name or exact declared type."""
        if name in self.excluded_members:
            return True
        return declared_type is not None and _safe_contains(self.excluded_types, declared_type)

    def has_type_formatter(self, typ: type) -> bool:
        return typ in self.type_formatters

    def get_type_formatter(self, typ: type) -> Formatter | None:
        return self.type_formatters.get(typ)

    def get_member_formatter(self, name: str) -> Formatter | None:
        return self.member_formatters.get(name)

    def get_locale(self, typ: type) -> Locale | None:
        return self.locales.get(typ)

    def get_trim_length(self, name: str) -> int | None:
        return self.trim_lengths.get(name)

    def declared_type_of(self, name: str) -> Any:
        """Declared type of an owner member, None if unknown or not annotated."""
        for member in class_members(self.owner):
            if member.name == name:
                return member.declared_type
        return None


class TypePrintingConfig(Generic[TOwner]):
    """Type-level sub-builder returned by PrintingConfig.printing()."""

    def __init__(self, parent: PrintingConfig[TOwner], typ: type):
        self._parent = parent
        self._type = typ

    @property
    def parent_config(self) -> PrintingConfig[TOwner]:
        return self._parent

    @property
    def target_type(self) -> type:
        return self._type

    def using(self, formatter: Formatter) -> PrintingConfig[TOwner]:
        """Print values of this type with formatter."""
        return self._parent.add_type_formatter(self._type, formatter)

    def using_locale(self, locale: Locale | str) -> PrintingConfig[TOwner]:
        """Print locale-aware values of this type in locale, e.g. "ru_RU"."""
        return self._parent.add_locale(self._type, locale)


class MemberPrintingConfig(Generic[TOwner]):
    """Member-level sub-builder returned by PrintingConfig.printing_member()."""

    def __init__(self, parent: PrintingConfig[TOwner], name: str, member_type: Any = None):
        self._parent = parent
        self._name = name
        self._member_type = member_type

    @property
    def parent_config(self) -> PrintingConfig[TOwner]:
        return self._parent

    @property
    def member_name(self) -> str:
        return self._name

    @property
    def member_type(self) -> Any:
        return self._member_type

    def using(self, formatter: Formatter) -> PrintingConfig[TOwner]:
        """Print this member with formatter, overriding truncation and type formatters."""
        return self._parent.add_member_formatter(self._name, formatter)

    def using_locale(self, locale: Locale | str) -> PrintingConfig[TOwner]:
        """
        Register locale for the declared type of this member.

        Locales are type-level rules: every value of the member's type is affected.

        Raises:
            ValueError: If the member's declared type is unknown.
        """
        if not isinstance(self._member_type, type):
            raise ValueError(f"declared type of member '{self._name}' is unknown, "
                             f"pass member_type to printing_member()")
        return self._parent.add_locale(self._member_type, locale)

    def trimmed_to_length(self, max_length: int) -> PrintingConfig[TOwner]:
        """Cut text values of this member to at most max_length characters."""
        return self._parent.add_trim_length(self._name, max_length)


class _MemberToken:
    """Value returned by a selector probe for a member access."""
    __slots__ = ("name", "nested")

    def __init__(self, name: str, nested: bool = False):
        self.name = name
        self.nested = nested

    def __getattr__(self, name: str) -> "_MemberToken":
        return _MemberToken(name, nested=True)

    def __call__(self, *args, **kwargs) -> "_MemberToken":
        return _MemberToken(self.name, nested=True)


class _SelectorProbe:
    """Stand-in owner instance that records attribute access made by a selector."""

    def __init__(self):
        object.__setattr__(self, "_accessed", [])

    def __getattr__(self, name: str) -> _MemberToken:
        object.__getattribute__(self, "_accessed").append(name)
        return _MemberToken(name)


# Methods --------------------------------------------------------------------------------------------------------------

def resolve_member_name(selector: Selector) -> str:
    """
    Resolve a member selector into a bare member name.

    A selector is either a member name string or a callable performing exactly one direct
    attribute access on its argument and returning it, like lambda p: p.name.

    Raises:
        InvalidSelectorError: If selector is not a direct member access.

    Examples:
        >>> resolve_member_name(lambda p: p.name)
        'name'
        >>> resolve_member_name("age")
        'age'
        >>> resolve_member_name(lambda p: p.name.upper())
        Traceback (most recent call last):
        ...
        objprinting.errors.InvalidSelectorError: selector must be a direct member access ...
    """
    if isinstance(selector, str):
        if not selector.isidentifier():
            raise InvalidSelectorError(f"member name must be an identifier, got {fmt_value(selector)}")
        return selector

    if not callable(selector):
        raise InvalidSelectorError(f"selector must be a callable or a member name, got {fmt_type(selector)}")

    probe = _SelectorProbe()
    try:
        result = selector(probe)
    except Exception as exc:
        raise InvalidSelectorError(f"selector must be a direct member access like 'lambda p: p.name', "
                                   f"but it failed with {fmt_type(exc)}") from exc

    accessed = object.__getattribute__(probe, "_accessed")
    if not isinstance(result, _MemberToken) or result.nested or len(accessed) != 1 or accessed[0] != result.name:
        raise InvalidSelectorError(f"selector must be a direct member access like 'lambda p: p.name', "
                                   f"got {fmt_type(result)} after accessing {accessed}")

    logger.debug("Resolved member selector %r to '%s'", selector, result.name)
    return result.name


# Private Methods ------------------------------------------------------------------------------------------------------

def _parse_locale(locale: Locale | str) -> Locale:
    if isinstance(locale, Locale):
        return locale
    if isinstance(locale, str):
        return Locale.parse(locale.replace("-", "_"))
    raise TypeError(f"locale must be a babel.Locale or a str, got {fmt_type(locale)}")


def _safe_contains(container: set, item: Any) -> bool:
    try:
        return item in container
    except TypeError:
        # Unhashable annotations never match
        return False


def _validate_formatter(formatter: Any):
    if not callable(formatter):
        raise TypeError(f"formatter must be callable, got {fmt_type(formatter)}")


def _validate_name(name: Any):
    if not isinstance(name, str):
        raise TypeError(f"member name must be a str, got {fmt_type(name)}")


def _validate_type(typ: Any):
    if not isinstance(typ, type):
        raise TypeError(f"typ must be a type, got {fmt_type(typ)}")
