"""
Public member discovery for composite objects.

Members are the public data attributes ("fields") and the public properties of an object,
each with its declared type resolved from annotations. Fields come first, then properties,
each group in declaration order (base classes first, as dataclasses order their fields).
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import inspect
import logging
import types
import typing

from dataclasses import dataclass
from enum import Enum, unique
from functools import cached_property, lru_cache
from typing import Any, ClassVar, Union

logger = logging.getLogger(__name__)

# Properties of these descriptor types are printed as members
PROPERTY_TYPES = (property, cached_property)

# Classes with cached member descriptors, least recently printed are evicted first
CLASS_MEMBERS_CACHE_SIZE = 512


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class MemberKind(str, Enum):
    """
    Kind of public member:
        - "field": data attribute (dataclass field, annotated attribute, slot or instance attribute)
        - "property": property or cached_property
    """
    FIELD = "field"
    PROPERTY = "property"


@dataclass(frozen=True)
class MemberInfo:
    """
    Descriptor of a public member.

    Attributes:
        name: Member name, used as-is in printed lines and as the member-level configuration key.
        kind: Field or property.
        declared_type: Annotated type with Optional unwrapped, None when the member is not annotated.
    """
    name: str
    kind: MemberKind = MemberKind.FIELD
    declared_type: Any = None

    @property
    def is_property(self) -> bool:
        return self.kind == MemberKind.PROPERTY

    def get_value(self, obj: Any) -> Any:
        """Read member value from obj. Property getter exceptions propagate."""
        return getattr(obj, self.name)


# Methods --------------------------------------------------------------------------------------------------------------

@lru_cache(maxsize=CLASS_MEMBERS_CACHE_SIZE)
def class_members(cls: type) -> tuple[MemberInfo, ...]:
    """
    Return public members declared on a class: fields first, then properties.

    Fields are dataclass fields for dataclasses; for other classes, annotated attributes
    and __slots__ entries. ClassVar annotations are not fields. Attributes assigned only at
    runtime are not known here, see get_members().

    Examples:
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     age: int | None = None
        ...     @property
        ...     def adult(self) -> bool:
        ...         return (self.age or 0) >= 18
        >>> [(m.name, m.kind.value, m.declared_type) for m in class_members(Person)]
        [('name', 'field', <class 'str'>), ('age', 'field', <class 'int'>), ('adult', 'property', <class 'bool'>)]
    """
    hints = _type_hints(cls)
    fields: dict[str, MemberInfo] = {}
    properties: dict[str, MemberInfo] = {}

    if dataclasses.is_dataclass(cls):
        field_names = [f.name for f in dataclasses.fields(cls)]
    else:
        field_names = _annotated_names(cls) + _slot_names(cls)

    for name in field_names:
        if not _is_public(name) or name in fields:
            continue
        if _is_class_var(hints.get(name)):
            continue
        if isinstance(inspect.getattr_static(cls, name, None), PROPERTY_TYPES):
            continue
        fields[name] = MemberInfo(name, MemberKind.FIELD, _declared_type(hints.get(name)))

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if not _is_public(name) or name in fields or not isinstance(attr, PROPERTY_TYPES):
                continue
            # Overridden members keep the base position and take the final resolution
            final_attr = inspect.getattr_static(cls, name, None)
            if not isinstance(final_attr, PROPERTY_TYPES):
                properties.pop(name, None)
                continue
            properties[name] = MemberInfo(name, MemberKind.PROPERTY, _property_type(final_attr))

    return tuple(fields.values()) + tuple(properties.values())


def get_members(obj: Any) -> list[MemberInfo]:
    """
    Return public members of an instance: fields first, then properties.

    Declared fields missing on the instance are skipped. Public attributes found only in the
    instance __dict__ are appended to the fields in assignment order, with declared_type=None.
    Instances without __dict__ and __slots__ (builtins, C types) have no runtime attributes.
    """
    declared = class_members(type(obj))
    fields = [m for m in declared if not m.is_property and _has_attr(obj, m.name)]
    properties = [m for m in declared if m.is_property]

    known = {m.name for m in declared}
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for name in instance_dict:
            if isinstance(name, str) and _is_public(name) and name not in known:
                fields.append(MemberInfo(name, MemberKind.FIELD, None))

    return fields + properties


# Private Methods ------------------------------------------------------------------------------------------------------

def _annotated_names(cls: type) -> list[str]:
    """Names annotated in class bodies over the MRO, base classes first."""
    names = []
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        try:
            annotations = inspect.get_annotations(klass)
        except (NameError, TypeError):
            annotations = {}
        names.extend(n for n in annotations if n not in names)
    return names


def _slot_names(cls: type) -> list[str]:
    names = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(n for n in slots if n not in ("__dict__", "__weakref__") and n not in names)
    return names


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolved type hints, raw annotations when forward references cannot be resolved."""
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError, AttributeError):
        logger.debug("Could not resolve type hints of %r, falling back to raw annotations", obj)

    hints = {}
    klasses = reversed(obj.__mro__) if isinstance(obj, type) else (obj,)
    for klass in klasses:
        try:
            hints.update(inspect.get_annotations(klass))
        except (NameError, TypeError):
            continue
    return hints


def _property_type(prop: property | cached_property) -> Any:
    fn = prop.fget if isinstance(prop, property) else prop.func
    if fn is None:
        return None
    return _declared_type(_type_hints(fn).get("return"))


def _declared_type(hint: Any) -> Any:
    """
    Normalize an annotation into a declared type.

    Optional[X] and X | None become X, unresolved string annotations become None.
    """
    if hint is None or isinstance(hint, str):
        return None
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_class_var(hint: Any) -> bool:
    if hint is ClassVar or typing.get_origin(hint) is ClassVar:
        return True
    return isinstance(hint, str) and hint.startswith(("ClassVar", "typing.ClassVar"))


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _has_attr(obj: Any, name: str) -> bool:
    """Check field presence without triggering descriptors beyond a plain getattr."""
    try:
        getattr(obj, name)
    except AttributeError:
        return False
    return True
