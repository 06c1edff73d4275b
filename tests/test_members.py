#
# Objprinting - Members Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import uuid

from dataclasses import dataclass, field
from functools import cached_property
from typing import ClassVar, Optional

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objprinting.members import CLASS_MEMBERS_CACHE_SIZE, MemberInfo, MemberKind, class_members, get_members


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass
class Person:
    id: uuid.UUID
    name: str | None = None
    height: float = 0.0
    age: int = 0
    _secret: str = "hidden"
    count: ClassVar[int] = 0

    @property
    def is_adult(self) -> bool:
        return self.age >= 18

    @property
    def _private_prop(self) -> int:
        return 1

    def greet(self) -> str:
        return f"Hi, {self.name}"


@dataclass
class Employee(Person):
    company: Optional[str] = None

    @cached_property
    def badge(self) -> "str":
        return f"{self.company}:{self.name}"


class Plain:
    kind: str = "plain"

    def __init__(self):
        self.title = "x"
        self.count = 3
        self._hidden = 0

    @property
    def double(self):
        return self.count * 2


class Slotted:
    __slots__ = ("left", "right", "_tag")

    def __init__(self, left, right=None):
        self.left = left
        if right is not None:
            self.right = right
        self._tag = "t"


class Base:
    @property
    def first(self) -> int:
        return 1

    @property
    def second(self) -> int:
        return 2


class Derived(Base):
    second = 20

    @property
    def third(self) -> str:
        return "3"


# Tests ----------------------------------------------------------------------------------------------------------------

class TestMemberInfo:
    def test_get_value(self):
        m = MemberInfo("name", MemberKind.FIELD, str)
        assert m.get_value(Person(uuid.uuid4(), "Sasha")) == "Sasha"
        assert m.is_property is False

    def test_property_flag(self):
        assert MemberInfo("x", MemberKind.PROPERTY).is_property is True

    def test_get_value_propagates(self):
        m = MemberInfo("missing")
        with pytest.raises(AttributeError):
            m.get_value(object())


class TestClassMembers:
    def test_dataclass_fields_then_properties(self):
        """Fields in declaration order, then properties; private, ClassVar and methods skipped."""
        members = class_members(Person)
        assert [(m.name, m.kind) for m in members] == [
            ("id", MemberKind.FIELD),
            ("name", MemberKind.FIELD),
            ("height", MemberKind.FIELD),
            ("age", MemberKind.FIELD),
            ("is_adult", MemberKind.PROPERTY),
        ]

    def test_declared_types(self):
        """Optional annotations are unwrapped."""
        types_ = {m.name: m.declared_type for m in class_members(Person)}
        assert types_ == {"id": uuid.UUID, "name": str, "height": float, "age": int, "is_adult": bool}

    def test_inheritance_base_first(self):
        members = class_members(Employee)
        assert [m.name for m in members] == ["id", "name", "height", "age", "company", "is_adult", "badge"]

    def test_optional_and_string_return_annotations(self):
        types_ = {m.name: m.declared_type for m in class_members(Employee)}
        assert types_["company"] is str
        assert types_["badge"] is str

    def test_plain_class(self):
        """Annotated attributes are fields, unannotated property has no declared type."""
        members = class_members(Plain)
        assert members == (
            MemberInfo("kind", MemberKind.FIELD, str),
            MemberInfo("double", MemberKind.PROPERTY, None),
        )

    def test_slots(self):
        assert [m.name for m in class_members(Slotted)] == ["left", "right"]

    def test_overridden_property(self):
        """A property replaced by a plain attribute in a subclass is not a property member."""
        assert [m.name for m in class_members(Derived)] == ["first", "third"]

    def test_unresolvable_annotation(self):
        """Forward references which cannot be resolved give no declared type."""

        class Broken:
            ref: "DoesNotExist"
            size: int

        types_ = {m.name: m.declared_type for m in class_members(Broken)}
        assert types_ == {"ref": None, "size": int}

    def test_cached(self):
        assert class_members(Person) is class_members(Person)

    def test_cache_bounded(self):
        """Descriptors of classes printed long ago are evicted."""
        for i in range(CLASS_MEMBERS_CACHE_SIZE + 10):
            class_members(type(f"Generated{i}", (), {"__annotations__": {"value": int}}))
        info = class_members.cache_info()
        assert info.maxsize == CLASS_MEMBERS_CACHE_SIZE
        assert info.currsize == CLASS_MEMBERS_CACHE_SIZE


class TestGetMembers:
    def test_dataclass_instance(self):
        p = Person(uuid.uuid4(), "Sasha", 180.5, 30)
        assert [m.name for m in get_members(p)] == ["id", "name", "height", "age", "is_adult"]

    def test_instance_attributes_appended_to_fields(self):
        """Runtime attributes follow declared fields, properties come last."""
        members = get_members(Plain())
        assert [(m.name, m.kind, m.declared_type) for m in members] == [
            ("kind", MemberKind.FIELD, str),
            ("title", MemberKind.FIELD, None),
            ("count", MemberKind.FIELD, None),
            ("double", MemberKind.PROPERTY, None),
        ]

    def test_unset_slot_skipped(self):
        assert [m.name for m in get_members(Slotted(1))] == ["left"]
        assert [m.name for m in get_members(Slotted(1, 2))] == ["left", "right"]

    def test_builtin_object(self):
        assert get_members(object()) == []

    def test_dynamic_attribute_added_later(self):
        p = Person(uuid.uuid4())
        p.nickname = "Sash"
        names = [m.name for m in get_members(p)]
        assert names == ["id", "name", "height", "age", "nickname", "is_adult"]
