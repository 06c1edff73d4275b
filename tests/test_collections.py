#
# Objprinting - Collections Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from collections import OrderedDict, deque
from dataclasses import dataclass
from types import MappingProxyType

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from objprinting.collections import is_map_like, print_collection
from objprinting.printer import ObjectPrinter, PrintOptions, VisitContext, print_to_string


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(eq=False)
class Point:
    x: int
    y: int


class ItemsOnly:
    """Dict-like object without the Mapping ABC."""

    def __init__(self, data):
        self._data = data

    def __iter__(self):
        return iter(self._data)

    def items(self):
        return self._data.items()


class ItemsBag:
    """Iterable whose items() returns plain elements, not key/value pairs."""

    def __iter__(self):
        return iter([1, 2])

    def items(self):
        return ["a", "bc"]


class ItemsBroken:
    def __iter__(self):
        return iter(["x"])

    def items(self):
        return 42


# Tests ----------------------------------------------------------------------------------------------------------------

class TestIsMapLike:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param({}, True, id="dict"),
            pytest.param(OrderedDict(), True, id="ordered-dict"),
            pytest.param(MappingProxyType({}), True, id="mapping-proxy"),
            pytest.param(frozendict(), True, id="frozendict"),
            pytest.param(ItemsOnly({}), True, id="items-method"),
            pytest.param([], False, id="list"),
            pytest.param((), False, id="tuple"),
            pytest.param(set(), False, id="set"),
            pytest.param("ab", False, id="str"),
        ],
    )
    def test_is_map_like(self, obj, expected):
        assert is_map_like(obj) is expected


class TestPrintSequence:
    def test_list(self):
        assert print_to_string(["Sasha", "Misha", "Grisha"]) == (
            "list\n"
            "\t[0] = \"Sasha\"\n"
            "\t[1] = \"Misha\"\n"
            "\t[2] = \"Grisha\"\n"
        )

    @pytest.mark.parametrize(
        "obj, header",
        [
            pytest.param((1, 2), "tuple", id="tuple"),
            pytest.param(deque([1, 2]), "deque", id="deque"),
            pytest.param(range(1, 3), "range", id="range"),
        ],
    )
    def test_other_sequences(self, obj, header):
        assert print_to_string(obj) == f"{header}\n\t[0] = 1\n\t[1] = 2\n"

    def test_set(self):
        assert print_to_string({7}) == "set\n\t[0] = 7\n"

    def test_generator(self):
        assert print_to_string(i * i for i in range(3)) == "generator\n\t[0] = 0\n\t[1] = 1\n\t[2] = 4\n"

    def test_empty(self):
        assert print_to_string([]) == "list\n"

    def test_none_entries(self):
        assert print_to_string([None, 1]) == "list\n\t[0] = null\n\t[1] = 1\n"

    def test_nested_lists(self):
        assert print_to_string([[1], []]) == (
            "list\n"
            "\t[0] = list\n"
            "\t\t[0] = 1\n"
            "\t[1] = list\n"
        )

    def test_composite_entries(self):
        assert print_to_string([Point(1, 2)]) == (
            "list\n"
            "\t[0] = Point\n"
            "\t\tx = 1\n"
            "\t\ty = 2\n"
        )

    def test_same_element_twice(self):
        point = Point(1, 2)
        text = print_to_string([point, point])
        assert "Cyclic" not in text
        assert text.count("Point") == 2


class TestPrintMapping:
    def test_dict(self):
        assert print_to_string({"Sasha": 52, "Masha": 30}) == (
            "dict\n"
            "\t[\"Sasha\"] = 52\n"
            "\t[\"Masha\"] = 30\n"
        )

    def test_frozendict(self):
        text = print_to_string(frozendict(a=1))
        assert text == "frozendict\n\t[\"a\"] = 1\n"

    def test_items_only(self):
        assert print_to_string(ItemsOnly({1: "one"})) == "ItemsOnly\n\t[1] = \"one\"\n"

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(ItemsBag(), "ItemsBag\n\t[0] = 1\n\t[1] = 2\n", id="items-not-pairs"),
            pytest.param(ItemsBroken(), "ItemsBroken\n\t[0] = \"x\"\n", id="items-not-iterable"),
        ],
    )
    def test_items_fallback_to_sequence(self, obj, expected):
        """Objects whose items() does not yield pairs print as indexed entries."""
        assert print_to_string(obj) == expected

    def test_items_fallback_logged(self, debug_log):
        print_to_string(ItemsBag())
        assert "ItemsBag.items() does not yield key/value pairs" in debug_log.text

    def test_nested_value(self):
        assert print_to_string({"p": Point(1, 2)}) == (
            "dict\n"
            "\t[\"p\"] = Point\n"
            "\t\tx = 1\n"
            "\t\ty = 2\n"
        )

    def test_none_value(self):
        assert print_to_string({"k": None}) == "dict\n\t[\"k\"] = null\n"

    def test_dict_containing_itself(self):
        data = {}
        data["self"] = data
        assert print_to_string(data) == "dict\n\t[\"self\"] = Cyclic reference detected (dict)\n"

    def test_formatters_apply_to_keys_and_values(self):
        text = print_to_string({1: 2}, lambda c: c.printing(int).using(lambda i: f"#{i}"))
        assert text == "dict\n\t[#1] = #2\n"

    def test_locale_applies_to_values(self):
        text = print_to_string({"h": 180.5}, lambda c: c.printing(float).using_locale("ru_RU"))
        assert text == "dict\n\t[\"h\"] = 180,5\n"

    def test_empty(self):
        assert print_to_string({}) == "dict\n"


class TestPrintCollection:
    def test_depth(self):
        printer = ObjectPrinter()
        assert print_collection(printer, [1], 2, VisitContext()) == "list\n\t\t\t[0] = 1\n"

    def test_spaces_indent(self):
        printer = ObjectPrinter(options=PrintOptions.spaces(2))
        assert print_collection(printer, {"a": [1]}, 0, VisitContext()) == (
            "dict\n"
            "  [\"a\"] = list\n"
            "    [0] = 1\n"
        )
