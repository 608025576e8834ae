from dyncond.features.operators import OPERATORS, Comparison, get_operator
from dyncond.models.types import Operator, ShortCircuit


def cmp(op, candidate, check=None, check2=None):
    return OPERATORS[Operator(op)].compare(candidate, check, check2)


def test_every_operator_is_registered():
    assert set(OPERATORS) == set(Operator)


def test_unknown_operator_is_none():
    assert get_operator("approximately") is None
    assert get_operator(None) is None
    assert get_operator("between").operator == Operator.BETWEEN


def test_equal_is_loose():
    assert cmp("equal", "foo", "foo").result
    assert cmp("equal", "2", "2.0").result
    assert cmp("equal", 4, "4").result
    assert not cmp("equal", "foo", "bar").result
    assert cmp("equal", "x", "x").policy == ShortCircuit.ON_TRUE


def test_equal_and_not_equal_are_complements():
    pairs = [("a", "a"), ("a", "b"), ("1", "1.0"), (3, "4"), ("", None), (None, None)]
    for a, b in pairs:
        assert cmp("equal", a, b).result != cmp("not_equal", a, b).result
    assert cmp("not_equal", "a", "b").policy == ShortCircuit.ON_FALSE


def test_contains():
    assert cmp("contains", "hello world", "lo w").result
    assert not cmp("contains", "hello", "xyz").result
    assert cmp("not_contains", "hello", "xyz").result
    assert not cmp("not_contains", "hello", "ell").result


def test_contains_skips_when_check_value_is_empty():
    for check in (None, ""):
        out = cmp("contains", "anything", check)
        assert out.skip
        assert not out.stops
        assert cmp("not_contains", "anything", check).skip


def test_empty_and_not_empty():
    for v in (None, "", "0", 0, []):
        assert cmp("empty", v).result
        assert not cmp("not_empty", v).result
    assert cmp("not_empty", "x").result
    assert cmp("empty", "x").policy == ShortCircuit.ON_FALSE


def test_less_and_greater_numeric():
    assert cmp("less", "2", "10").result
    assert not cmp("greater", "2", "10").result
    assert cmp("greater", 1709683200, 1709596800).result


def test_less_and_greater_fall_back_to_length():
    assert cmp("less", "ab", "abc").result
    assert not cmp("less", "abc", "ab").result
    assert cmp("greater", "abcd", "z").result
    # mixed numeric/text compares lengths too
    assert cmp("less", "5", "abc").result


def test_between_includes_bounds():
    assert cmp("between", 5, 5, 10).result
    assert cmp("between", 10, 5, 10).result
    assert cmp("between", "7", "5", "10").result
    assert not cmp("between", 11, 5, 10).result
    assert not cmp("between", 4, 5, 10).result


def test_between_text_ordering():
    assert cmp("between", "b", "a", "c").result
    assert not cmp("between", "d", "a", "c").result


def test_comparison_stops():
    assert Comparison(True, ShortCircuit.ON_TRUE).stops
    assert not Comparison(False, ShortCircuit.ON_TRUE).stops
    assert Comparison(False, ShortCircuit.ON_FALSE).stops
