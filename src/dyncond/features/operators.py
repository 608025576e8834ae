from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from dyncond.features.loose import (
    is_empty,
    is_numeric,
    loose_cmp,
    loose_equal,
    to_text,
)
from dyncond.models.types import Operator, ShortCircuit


class Comparison(NamedTuple):
    result: bool
    policy: ShortCircuit
    skip: bool = False

    @property
    def stops(self) -> bool:
        if self.policy == ShortCircuit.ON_TRUE:
            return self.result
        return not self.result


class Comparator:
    operator: Operator
    policy: ShortCircuit = ShortCircuit.ON_TRUE

    def test(self, candidate: Any, check: Any, check2: Any) -> bool:
        raise NotImplementedError

    def compare(self, candidate: Any, check: Any, check2: Any) -> Comparison:
        return Comparison(self.test(candidate, check, check2), self.policy)


class Equal(Comparator):
    operator = Operator.EQUAL

    def test(self, candidate, check, check2):
        return loose_equal(check, candidate)


class NotEqual(Comparator):
    operator = Operator.NOT_EQUAL
    policy = ShortCircuit.ON_FALSE

    def test(self, candidate, check, check2):
        return not loose_equal(check, candidate)


class Contains(Comparator):
    operator = Operator.CONTAINS

    def test(self, candidate, check, check2):
        return to_text(check) in to_text(candidate)

    def compare(self, candidate, check, check2):
        # nothing to search for: leave the running result alone
        if is_empty(check):
            return Comparison(False, self.policy, skip=True)
        return super().compare(candidate, check, check2)


class NotContains(Contains):
    operator = Operator.NOT_CONTAINS
    policy = ShortCircuit.ON_FALSE

    def test(self, candidate, check, check2):
        return to_text(check) not in to_text(candidate)


class Empty(Comparator):
    operator = Operator.EMPTY
    policy = ShortCircuit.ON_FALSE

    def test(self, candidate, check, check2):
        return is_empty(candidate)


class NotEmpty(Comparator):
    operator = Operator.NOT_EMPTY

    def test(self, candidate, check, check2):
        return not is_empty(candidate)


class Less(Comparator):
    operator = Operator.LESS

    def test(self, candidate, check, check2):
        if is_numeric(candidate) and is_numeric(check):
            return float(candidate) < float(check)
        return len(to_text(candidate)) < len(to_text(check))


class Greater(Comparator):
    operator = Operator.GREATER

    def test(self, candidate, check, check2):
        if is_numeric(candidate) and is_numeric(check):
            return float(candidate) > float(check)
        return len(to_text(candidate)) > len(to_text(check))


class Between(Comparator):
    operator = Operator.BETWEEN

    def test(self, candidate, check, check2):
        return loose_cmp(candidate, check) >= 0 and loose_cmp(candidate, check2) <= 0


OPERATORS: Dict[Operator, Comparator] = {
    c.operator: c
    for c in (
        Equal(),
        NotEqual(),
        Contains(),
        NotContains(),
        Empty(),
        NotEmpty(),
        Less(),
        Greater(),
        Between(),
    )
}


def get_operator(name: Any) -> Optional[Comparator]:
    try:
        return OPERATORS[Operator(str(name))]
    except ValueError:
        return None
