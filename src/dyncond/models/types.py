from enum import Enum

class Operator(str, Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    LESS = "less"
    GREATER = "greater"
    BETWEEN = "between"

class CompareType(str, Enum):
    DEFAULT = "default"
    DAYS = "days"
    MONTHS = "months"
    DATE = "date"
    STRTOTIME = "strtotime"

class VisibilityMode(str, Enum):
    SHOW = "show"
    HIDE = "hide"

class ShortCircuit(str, Enum):
    ON_TRUE = "ON_TRUE"    # stop iterating once a candidate matches
    ON_FALSE = "ON_FALSE"  # stop iterating once a candidate fails
