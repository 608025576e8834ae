from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from dyncond.dates.normalizer import DateNormalizer
from dyncond.models.settings import ConditionSettings
from dyncond.models.types import CompareType

# compare type -> settings fields holding the two check values
CHECK_FIELDS: Dict[CompareType, Tuple[str, str]] = {
    CompareType.DEFAULT: ("value", "value2"),
    CompareType.DAYS: ("day_value", "day_value2"),
    CompareType.MONTHS: ("month_value", "month_value2"),
    CompareType.DATE: ("date_value", "date_value2"),
    CompareType.STRTOTIME: ("value", "value2"),
}


def transform_for(compare_type: CompareType, dates: DateNormalizer) -> Callable[[Any], Any]:
    if compare_type == CompareType.DAYS:
        return dates.weekday
    if compare_type == CompareType.MONTHS:
        return dates.month
    if compare_type in (CompareType.DATE, CompareType.STRTOTIME):
        return dates.timestamp
    return lambda v: v


def check_values(cfg: ConditionSettings, dates: DateNormalizer) -> Tuple[Any, Any]:
    """
    Both check values in the representation candidates are normalized to.
    Unset check values stay None.
    """
    transform = transform_for(cfg.compare_type, dates)
    first, second = CHECK_FIELDS[cfg.compare_type]
    out = []
    for field in (first, second):
        v = getattr(cfg, field)
        out.append(None if v is None else transform(v))
    return out[0], out[1]
