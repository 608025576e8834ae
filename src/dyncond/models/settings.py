from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from dyncond.features.loose import is_empty
from dyncond.models.types import CompareType, VisibilityMode

SETTINGS_PREFIX = "dynamicconditions_"


def check_empty(settings: Mapping[str, Any], key: str, fallback: Any = None) -> Any:
    """
    Return settings[key] unless it is missing or empty, else fallback.
    The host plugin's prefixed key is consulted when the bare key is empty.
    """
    for k in (key, SETTINGS_PREFIX + key):
        v = settings.get(k)
        if not is_empty(v):
            return v
    return fallback


def _compare_type(raw: Any) -> CompareType:
    try:
        return CompareType(str(raw))
    except ValueError:
        return CompareType.DEFAULT


def _visibility(raw: Any) -> VisibilityMode:
    return VisibilityMode.SHOW if raw == VisibilityMode.SHOW.value else VisibilityMode.HIDE


class ConditionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: Optional[str] = None
    compare_type: CompareType = CompareType.DEFAULT
    visibility: VisibilityMode = VisibilityMode.HIDE
    dynamic: Any = None

    value: Any = None
    value2: Any = None
    day_value: Any = None
    day_value2: Any = None
    month_value: Any = None
    month_value2: Any = None
    date_value: Any = None
    date_value2: Any = None

    @property
    def enabled(self) -> bool:
        return bool(self.condition)

    @property
    def candidates(self) -> list:
        if isinstance(self.dynamic, (list, tuple)):
            return list(self.dynamic)
        return [self.dynamic]

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "ConditionSettings":
        condition = check_empty(settings, "condition")
        return cls(
            condition=str(condition) if condition is not None else None,
            compare_type=_compare_type(check_empty(settings, "type", CompareType.DEFAULT.value)),
            visibility=_visibility(check_empty(settings, "visibility", VisibilityMode.HIDE.value)),
            dynamic=check_empty(settings, "dynamic"),
            value=check_empty(settings, "value"),
            value2=check_empty(settings, "value2"),
            day_value=check_empty(settings, "day_value"),
            day_value2=check_empty(settings, "day_value2"),
            month_value=check_empty(settings, "month_value"),
            month_value2=check_empty(settings, "month_value2"),
            date_value=check_empty(settings, "date_value"),
            date_value2=check_empty(settings, "date_value2"),
        )
