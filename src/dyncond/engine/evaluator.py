from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from dyncond.dates.normalizer import DateNormalizer
from dyncond.features.normalize import check_values, transform_for
from dyncond.features.operators import get_operator
from dyncond.media.resolver import AttachmentResolver, StaticAttachmentResolver
from dyncond.models.settings import ConditionSettings
from dyncond.models.types import VisibilityMode

logger = logging.getLogger(__name__)

_SKIP = object()


class ConditionEvaluator:
    """
    Decides whether a widget is hidden, given its settings bag.

    evaluate() never raises: missing configuration disables the condition and
    unreadable values compare as false.
    """

    def __init__(
        self,
        dates: Optional[DateNormalizer] = None,
        attachments: Optional[AttachmentResolver] = None,
    ) -> None:
        self.dates = dates or DateNormalizer()
        self.attachments = attachments or StaticAttachmentResolver()

    def evaluate(self, settings: Mapping[str, Any]) -> bool:
        if settings is not None and not isinstance(settings, Mapping):
            logger.warning("settings must be a mapping, got %s", type(settings).__name__)
            return False
        try:
            cfg = ConditionSettings.from_settings(settings or {})
        except ValidationError as e:
            logger.warning("unusable condition settings: %s", e)
            return False

        if not cfg.enabled:
            return False

        condition = self.check_condition(cfg)

        if cfg.visibility == VisibilityMode.SHOW:
            return not condition
        return condition

    def check_condition(self, cfg: ConditionSettings) -> bool:
        """Outcome of the configured comparison over all candidate values."""
        comparator = get_operator(cfg.condition)
        if comparator is None:
            logger.warning("unknown condition operator %r", cfg.condition)
            return False

        check, check2 = check_values(cfg, self.dates)
        transform = transform_for(cfg.compare_type, self.dates)

        condition = False
        for raw in cfg.candidates:
            candidate = self._resolve(raw)
            if candidate is _SKIP:
                logger.debug("skipping structured value without id: %r", raw)
                continue

            outcome = comparator.compare(transform(candidate), check, check2)
            if outcome.skip:
                continue

            condition = outcome.result
            if outcome.stops:
                break

        return condition

    def _resolve(self, raw: Any) -> Any:
        # nested lists carry no id
        if isinstance(raw, (list, tuple)):
            return _SKIP
        if not isinstance(raw, Mapping):
            return raw
        attachment_id = raw.get("id")
        if not attachment_id:
            return _SKIP
        link = self.attachments.resolve_to_link(attachment_id)
        return link or raw.get("url") or ""
