from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dyncond.engine.evaluator import ConditionEvaluator


def load_widgets(config_path: str) -> List[Dict[str, Any]]:
    """
    Accepts YAML (JSON being a subset) shaped like:
      widgets:
        - id: hero-banner
          settings: {condition: equal, dynamic: foo, value: foo}
    """
    cfg = yaml.safe_load(Path(config_path).read_text()) or {}
    if isinstance(cfg, list):
        widgets = cfg
    else:
        widgets = cfg.get("widgets") or []

    out: List[Dict[str, Any]] = []
    for i, w in enumerate(widgets):
        if not isinstance(w, dict):
            raise ValueError(f"widget #{i} is not a mapping")
        settings = w.get("settings") or {}
        if not isinstance(settings, dict):
            raise ValueError(f"widget #{i}: settings must be a mapping")
        out.append(
            {
                "id": str(w.get("id", i)),
                "settings": settings,
            }
        )
    return out


def run(evaluator: ConditionEvaluator, config_path: str, as_json: bool = False) -> Dict[str, bool]:
    results: Dict[str, bool] = {}
    for w in load_widgets(config_path):
        results[w["id"]] = evaluator.evaluate(w["settings"])

    if as_json:
        print(json.dumps({k: ("hidden" if v else "visible") for k, v in results.items()}, indent=2))
    else:
        for widget_id, hidden in results.items():
            print(f"{widget_id} {'hidden' if hidden else 'visible'}")
    return results
