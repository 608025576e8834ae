from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

import requests

logger = logging.getLogger(__name__)

MEDIA_PATH = "/wp-json/wp/v2/media/{id}"


class AttachmentResolver(Protocol):
    def resolve_to_link(self, attachment_id: Any) -> str:
        ...


class StaticAttachmentResolver:
    def __init__(self, links: Optional[Mapping[Any, str]] = None) -> None:
        self.links = {str(k): v for k, v in (links or {}).items()}

    def resolve_to_link(self, attachment_id: Any) -> str:
        return self.links.get(str(attachment_id), "")


class WordPressMediaResolver:
    """
    Looks attachment links up through the WordPress REST media endpoint:
      GET {base_url}/wp-json/wp/v2/media/{id} -> {"link": "..."}
    Any failure resolves to "".
    """

    def __init__(self, base_url: str, timeout: float = 10) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._cache: Dict[str, str] = {}

    def resolve_to_link(self, attachment_id: Any) -> str:
        key = str(attachment_id)
        if key not in self._cache:
            self._cache[key] = self._fetch(key)
        return self._cache[key]

    def _fetch(self, attachment_id: str) -> str:
        url = self.base_url + MEDIA_PATH.format(id=attachment_id)
        try:
            r = requests.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
            if r.status_code != 200:
                logger.warning("media %s: HTTP %s from %s", attachment_id, r.status_code, url)
                return ""
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("media %s: %s: %s", attachment_id, type(e).__name__, e)
            return ""

        if not isinstance(data, dict):
            return ""
        return str(data.get("link") or "")
