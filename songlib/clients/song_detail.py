import logging
from typing import Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from songlib.errors import DetailLookupError
from songlib.models.dto import SongDetail
from songlib.observability.metrics import record_detail_lookup

logger = logging.getLogger(__name__)


class SongDetailClient:
    def __init__(self, base_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        """Client for the external song detail service.

        :param base_url: Root URL of the service; requests go to ``{base_url}/info``.
        :param timeout: Per-request timeout in seconds.
        :param session: Optional pre-configured ``requests.Session``.
        """
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info("SongDetailClient initialized for %s (timeout=%ss)", self.base_url, self.timeout)

    def get_song_detail(self, song: str, group: str) -> SongDetail:
        """Resolve release date, link and lyrics for a (song, group) pair.

        Raises :class:`DetailLookupError` carrying the upstream status code
        when the service answers with anything but 200, and status 500 when
        the request cannot be sent or the body cannot be decoded. No retries.
        """
        url = f"{self.base_url}/info"
        try:
            response = self.session.get(
                url,
                params={"song": song, "group": group},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as exc:
            record_detail_lookup("timeout")
            raise DetailLookupError(f"timeout calling {url}: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            record_detail_lookup("transport_error")
            raise DetailLookupError(f"error sending request to {url}: {exc}") from exc

        if response.status_code != 200:
            record_detail_lookup("upstream_error")
            raise DetailLookupError(
                f"detail lookup for ({song!r}, {group!r}) failed with status {response.status_code}",
                status_code=response.status_code,
                reason=response.reason or "Upstream Error",
            )

        try:
            detail = SongDetail.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            record_detail_lookup("bad_payload")
            raise DetailLookupError(f"error decoding song detail from {url}: {exc}") from exc

        record_detail_lookup("ok")
        return detail

    def close(self) -> None:
        self.session.close()


__all__ = ["SongDetailClient"]
