# app/utils/http.py
import asyncio, random, time
from typing import Any, Dict, Optional
from urllib.parse import urlparse
import httpx
from app import config

# ---- Config (from .env when present, with defaults) -------------------------
HTTP_TIMEOUT_S        = float(getattr(config, "HTTP_TIMEOUT", 15))
HTTP_MAX_RETRIES      = int(getattr(config, "HTTP_MAX_RETRIES", 0))
HTTP_BACKOFF_BASE     = float(getattr(config, "HTTP_BACKOFF_BASE", 1.8))
HTTP_RATE_GAP_DEFAULT = float(getattr(config, "HTTP_RATE_GAP_DEFAULT", 0))

SOFT_STATUS = (429, 503)
# -----------------------------------------------------------------------------


class Http:
    """Async JSON client with per-host rate gap and optional backoff on soft failures."""
    _last_hit: dict[str, float] = {}  # host -> last monotonic time

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.client = httpx.AsyncClient(
            timeout=HTTP_TIMEOUT_S,
            follow_redirects=True,
            http2=transport is None,
            headers={
                "User-Agent": config.USER_AGENT,
                "Accept": "application/json",
            },
            proxy=config.PROXY_URL or None,
            transport=transport,
        )

    async def _respect_rate_gap(self, host: str):
        gap = HTTP_RATE_GAP_DEFAULT
        if gap <= 0:
            return
        now = time.monotonic()
        last = self._last_hit.get(host, 0.0)
        wait = (last + gap) - now
        if wait > 0:
            await asyncio.sleep(wait)
        self._last_hit[host] = time.monotonic()

    async def get_json(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        max_retries: int | None = None,
    ) -> Any:
        host = urlparse(url).netloc.lower()
        await self._respect_rate_gap(host)

        retries = HTTP_MAX_RETRIES if max_retries is None else max_retries
        attempt = 0
        while True:
            r = await self.client.get(url, params=params, headers=headers)
            # 429/503 -> back off and try again while retries remain
            if r.status_code in SOFT_STATUS and attempt < retries:
                ra = r.headers.get("Retry-After")
                sleep_s = float(ra) if (ra and ra.isdigit()) else (HTTP_BACKOFF_BASE ** attempt) + random.uniform(0, 0.5)
                await asyncio.sleep(sleep_s)
                attempt += 1
                continue
            r.raise_for_status()
            return r.json()

    async def close(self):
        await self.client.aclose()
