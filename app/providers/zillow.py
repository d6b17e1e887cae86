import json
import logging
from typing import Any, Dict, List, Optional, Union
import httpx
from app import config
from app.errors import FetchFailure
from app.schemas import ListingRecord, PropertyQuery
from app.utils.http import Http

logger = logging.getLogger(__name__)


def search_url() -> str:
    return f"https://{config.ZILLOW_HOST}/search"


def _param(value: float) -> Any:
    return int(value) if float(value).is_integer() else value


def build_params(query: PropertyQuery) -> Dict[str, Any]:
    """Coarse provider-side filter; results still get re-filtered locally."""
    return {
        "location": config.SEARCH_LOCATION,
        "status": config.SEARCH_STATUS,
        "beds": query.bedrooms,
        "baths": query.bathrooms,
        "price_min": _param(query.min_price),
        "price_max": _param(query.max_price),
    }


def _headers() -> Dict[str, str]:
    return {
        "X-RapidAPI-Key": config.RAPID_ZILLOW_API_KEY,
        "X-RapidAPI-Host": config.ZILLOW_HOST,
    }


def parse_results(payload: Any) -> List[ListingRecord]:
    if not isinstance(payload, dict):
        return []
    return [r for r in (payload.get("results") or []) if isinstance(r, dict)]


async def fetch_listings(query: PropertyQuery, http: Optional[Http] = None) -> Union[List[ListingRecord], FetchFailure]:
    own_client = http is None
    http = http or Http()
    try:
        payload = await http.get_json(search_url(), params=build_params(query), headers=_headers())
    except httpx.HTTPStatusError as e:
        logger.error(f"[ZILLOW] error: HTTP {e.response.status_code}")
        return FetchFailure(reason=str(e), status_code=e.response.status_code)
    except (httpx.HTTPError, json.JSONDecodeError) as e:
        logger.error(f"[ZILLOW] error: {e!r}")
        return FetchFailure(reason=repr(e))
    finally:
        if own_client:
            await http.close()

    results = parse_results(payload)
    logger.info(f"[ZILLOW] ok: {config.SEARCH_LOCATION} -> {len(results)} results")
    return results
