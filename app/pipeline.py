"""Search pipeline: extract -> normalize -> fetch -> filter.

Extraction and fetch problems never abort a request. A failed extraction
degrades to the all-defaults query and a failed fetch degrades to zero
results; both are recorded on the ``SearchRun`` so callers and tests can see
what happened.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
from app.errors import ExtractionFailure, FetchFailure, InvalidInput
from app.extractor import Extractor
from app.filters import filter_listings
from app.normalize import normalize
from app.providers import zillow
from app.schemas import ListingRecord, PropertyQuery

logger = logging.getLogger(__name__)

Fetcher = Callable[[PropertyQuery], Awaitable[Union[List[ListingRecord], FetchFailure]]]


class Stage(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    NORMALIZING = "normalizing"
    FETCHING = "fetching"
    FILTERING = "filtering"
    DONE = "done"
    FAILED = "failed"


@dataclass
class StageOutcome:
    stage: Stage
    ok: bool
    detail: Optional[str] = None


@dataclass
class SearchRun:
    text: Optional[str]
    stage: Stage = Stage.IDLE
    candidate: Dict[str, Any] = field(default_factory=dict)
    query: Optional[PropertyQuery] = None
    fetched: int = 0
    listings: List[ListingRecord] = field(default_factory=list)
    outcomes: List[StageOutcome] = field(default_factory=list)

    def _enter(self, stage: Stage):
        self.stage = stage
        logger.debug(f"[PIPELINE] -> {stage.value}")

    def _record(self, ok: bool, detail: Optional[str] = None):
        self.outcomes.append(StageOutcome(self.stage, ok, detail))

    @property
    def degraded(self) -> bool:
        return any(not o.ok for o in self.outcomes)


class SearchPipeline:
    def __init__(self, extractor: Optional[Extractor] = None, fetcher: Optional[Fetcher] = None):
        self.extractor = extractor or Extractor()
        self.fetcher = fetcher or zillow.fetch_listings

    async def run(self, raw_text: Optional[str]) -> SearchRun:
        run = SearchRun(text=raw_text)
        if raw_text is None or not str(raw_text).strip():
            run._enter(Stage.FAILED)
            raise InvalidInput("Missing 'post' in request body")

        try:
            await self._run_stages(run, raw_text)
        except Exception:
            logger.exception(f"[PIPELINE] failed while {run.stage.value}")
            run._enter(Stage.FAILED)
            raise
        return run

    async def _run_stages(self, run: SearchRun, raw_text: str):
        run._enter(Stage.EXTRACTING)
        extracted = await self.extractor.extract(raw_text)
        if isinstance(extracted, ExtractionFailure):
            logger.warning(f"[PIPELINE] extraction failed, using defaults: {extracted.reason}")
            run._record(False, extracted.reason)
        else:
            run.candidate = extracted
            run._record(True)

        run._enter(Stage.NORMALIZING)
        run.query = normalize(run.candidate)
        run._record(True)
        logger.info(f"[PIPELINE] query (normalized): {run.query.model_dump()}")

        run._enter(Stage.FETCHING)
        if run.query.max_price < run.query.min_price:
            # nothing can satisfy both bounds; don't spend a provider call on it
            logger.warning(
                f"[PIPELINE] max_price {run.query.max_price} < min_price {run.query.min_price}, skipping fetch"
            )
            run._record(True, "contradictory price bounds")
            records: List[ListingRecord] = []
        else:
            fetched = await self.fetcher(run.query)
            if isinstance(fetched, FetchFailure):
                logger.warning(f"[PIPELINE] fetch failed, treating as no results: {fetched.reason}")
                run._record(False, fetched.reason)
                records = []
            else:
                run._record(True)
                records = fetched
        run.fetched = len(records)

        run._enter(Stage.FILTERING)
        run.listings = filter_listings(records, run.query)
        run._record(True)
        logger.info(f"[PIPELINE] {run.fetched} fetched -> {len(run.listings)} kept")

        run._enter(Stage.DONE)

    async def process_search(self, raw_text: Optional[str]) -> List[ListingRecord]:
        run = await self.run(raw_text)
        return run.listings
