from dataclasses import dataclass
from typing import Optional


class InvalidInput(ValueError):
    """The request carried no text to parse."""


@dataclass(frozen=True)
class ExtractionFailure:
    """Model output could not be turned into a query.

    Returned by the extractor instead of raised; ``raw_output`` keeps whatever
    the model said (``None`` when the call itself errored).
    """
    reason: str
    raw_output: Optional[str] = None


@dataclass(frozen=True)
class FetchFailure:
    """The listing provider was unreachable or answered with garbage."""
    reason: str
    status_code: Optional[int] = None
