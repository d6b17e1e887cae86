from typing import Any, Dict, List, Mapping, NamedTuple, Optional
from langchain_core.output_parsers import PydanticOutputParser
from pydantic import BaseModel, Field

# Provider records are passed through untouched; only price/bedrooms/bathrooms are read.
ListingRecord = Mapping[str, Any]


class PropertyQuery(BaseModel):
    min_price: float = Field(1_000_000, ge=0, description="Minimum price range of the property")
    max_price: float = Field(30_000_000, ge=0, description="Maximum price range of the property")
    bedrooms: int = Field(1, ge=0, description="Number of bedrooms of the property")
    bathrooms: int = Field(1, ge=0, description="Number of bathrooms of the property")


class QueryField(NamedTuple):
    name: str
    type: type
    default: Any
    description: str


class ParseRequest(BaseModel):
    post: Optional[str] = Field(None, description="Free-text description of the wanted property")


def query_fields() -> List[QueryField]:
    return [
        QueryField(name, f.annotation, f.default, f.description or "")
        for name, f in PropertyQuery.model_fields.items()
    ]


def query_defaults() -> Dict[str, Any]:
    return {f.name: f.default for f in query_fields()}


def output_parser() -> PydanticOutputParser:
    """Parser that both describes PropertyQuery to the model and validates its answer."""
    return PydanticOutputParser(pydantic_object=PropertyQuery)


def format_instructions() -> str:
    return output_parser().get_format_instructions()
