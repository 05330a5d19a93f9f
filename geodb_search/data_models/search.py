"""
Data models for place search.

This module defines the Pydantic models that flow between the search
controller, the query executor and the presentation layer.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import MAX_PAGE_SIZE, MIN_PAGE_SIZE
from .enums import SearchStatus


class SearchQuery(BaseModel):
    """One request for a page of places, created on every dispatch."""

    model_config = ConfigDict(frozen=True)

    raw_text: str = Field(..., description="Text as typed by the user")
    resolved_code: str | None = Field(None, description="Region code for raw_text")
    page: int = Field(1, ge=1, description="1-based page number")
    page_size: int = Field(5, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PlaceRecord(BaseModel):
    """A single place as returned by the GeoDB Cities API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    region: str | None = None
    population: int = Field(0, ge=0)
    country_name: str = Field(..., alias="country")
    country_code: str | None = Field(None, alias="countryCode")

    # Carried by the API but not needed by the controller.
    region_code: str | None = Field(None, alias="regionCode")
    latitude: float | None = None
    longitude: float | None = None
    wiki_data_id: str | None = Field(None, alias="wikiDataId")
    type: str | None = None


class ResultPage(BaseModel):
    """One page of places plus the size of the whole result set."""

    model_config = ConfigDict(frozen=True)

    rows: list[PlaceRecord] = Field(default_factory=list)
    total_count: int = Field(0, ge=0)


class QueryOutcome(BaseModel):
    """Result of executing a SearchQuery: either a page or an error message."""

    model_config = ConfigDict(frozen=True)

    page: ResultPage | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "QueryOutcome":
        if (self.page is None) == (self.error is None):
            raise ValueError("Exactly one of 'page' or 'error' must be set.")
        return self

    @property
    def ok(self) -> bool:
        return self.page is not None

    @classmethod
    def success(cls, page: ResultPage) -> "QueryOutcome":
        return cls(page=page)

    @classmethod
    def failure(cls, error: str) -> "QueryOutcome":
        return cls(error=error)


class ControllerSnapshot(BaseModel):
    """Read-only view of the controller state for the presentation layer."""

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    rows: list[PlaceRecord] = Field(default_factory=list)
    current_page: int = 1
    page_size: int = 5
    total_pages: int = 0
    status: SearchStatus = SearchStatus.IDLE
    is_first_page: bool = True
    is_last_page: bool = True
    loading: bool = False
    generation: int = 0

    @property
    def status_message(self) -> str:
        return self.status.message

    @property
    def first_row_number(self) -> int:
        """1-based ordinal of the first row on the current page."""
        return (self.current_page - 1) * self.page_size + 1
