from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CatalogRequest(BaseModel):
    """Fields shared by every catalog request body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    platform: Optional[str] = Field(None, description="ios or android, defaults to ios")
    country: Optional[str] = Field(None, description="Two letter store country code")


class SearchRequest(CatalogRequest):
    """Body of POST /api/search."""
    term: Optional[str] = None
    num: Optional[int] = None


class DetailsRequest(CatalogRequest):
    """Body of POST /api/details."""
    app_id: Optional[Union[str, int]] = Field(None, alias="appId")


class ReviewsRequest(CatalogRequest):
    """Body of POST /api/reviews."""
    app_id: Optional[Union[str, int]] = Field(None, alias="appId")
    num: Optional[int] = None
    sort: Optional[str] = None


class ListRequest(CatalogRequest):
    """Body of POST /api/list."""
    category: Optional[Union[str, int]] = None
    num: Optional[int] = None
    collection: Optional[str] = None


class SimilarRequest(CatalogRequest):
    """Body of POST /api/similar."""
    app_id: Optional[Union[str, int]] = Field(None, alias="appId")
