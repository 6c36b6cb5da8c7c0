# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Three shapes flow through the pipeline:
#
#   FetchParams    validated filter parameters (pydantic model, frozen)
#   RawItem        one record exactly as the Qiita API returned it
#   ProjectedItem  the trimmed record handed back to the caller
#
# RawItem IS AN OPEN MAPPING:
#   Upstream adds and drops fields over time.  The projector reads records
#   with explicit key lookups only, so an unknown or missing key never
#   raises.
#
#   The RawItemUser / RawItemTag / QiitaItem TypedDicts below are documentation
#   of the shape we usually see.  Nothing enforces them at runtime.
#
# FetchParams:
#   pydantic model with the range constraints (1 <= page <= 100).  All
#   violations are collected in one pass, in field order.
# =============================================================================

from datetime import date
from typing import Any, Mapping, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError


# -----------------------------------------------------------------------------
# FetchParams - the validated filter vocabulary
# -----------------------------------------------------------------------------
# Every field is optional.  Absence (None) always means "no filter applied".
# -----------------------------------------------------------------------------
class FetchParams(BaseModel):
    """Validated parameters for one listing request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: Optional[int] = Field(default=None, ge=1, le=100)
    per_page: Optional[int] = Field(default=None, ge=1, le=100)
    created_from: Optional[date] = None
    created_to: Optional[date] = None
    tags: Optional[list[str]] = None
    additional_fields: Optional[list[str]] = None

    @field_validator("page", "per_page", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        # JSON true/false would otherwise pass as 1/0.
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value


# -----------------------------------------------------------------------------
# RawItem - what the upstream API sends back
# -----------------------------------------------------------------------------
class RawItemUser(TypedDict, total=False):
    description: Optional[str]
    facebook_id: Optional[str]
    followees_count: int
    followers_count: int
    github_login_name: Optional[str]
    id: str
    items_count: int
    linkedin_id: Optional[str]
    location: Optional[str]
    name: str
    organization: Optional[str]
    permanent_id: int
    profile_image_url: str
    team_only: bool
    twitter_screen_name: Optional[str]
    website_url: Optional[str]


class RawItemTag(TypedDict, total=False):
    name: str
    versions: list[str]


class QiitaItem(TypedDict, total=False):
    rendered_body: str
    body: str
    coediting: bool
    comments_count: int
    created_at: str
    group: Optional[str]
    id: str
    likes_count: int
    private: bool
    reactions_count: int
    tags: list[RawItemTag]
    title: str
    updated_at: str
    url: str
    user: RawItemUser
    page_views_count: Optional[int]
    team_membership: Optional[str]
    organization_url_name: Optional[str]
    slide: bool


RawItem = Mapping[str, Any]
ProjectedItem = dict[str, Any]


# -----------------------------------------------------------------------------
# The default field set
# -----------------------------------------------------------------------------
# Top-level keys copied by value, plus nested sub-fields copied one by one.
# For "user" we take ONLY the name, never the whole user object.
# -----------------------------------------------------------------------------
DEFAULT_FIELDS: tuple[str, ...] = ("title", "url", "created_at")
DEFAULT_NESTED_FIELDS: dict[str, tuple[str, ...]] = {"user": ("name",)}
