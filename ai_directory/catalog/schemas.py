"""
Pydantic schema definitions for the catalog module.

Stored records (``Category``, ``Tool``, ``Blog``, ``Prompt``,
``Guide``, ``User``) are plain pydantic models held by the in-memory
store. Each has a ``...Create`` counterpart without the ``id`` (the
store assigns it) and, where the API allows edits, an ``...Update``
model whose fields are all optional so that only the fields a client
sends are merged onto the record.

Request bodies for the submission endpoints have their own models
(``ToolSubmission`` and friends): they carry the exact field-presence
and range rules the API promises and produce a ``RequestValidationError``
instead of ad hoc null checks in the routes.

All models speak camelCase on the wire (``categoryId``,
``websiteUrl``...) and accept either camelCase or snake_case on input.
"""

from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    StringConstraints,
    field_validator,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from typing_extensions import Annotated, Literal


PricingType = Literal["free", "freemium", "paid"]
PRICING_TYPES = ("free", "freemium", "paid")

# Stored ratings use an integer 0-50 scale standing for 0.0-5.0.
RATING_SCALE = 10
MAX_STORED_RATING = 5 * RATING_SCALE

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _reject_null(value: Any) -> Any:
    # Optional in an update means "may be omitted", not "may be cleared".
    if value is None:
        raise PydanticCustomError("null_not_allowed", "Field may not be null")
    return value


NotNullStr = Annotated[Optional[NonBlankStr], BeforeValidator(_reject_null)]
NotNullInt = Annotated[Optional[int], BeforeValidator(_reject_null)]
NotNullBool = Annotated[Optional[bool], BeforeValidator(_reject_null)]
NotNullPricing = Annotated[Optional[PricingType], BeforeValidator(_reject_null)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Users


class UserCreate(CamelModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    username: Optional[str] = None
    is_admin: bool = False


class User(UserCreate):
    """A user record owned by the external identity provider."""

    id: int


# ---------------------------------------------------------------------------
# Categories


class CategoryCreate(CamelModel):
    name: str
    slug: str
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    icon_name: Optional[str] = None
    color: Optional[str] = None


class Category(CategoryCreate):
    id: int


# ---------------------------------------------------------------------------
# Tools


class ToolCreate(CamelModel):
    """Fields of a tool as handed to ``CatalogStore.create_tool``.

    ``rating`` is stored on the 0-50 integer scale. ``structured_data``
    is free-form JSON-LD used by the front-end for SEO.
    """

    name: str
    slug: str
    description: str
    category_id: int
    website_url: str
    affiliate_url: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=0, le=MAX_STORED_RATING)
    featured: bool = False
    created_by_id: Optional[int] = None
    pricing_type: PricingType = "free"
    pricing: Optional[str] = None
    use_cases: Optional[str] = None
    pros: Optional[List[str]] = None
    cons: Optional[List[str]] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    canonical_url: Optional[str] = None
    structured_data: Optional[Dict[str, Any]] = None
    seo_score: Optional[int] = None
    performance_score: Optional[int] = None


class Tool(ToolCreate):
    id: int


class ToolUpdate(CamelModel):
    """Partial tool update. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    name: NotNullStr = None
    slug: NotNullStr = None
    description: NotNullStr = None
    category_id: NotNullInt = None
    website_url: NotNullStr = None
    affiliate_url: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=0, le=MAX_STORED_RATING)
    featured: NotNullBool = None
    pricing_type: NotNullPricing = None
    pricing: Optional[str] = None
    use_cases: Optional[str] = None
    pros: Optional[List[str]] = None
    cons: Optional[List[str]] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    canonical_url: Optional[str] = None
    structured_data: Optional[Dict[str, Any]] = None
    seo_score: Optional[int] = None
    performance_score: Optional[int] = None


class ToolSubmission(CamelModel):
    """Body of ``POST /api/tools/submit``.

    ``rating`` is given on the public 0-5 scale here; the route converts
    it to the stored 0-50 scale. ``price`` is kept as the free-text
    ``pricing`` of the tool.
    """

    name: NonBlankStr
    description: NonBlankStr
    category_id: int = Field(gt=0)
    website_url: NonBlankStr
    affiliate_url: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[float] = None
    pricing_type: Optional[str] = None
    price: Optional[str] = None

    @field_validator("pricing_type")
    @classmethod
    def _check_pricing_type(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in PRICING_TYPES:
            raise PydanticCustomError("pricing_type", "Invalid pricing type")
        return value

    @field_validator("rating")
    @classmethod
    def _check_rating(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not 0 <= value <= 5:
            raise PydanticCustomError("rating_range", "Rating must be between 0 and 5")
        return value


# ---------------------------------------------------------------------------
# Blogs, prompts and guides


class BlogCreate(CamelModel):
    tool_id: int
    title: str
    content: str
    author_id: Optional[int] = None


class Blog(BlogCreate):
    id: int


class BlogUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    tool_id: NotNullInt = None
    title: NotNullStr = None
    content: NotNullStr = None


class BlogSubmission(CamelModel):
    tool_id: int = Field(gt=0)
    title: NonBlankStr
    content: NonBlankStr
    cover_image: Optional[str] = None
    summary: Optional[str] = None
    read_time: Optional[Any] = None
    tags: Optional[List[str]] = None

    @field_validator("read_time")
    @classmethod
    def _check_read_time(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise PydanticCustomError("read_time", "Read time must be a number")


class PromptCreate(CamelModel):
    tool_id: int
    title: str
    prompt_text: str
    created_by_id: Optional[int] = None


class Prompt(PromptCreate):
    id: int


class PromptUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    tool_id: NotNullInt = None
    title: NotNullStr = None
    prompt_text: NotNullStr = None


class PromptSubmission(CamelModel):
    """Body of ``POST /api/prompts``.

    ``category`` only organises submissions on the client side, but it is
    still mandatory. ``example_output``, ``use_case`` and ``tips`` are
    accepted and not stored.
    """

    tool_id: int = Field(gt=0)
    title: NonBlankStr
    prompt_text: NonBlankStr
    category: Optional[str] = None
    example_output: Optional[str] = None
    use_case: Optional[str] = None
    tips: Optional[str] = None

    @model_validator(mode="after")
    def _require_category(self) -> "PromptSubmission":
        if not (self.category or "").strip():
            raise PydanticCustomError("category_required", "Category is required for organization")
        return self


class GuideCreate(CamelModel):
    tool_id: int
    title: str
    steps: List[str]
    author_id: Optional[int] = None


class Guide(GuideCreate):
    id: int


class GuideSubmission(CamelModel):
    tool_id: int = Field(gt=0)
    title: NonBlankStr
    steps: List[str]


# ---------------------------------------------------------------------------
# Read models


class ToolWithDetails(Tool):
    """A tool joined with its category and associated content."""

    category: Category
    blog: Optional[Blog] = None
    prompts: List[Prompt] = Field(default_factory=list)
    guide: Optional[Guide] = None


class RankedTool(Tool):
    """A tool as returned by search.

    ``relevance_score`` (0-100) and ``relevance_explanation`` are only
    set when the AI ranking step produced the result.
    """

    relevance_score: Optional[float] = None
    relevance_explanation: Optional[str] = None

    @model_serializer(mode="wrap")
    def _omit_unranked(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if self.relevance_score is None and self.relevance_explanation is None:
            for key in ("relevance_score", "relevanceScore", "relevance_explanation", "relevanceExplanation"):
                data.pop(key, None)
        return data


class SearchResponse(CamelModel):
    """Response of ``GET /api/tools`` when a query is given."""

    query: str
    results: List[RankedTool]
    ai_enhanced: bool = False
    message: Optional[str] = None
    error: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
