"""
Route definitions for the catalogue API.

Endpoints under /api:
- GET    /categories                : list categories
- GET    /tools                     : list tools, filter by category, or search (q, ai)
- GET    /tools/featured            : featured tools
- GET    /tools/{slug}              : one tool with category, blog, prompts and guide
- GET    /categories/{slug}/tools   : tools of one category
- POST   /tools/submit              : submit a tool (auth)
- POST   /prompts, /blogs, /guides  : submit tool content (auth)
- PUT    /tools|blogs|prompts/{id}  : partial update (auth)
- DELETE /tools|blogs|prompts/{id}  : delete (auth)
- GET    /user/favorites            : favourites of the caller (auth, always empty for now)
- GET    /auth/user                 : the authenticated caller
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..ai import Ranker
from ..deps import get_current_user, get_ranker, get_store
from ..search import rank_candidates
from .errors import CatalogValidationError, ConflictError, NotFoundError
from .schemas import (
    RATING_SCALE,
    Blog,
    BlogCreate,
    BlogSubmission,
    BlogUpdate,
    Category,
    Guide,
    GuideCreate,
    GuideSubmission,
    MessageResponse,
    Prompt,
    PromptCreate,
    PromptSubmission,
    PromptUpdate,
    Tool,
    ToolCreate,
    ToolSubmission,
    ToolUpdate,
    ToolWithDetails,
    User,
)
from .store import CatalogStore, is_slug, slugify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])


def _unique_slug(store: CatalogStore, base: str) -> str:
    """Return ``base``, or ``base-2``, ``base-3``... if it is taken."""
    slug = base
    suffix = 2
    while store.get_tool_by_slug(slug) is not None:
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


def _check_duplicates(
    store: CatalogStore,
    name: Optional[str] = None,
    website_url: Optional[str] = None,
    slug: Optional[str] = None,
    exclude_id: Optional[int] = None,
) -> None:
    """Raise ``ConflictError`` if another tool already uses one of the values.

    Name and website URL compare case-insensitively, slug exactly. The
    tool ``exclude_id`` is ignored so an update may keep its own values.
    """
    others = [t for t in store.get_tools() if t.id != exclude_id]
    if name is not None:
        duplicate = next((t for t in others if t.name.lower() == name.lower()), None)
        if duplicate is not None:
            raise ConflictError("A tool with this name already exists", duplicate=duplicate)
    if website_url is not None:
        url = website_url.lower()
        duplicate = next((t for t in others if t.website_url.lower() == url), None)
        if duplicate is not None:
            raise ConflictError("A tool with this website URL already exists", duplicate=duplicate)
    if slug is not None:
        duplicate = next((t for t in others if t.slug == slug), None)
        if duplicate is not None:
            raise ConflictError("A tool with this slug already exists", duplicate=duplicate)


# ---------------------------------------------------------------------------
# Browsing


@router.get("/categories", response_model=List[Category])
def list_categories(store: CatalogStore = Depends(get_store)) -> List[Category]:
    return store.get_categories()


@router.get("/tools")
def list_tools(
    q: Optional[str] = Query(default=None, description="Search text (name/description)"),
    ai: Optional[str] = Query(default=None, description='"true" to re-rank results with AI'),
    category_id: Optional[int] = Query(default=None, alias="categoryId", description="Filter by category"),
    store: CatalogStore = Depends(get_store),
    ranker: Ranker = Depends(get_ranker),
):
    """
    Returns tools.

    - With ``q``: a search response ``{query, results, aiEnhanced, message, error}``.
      AI failures never fail the request; they show up in ``error``.
    - With ``categoryId``: the tools of that category.
    - Otherwise: every tool.
    """
    query = (q or "").strip()
    if query:
        candidates = store.search_tools(query)
        return rank_candidates(query, candidates, use_ai=ai == "true", ranker=ranker)
    if category_id:
        return store.get_tools_by_category(category_id)
    return store.get_tools()


@router.get("/tools/featured", response_model=List[Tool])
def list_featured_tools(store: CatalogStore = Depends(get_store)) -> List[Tool]:
    return store.get_featured_tools()


@router.get("/tools/{slug}", response_model=ToolWithDetails)
def get_tool(slug: str, store: CatalogStore = Depends(get_store)) -> ToolWithDetails:
    tool = store.get_tool_with_details_by_slug(slug)
    if tool is None:
        raise NotFoundError("Tool not found")
    return tool


@router.get("/categories/{slug}/tools", response_model=List[Tool])
def list_category_tools(slug: str, store: CatalogStore = Depends(get_store)) -> List[Tool]:
    category = store.get_category_by_slug(slug)
    if category is None:
        raise NotFoundError("Category not found")
    return store.get_tools_by_category(category.id)


# ---------------------------------------------------------------------------
# Submissions


@router.post("/tools/submit", response_model=Tool, status_code=status.HTTP_201_CREATED)
def submit_tool(
    body: ToolSubmission,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Tool:
    """Create a tool after duplicate checks on name and website URL.

    Both checks are case-insensitive exact matches against every stored
    tool. Nothing is written unless all checks pass.
    """
    base_slug = slugify(body.name)
    if not base_slug.strip("-"):
        raise CatalogValidationError("Tool name must contain letters or digits")

    with store.lock:
        _check_duplicates(store, name=body.name, website_url=body.website_url)
        tool = store.create_tool(
            ToolCreate(
                name=body.name,
                slug=_unique_slug(store, base_slug),
                description=body.description,
                category_id=body.category_id,
                website_url=body.website_url,
                affiliate_url=body.affiliate_url,
                image_url=body.image_url,
                rating=round(body.rating * RATING_SCALE) if body.rating is not None else None,
                featured=False,
                created_by_id=user.id,
                pricing_type=body.pricing_type or "free",
                pricing=body.price,
            )
        )
    logger.info("Tool %s (%s) submitted by user %s", tool.id, tool.slug, user.id)
    return tool


@router.post("/prompts", response_model=Prompt, status_code=status.HTTP_201_CREATED)
def submit_prompt(
    body: PromptSubmission,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Prompt:
    return store.create_prompt(
        PromptCreate(
            tool_id=body.tool_id,
            title=body.title,
            prompt_text=body.prompt_text,
            created_by_id=user.id,
        )
    )


@router.post("/blogs", response_model=Blog, status_code=status.HTTP_201_CREATED)
def submit_blog(
    body: BlogSubmission,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Blog:
    return store.create_blog(
        BlogCreate(tool_id=body.tool_id, title=body.title, content=body.content, author_id=user.id)
    )


@router.post("/guides", response_model=Guide, status_code=status.HTTP_201_CREATED)
def submit_guide(
    body: GuideSubmission,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Guide:
    return store.create_guide(
        GuideCreate(tool_id=body.tool_id, title=body.title, steps=body.steps, author_id=user.id)
    )


# ---------------------------------------------------------------------------
# Edits and deletions


@router.put("/tools/{tool_id}", response_model=Tool)
def update_tool(
    tool_id: int,
    body: ToolUpdate,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Tool:
    """Merge the given fields into a tool.

    A new slug must already be in slug form and unused; a new name or
    website URL goes through the same duplicate checks as a submission.
    """
    if body.slug is not None and not is_slug(body.slug):
        raise CatalogValidationError("Slug may only contain lowercase letters, digits, underscores and hyphens")

    with store.lock:
        if store.get_tool(tool_id) is None:
            raise NotFoundError("Tool not found")
        _check_duplicates(
            store,
            name=body.name,
            website_url=body.website_url,
            slug=body.slug,
            exclude_id=tool_id,
        )
        return store.update_tool(tool_id, body)


@router.put("/blogs/{blog_id}", response_model=Blog)
def update_blog(
    blog_id: int,
    body: BlogUpdate,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Blog:
    return store.update_blog(blog_id, body)


@router.put("/prompts/{prompt_id}", response_model=Prompt)
def update_prompt(
    prompt_id: int,
    body: PromptUpdate,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Prompt:
    return store.update_prompt(prompt_id, body)


@router.delete("/tools/{tool_id}", response_model=MessageResponse)
def delete_tool(
    tool_id: int,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> MessageResponse:
    store.delete_tool(tool_id)
    logger.info("Tool %s deleted by user %s", tool_id, user.id)
    return MessageResponse(message="Tool deleted successfully")


@router.delete("/blogs/{blog_id}", response_model=MessageResponse)
def delete_blog(
    blog_id: int,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> MessageResponse:
    store.delete_blog(blog_id)
    return MessageResponse(message="Blog deleted successfully")


@router.delete("/prompts/{prompt_id}", response_model=MessageResponse)
def delete_prompt(
    prompt_id: int,
    store: CatalogStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> MessageResponse:
    store.delete_prompt(prompt_id)
    return MessageResponse(message="Prompt deleted successfully")


# ---------------------------------------------------------------------------
# Current user


@router.get("/user/favorites", response_model=List[Tool], tags=["user"])
def list_favorites(user: User = Depends(get_current_user)) -> List[Tool]:
    # Favourites are not stored yet.
    return []


@router.get("/auth/user", response_model=User, tags=["user"])
def get_auth_user(user: User = Depends(get_current_user)) -> User:
    return user
