"""
In-memory data store for the catalogue API.

``CatalogStore`` holds every entity collection in insertion-ordered
dictionaries keyed by id. One instance is built at application startup
and handed to the routes through a FastAPI dependency, so tests can
simply construct a fresh store. If you wish to replace this with a
database, keep the method signatures: the routes and the search
pipeline only talk to this interface.

Read paths return ``None`` (or an empty list) for missing records;
update and delete paths raise ``NotFoundError``.
"""

from __future__ import annotations

import re
import threading
from itertools import count
from typing import Dict, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

from .errors import ConflictError, NotFoundError
from .schemas import (
    Blog,
    BlogCreate,
    BlogUpdate,
    Category,
    CategoryCreate,
    Guide,
    GuideCreate,
    Prompt,
    PromptCreate,
    PromptUpdate,
    Tool,
    ToolCreate,
    ToolUpdate,
    ToolWithDetails,
    User,
    UserCreate,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_SLUG = re.compile(r"[a-z0-9_]+(?:-[a-z0-9_]+)*")


def slugify(name: str) -> str:
    """Derive a URL slug from a tool name.

    The name is lowercased, every character that is neither an ASCII
    word character nor whitespace is dropped, and runs of whitespace
    become a single hyphen: ``"Copy.ai Pro"`` -> ``"copyai-pro"``.
    """
    return _WHITESPACE.sub("-", _NON_WORD.sub("", name.lower()))


def is_slug(value: str) -> bool:
    """True for lowercase ASCII word runs joined by single hyphens."""
    return _SLUG.fullmatch(value) is not None


def _norm(s: Optional[str]) -> str:
    return (s or "").lower()


class CatalogStore:
    """Authoritative holder of users, categories, tools and tool content."""

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._categories: Dict[int, Category] = {}
        self._tools: Dict[int, Tool] = {}
        self._blogs: Dict[int, Blog] = {}
        self._prompts: Dict[int, Prompt] = {}
        self._guides: Dict[int, Guide] = {}
        # Held by callers across check-then-write sequences.
        self.lock = threading.RLock()
        # Ids are never reused, even after a delete.
        self._ids: Dict[str, Iterator[int]] = {
            kind: count(1) for kind in ("user", "category", "tool", "blog", "prompt", "guide")
        }

    def _next_id(self, kind: str) -> int:
        return next(self._ids[kind])

    @staticmethod
    def _merge(record: ModelT, changes: BaseModel) -> ModelT:
        return record.model_copy(update=changes.model_dump(exclude_unset=True))

    # ------------------------------------------------------------------
    # Users

    def create_user(self, data: UserCreate) -> User:
        user = User(id=self._next_id("user"), **data.model_dump())
        self._users[user.id] = user
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.username == username), None)

    # ------------------------------------------------------------------
    # Categories

    def create_category(self, data: CategoryCreate) -> Category:
        category = Category(id=self._next_id("category"), **data.model_dump())
        self._categories[category.id] = category
        return category

    def get_categories(self) -> List[Category]:
        return list(self._categories.values())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return next((c for c in self._categories.values() if c.slug == slug), None)

    def delete_category(self, category_id: int) -> None:
        """Remove a category that no tool references.

        Raises
        ------
        NotFoundError
            If the category does not exist.
        ConflictError
            If at least one tool still points at the category.
        """
        if category_id not in self._categories:
            raise NotFoundError("Category not found")
        if self.get_tools_by_category(category_id):
            raise ConflictError("Category is still referenced by tools")
        del self._categories[category_id]

    # ------------------------------------------------------------------
    # Tools

    def create_tool(self, data: ToolCreate) -> Tool:
        tool = Tool(id=self._next_id("tool"), **data.model_dump())
        self._tools[tool.id] = tool
        return tool

    def get_tools(self) -> List[Tool]:
        return list(self._tools.values())

    def get_tool(self, tool_id: int) -> Optional[Tool]:
        return self._tools.get(tool_id)

    def get_tool_by_slug(self, slug: str) -> Optional[Tool]:
        return next((t for t in self._tools.values() if t.slug == slug), None)

    def get_tools_by_category(self, category_id: int) -> List[Tool]:
        return [t for t in self._tools.values() if t.category_id == category_id]

    def get_featured_tools(self) -> List[Tool]:
        return [t for t in self._tools.values() if t.featured]

    def get_tool_with_details(self, tool_id: int) -> Optional[ToolWithDetails]:
        """Join a tool with its category, blog, prompts and guide.

        A tool whose category cannot be resolved is reported as missing:
        the category is the one required side of the join.

        Parameters
        ----------
        tool_id : int
            Identifier of the tool.

        Returns
        -------
        Optional[ToolWithDetails]
            The joined record, or ``None`` when the tool or its category
            is absent.
        """
        tool = self._tools.get(tool_id)
        if tool is None:
            return None
        category = self._categories.get(tool.category_id)
        if category is None:
            return None
        return ToolWithDetails(
            **tool.model_dump(),
            category=category,
            blog=self.get_blog_by_tool_id(tool_id),
            prompts=self.get_prompts_by_tool_id(tool_id),
            guide=self.get_guide_by_tool_id(tool_id),
        )

    def get_tool_with_details_by_slug(self, slug: str) -> Optional[ToolWithDetails]:
        tool = self.get_tool_by_slug(slug)
        if tool is None:
            return None
        return self.get_tool_with_details(tool.id)

    def update_tool(self, tool_id: int, data: ToolUpdate) -> Tool:
        tool = self._tools.get(tool_id)
        if tool is None:
            raise NotFoundError("Tool not found")
        updated = self._merge(tool, data)
        self._tools[tool_id] = updated
        return updated

    def delete_tool(self, tool_id: int) -> None:
        if tool_id not in self._tools:
            raise NotFoundError("Tool not found")
        del self._tools[tool_id]

    def search_tools(self, query: str) -> List[Tool]:
        """Case-insensitive substring match on tool name or description.

        Parameters
        ----------
        query : str
            Text to look for. Matching is plain substring containment,
            no tokenisation and no ranking.

        Returns
        -------
        List[Tool]
            Every matching tool, in insertion order.
        """
        nq = _norm(query)
        return [
            t for t in self._tools.values()
            if nq in _norm(t.name) or nq in _norm(t.description)
        ]

    # ------------------------------------------------------------------
    # Blogs

    def create_blog(self, data: BlogCreate) -> Blog:
        blog = Blog(id=self._next_id("blog"), **data.model_dump())
        self._blogs[blog.id] = blog
        return blog

    def get_blog(self, blog_id: int) -> Optional[Blog]:
        return self._blogs.get(blog_id)

    def get_blog_by_tool_id(self, tool_id: int) -> Optional[Blog]:
        return next((b for b in self._blogs.values() if b.tool_id == tool_id), None)

    def update_blog(self, blog_id: int, data: BlogUpdate) -> Blog:
        blog = self._blogs.get(blog_id)
        if blog is None:
            raise NotFoundError("Blog not found")
        updated = self._merge(blog, data)
        self._blogs[blog_id] = updated
        return updated

    def delete_blog(self, blog_id: int) -> None:
        if blog_id not in self._blogs:
            raise NotFoundError("Blog not found")
        del self._blogs[blog_id]

    # ------------------------------------------------------------------
    # Prompts

    def create_prompt(self, data: PromptCreate) -> Prompt:
        prompt = Prompt(id=self._next_id("prompt"), **data.model_dump())
        self._prompts[prompt.id] = prompt
        return prompt

    def get_prompt(self, prompt_id: int) -> Optional[Prompt]:
        return self._prompts.get(prompt_id)

    def get_prompts_by_tool_id(self, tool_id: int) -> List[Prompt]:
        return [p for p in self._prompts.values() if p.tool_id == tool_id]

    def update_prompt(self, prompt_id: int, data: PromptUpdate) -> Prompt:
        prompt = self._prompts.get(prompt_id)
        if prompt is None:
            raise NotFoundError("Prompt not found")
        updated = self._merge(prompt, data)
        self._prompts[prompt_id] = updated
        return updated

    def delete_prompt(self, prompt_id: int) -> None:
        if prompt_id not in self._prompts:
            raise NotFoundError("Prompt not found")
        del self._prompts[prompt_id]

    # ------------------------------------------------------------------
    # Guides

    def create_guide(self, data: GuideCreate) -> Guide:
        guide = Guide(id=self._next_id("guide"), **data.model_dump())
        self._guides[guide.id] = guide
        return guide

    def get_guide(self, guide_id: int) -> Optional[Guide]:
        return self._guides.get(guide_id)

    def get_guide_by_tool_id(self, tool_id: int) -> Optional[Guide]:
        return next((g for g in self._guides.values() if g.tool_id == tool_id), None)
