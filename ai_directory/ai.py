# ai_directory/ai.py
"""
Ranking backends for AI-enhanced search.

Every backend implements ``rank(query, candidates) -> RankingOutcome``.
A backend never raises for an upstream problem: it logs it and reports a
short diagnostic in ``RankingOutcome.error`` so that the search pipeline
can fall back to the plain results.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from openai import OpenAI
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sentence_transformers import SentenceTransformer
from typing_extensions import Protocol

from .catalog.errors import UpstreamFailure
from .catalog.schemas import Tool
from .config import Settings

logger = logging.getLogger(__name__)

PARSE_ERROR = "Failed to parse AI response"
UPSTREAM_ERROR = "AI enhancement failed, showing standard search results"
DISABLED_ERROR = "AI search is disabled"

SYSTEM_PROMPT = (
    "You are an AI tool search expert helping users find the right AI tools for their needs.\n"
    "Given a user query and a list of AI tools, rank the tools by relevance to the query.\n"
    "For each tool, provide a brief explanation (20-30 words) of why it's relevant to the user's query."
)


class RankingEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tool_id: int = Field(alias="toolId")
    relevance_score: float = Field(alias="relevanceScore", ge=0, le=100)
    relevance_explanation: str = Field(default="", alias="relevanceExplanation")


class RankingOutcome(BaseModel):
    entries: List[RankingEntry] = Field(default_factory=list)
    error: Optional[str] = None


class Ranker(Protocol):
    def rank(self, query: str, candidates: Sequence[Tool]) -> RankingOutcome:
        ...


def candidate_payload(candidates: Sequence[Tool]) -> List[Dict[str, Any]]:
    """Reduced projection of each candidate sent to the ranking service."""
    return [
        {"id": t.id, "name": t.name, "description": t.description, "category": t.category_id}
        for t in candidates
    ]


def build_prompt(query: str, candidates: Sequence[Tool]) -> str:
    tool_data = json.dumps(candidate_payload(candidates), indent=2)
    return (
        f'User search query: "{query}"\n'
        f"Available AI tools:\n{tool_data}\n\n"
        "Return a JSON object with a \"results\" array of objects with the following structure:\n"
        "[\n"
        "  {\n"
        '    "toolId": number,\n'
        '    "relevanceScore": number (0-100),\n'
        '    "relevanceExplanation": "Brief explanation of why this tool is relevant"\n'
        "  }\n"
        "]\n"
        "Include only tools that are actually relevant (score > 50). "
        "Sort by relevanceScore in descending order."
    )


def parse_ranking_content(content: Optional[str]) -> List[RankingEntry]:
    """Turn the model's text output into ranking entries.

    The payload is either a JSON array of entries or an object holding
    them under ``results``; any other JSON shape yields no entries.
    Individual entries that do not validate are skipped.

    Raises
    ------
    UpstreamFailure
        If the content is empty or is not JSON at all.
    """
    if not content:
        raise UpstreamFailure("Empty response from ranking service")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise UpstreamFailure(f"Invalid JSON from ranking service: {exc}") from exc

    if isinstance(data, dict):
        items = data.get("results", [])
    elif isinstance(data, list):
        items = data
    else:
        items = []
    if not isinstance(items, list):
        return []

    entries: List[RankingEntry] = []
    for item in items:
        try:
            entries.append(RankingEntry.model_validate(item))
        except ValidationError:
            logger.warning("Skipping malformed ranking entry: %r", item)
    return entries


class OpenAIRanker:
    """Ranks candidates with an OpenAI chat completion in JSON mode.

    The client is created on first use so that a missing API key only
    degrades AI search instead of preventing startup. Retries are
    disabled: a failed call falls back immediately.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        timeout: float = 15.0,
        client: Optional[Any] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def rank(self, query: str, candidates: Sequence[Tool]) -> RankingOutcome:
        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(query, candidates)},
                ],
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content
        except Exception:
            logger.exception("Error in AI enhanced search")
            return RankingOutcome(error=UPSTREAM_ERROR)

        try:
            entries = parse_ranking_content(content)
        except UpstreamFailure as exc:
            logger.error("Error parsing OpenAI response: %s", exc.message)
            return RankingOutcome(error=PARSE_ERROR)
        return RankingOutcome(entries=entries)


def _cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return 0.0
    return float(np.dot(a, b) / denom)


class EmbeddingRanker:
    """Ranks candidates locally by sentence-embedding similarity.

    Scores are the cosine similarity between the query and the tool's
    "name. description" text, clipped at zero and scaled to 0-100. Like
    the OpenAI prompt, only candidates scoring above ``min_score`` are
    returned.
    """

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        min_score: int = 50,
        encoder: Optional[Any] = None,
    ) -> None:
        self.model_name = model_name
        self.min_score = min_score
        self._encoder = encoder

    def _get_encoder(self) -> Any:
        # Loading the model is slow; do it once, on the first AI search.
        if self._encoder is None:
            logger.info("Loading embedding model %s", self.model_name)
            self._encoder = SentenceTransformer(self.model_name)
        return self._encoder

    def rank(self, query: str, candidates: Sequence[Tool]) -> RankingOutcome:
        texts = [query] + [f"{t.name}. {t.description}" for t in candidates]
        try:
            vectors = self._get_encoder().encode(texts, convert_to_numpy=True)
        except Exception:
            logger.exception("Error computing embeddings for AI search")
            return RankingOutcome(error=UPSTREAM_ERROR)

        q_vec = vectors[0]
        entries: List[RankingEntry] = []
        for tool, vec in zip(candidates, vectors[1:]):
            score = round(max(_cosine_similarity(q_vec, vec), 0.0) * 100)
            if score <= self.min_score:
                continue
            entries.append(
                RankingEntry(
                    tool_id=tool.id,
                    relevance_score=score,
                    relevance_explanation=(
                        f"{tool.name} matches the meaning of your query "
                        f"with a semantic similarity of {score}/100."
                    ),
                )
            )
        return RankingOutcome(entries=entries)


class NullRanker:
    """Backend used when AI search is switched off."""

    def rank(self, query: str, candidates: Sequence[Tool]) -> RankingOutcome:
        return RankingOutcome(error=DISABLED_ERROR)


def build_ranker(settings: Settings) -> Ranker:
    if settings.RANKER_BACKEND == "embedding":
        return EmbeddingRanker(settings.EMBEDDING_MODEL_NAME, settings.EMBEDDING_MIN_SCORE)
    if settings.RANKER_BACKEND == "none":
        return NullRanker()
    return OpenAIRanker(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        timeout=settings.AI_RANK_TIMEOUT_SECONDS,
    )
