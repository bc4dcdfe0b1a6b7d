"""
Search pipeline: plain substring candidates, optionally re-ranked by AI.

The AI step is an enhancement and never the reason a search fails or
comes back empty: every failure path returns the unranked candidates
with a ``message`` or ``error`` explaining what happened.
"""

import logging
from typing import List, Optional, Sequence

from .ai import UPSTREAM_ERROR, Ranker, RankingEntry
from .catalog.schemas import RankedTool, SearchResponse, Tool

logger = logging.getLogger(__name__)

MIN_AI_QUERY_LENGTH = 3

AI_SUCCESS_MESSAGE = "AI-enhanced search results"
NO_AI_RESULTS_MESSAGE = "No AI-ranked results available, showing standard search results"


def is_ai_eligible(query: str, candidates: Sequence[Tool], use_ai: bool) -> bool:
    return use_ai and bool(candidates) and len(query.strip()) >= MIN_AI_QUERY_LENGTH


def reconcile(candidates: Sequence[Tool], entries: Sequence[RankingEntry]) -> List[RankedTool]:
    """Attach ranking entries to the candidates they refer to.

    Entries naming a tool outside the candidate set are dropped, as are
    repeated entries for the same tool (the first one wins). The result
    is sorted by descending relevance score; ties keep the ranker's
    order. No score threshold is applied here.
    """
    by_id = {t.id: t for t in candidates}
    seen = set()
    ranked: List[RankedTool] = []
    for entry in entries:
        tool = by_id.get(entry.tool_id)
        if tool is None:
            logger.warning("Dropping ranking entry for unknown tool id %s", entry.tool_id)
            continue
        if entry.tool_id in seen:
            continue
        seen.add(entry.tool_id)
        ranked.append(
            RankedTool(
                **tool.model_dump(),
                relevance_score=entry.relevance_score,
                relevance_explanation=entry.relevance_explanation,
            )
        )
    ranked.sort(key=lambda t: t.relevance_score, reverse=True)
    return ranked


def rank_candidates(
    query: str,
    candidates: Sequence[Tool],
    use_ai: bool = False,
    ranker: Optional[Ranker] = None,
) -> SearchResponse:
    """Build the search response for ``query`` from its candidate set.

    Parameters
    ----------
    query : str
        The trimmed search query.
    candidates : Sequence[Tool]
        Tools matching the query by substring, in store order.
    use_ai : bool
        Whether the caller asked for AI ranking.
    ranker : Optional[Ranker]
        Ranking backend; without one the plain results are returned.

    Returns
    -------
    SearchResponse
        ``ai_enhanced`` is true only when the ranker produced at least
        one usable entry. Otherwise ``results`` are the candidates
        unchanged, with ``message`` set when the ranker found nothing
        and ``error`` set when it failed.
    """
    plain = [RankedTool(**t.model_dump()) for t in candidates]
    if ranker is None or not is_ai_eligible(query, candidates, use_ai):
        return SearchResponse(query=query, results=plain)

    try:
        outcome = ranker.rank(query, candidates)
    except Exception:
        logger.exception("AI search error for query %r", query)
        return SearchResponse(query=query, results=plain, error=UPSTREAM_ERROR)

    if outcome.error:
        logger.warning("AI ranking fell back for query %r: %s", query, outcome.error)
        return SearchResponse(query=query, results=plain, error=outcome.error)

    ranked = reconcile(candidates, outcome.entries)
    if not ranked:
        return SearchResponse(query=query, results=plain, message=NO_AI_RESULTS_MESSAGE)

    return SearchResponse(
        query=query,
        results=ranked,
        ai_enhanced=True,
        message=AI_SUCCESS_MESSAGE,
    )
