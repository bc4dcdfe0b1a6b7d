from ai_directory.ai import UPSTREAM_ERROR, RankingEntry, RankingOutcome
from ai_directory.search import (
    AI_SUCCESS_MESSAGE,
    NO_AI_RESULTS_MESSAGE,
    rank_candidates,
    reconcile,
)


def _entry(tool_id, score, why="relevant"):
    return RankingEntry(tool_id=tool_id, relevance_score=score, relevance_explanation=why)


def test_plain_search_when_ai_not_requested(store, copilot, tabnine, ranker):
    candidates = store.search_tools("ai")
    response = rank_candidates("ai", candidates, use_ai=False, ranker=ranker)

    assert response.ai_enhanced is False
    assert [t.id for t in response.results] == [copilot.id, tabnine.id]
    assert all(t.relevance_score is None for t in response.results)
    assert response.message is None and response.error is None
    assert ranker.calls == []


def test_short_query_skips_ranking(store, copilot, ranker):
    response = rank_candidates("ai", store.search_tools("ai"), use_ai=True, ranker=ranker)
    assert response.ai_enhanced is False
    assert ranker.calls == []


def test_no_candidates_skips_ranking(store, copilot, ranker):
    response = rank_candidates("midjourney", [], use_ai=True, ranker=ranker)
    assert response.results == []
    assert response.ai_enhanced is False
    assert ranker.calls == []


def test_successful_ranking_sorts_and_annotates(store, copilot, tabnine, jasper, ranker):
    ranker.outcome = RankingOutcome(
        entries=[_entry(copilot.id, 70, "pairs with you"), _entry(jasper.id, 95, "writes")]
    )
    candidates = store.search_tools("ai ")
    response = rank_candidates("ai tools", candidates, use_ai=True, ranker=ranker)

    assert ranker.calls == [("ai tools", [copilot.id, tabnine.id, jasper.id])]
    assert response.ai_enhanced is True
    assert response.message == AI_SUCCESS_MESSAGE
    assert [(t.id, t.relevance_score) for t in response.results] == [(jasper.id, 95), (copilot.id, 70)]
    assert response.results[1].relevance_explanation == "pairs with you"
    assert response.results[1].name == "GitHub Copilot"


def test_unknown_tool_ids_are_dropped(store, copilot, tabnine, ranker):
    ranker.outcome = RankingOutcome(entries=[_entry(999, 99), _entry(tabnine.id, 80)])
    response = rank_candidates("code", store.search_tools("co"), use_ai=True, ranker=ranker)

    assert [t.id for t in response.results] == [tabnine.id]
    assert response.ai_enhanced is True


def test_only_unknown_ids_falls_back_with_message(store, copilot, tabnine, ranker):
    ranker.outcome = RankingOutcome(entries=[_entry(999, 99)])
    candidates = store.search_tools("ai")
    response = rank_candidates("ai p", candidates, use_ai=True, ranker=ranker)

    assert [t.id for t in response.results] == [t.id for t in candidates]
    assert response.message == NO_AI_RESULTS_MESSAGE
    assert response.ai_enhanced is False
    assert response.error is None


def test_empty_ranking_falls_back_with_message(store, copilot, ranker):
    response = rank_candidates("pair", store.search_tools("pair"), use_ai=True, ranker=ranker)
    assert [t.id for t in response.results] == [copilot.id]
    assert response.message == NO_AI_RESULTS_MESSAGE


def test_ranker_error_falls_back_with_error(store, copilot, tabnine, ranker):
    ranker.outcome = RankingOutcome(error="Failed to parse AI response")
    candidates = store.search_tools("ai")
    response = rank_candidates("code", candidates, use_ai=True, ranker=ranker)

    assert [t.id for t in response.results] == [copilot.id, tabnine.id]
    assert response.error == "Failed to parse AI response"
    assert response.ai_enhanced is False


def test_ranker_exception_falls_back_with_error(store, copilot, tabnine, ranker):
    ranker.exc = TimeoutError("ranking timed out")
    response = rank_candidates("code", store.search_tools("ai"), use_ai=True, ranker=ranker)

    assert [t.id for t in response.results] == [copilot.id, tabnine.id]
    assert response.error == UPSTREAM_ERROR
    assert len(ranker.calls) == 1


def test_low_scores_are_not_filtered(store, copilot, tabnine):
    # The >50 cutoff is an instruction to the ranker, not enforced here.
    ranked = reconcile([copilot, tabnine], [_entry(copilot.id, 10), _entry(tabnine.id, 30)])
    assert [(t.id, t.relevance_score) for t in ranked] == [(tabnine.id, 30), (copilot.id, 10)]


def test_reconcile_keeps_first_entry_per_tool_and_stable_ties(store, copilot, tabnine):
    ranked = reconcile(
        [copilot, tabnine],
        [_entry(copilot.id, 60, "first"), _entry(tabnine.id, 60), _entry(copilot.id, 99, "again")],
    )
    assert [t.id for t in ranked] == [copilot.id, tabnine.id]
    assert ranked[0].relevance_explanation == "first"
