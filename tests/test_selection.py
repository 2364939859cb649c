"""Tests for candidate filtering and repo selection."""

from portfolio.application.selection import active_candidates, select_repos

from conftest import make_record


def test_active_candidates_drops_archived_and_forks():
    records = [
        make_record("keep"),
        make_record("old", archived=True),
        make_record("copy", fork=True),
        make_record("also-keep"),
    ]
    assert [r.name for r in active_candidates(records)] == ["keep", "also-keep"]


def test_featured_match_is_case_insensitive_and_drops_missing():
    candidates = [make_record("beta"), make_record("gamma")]
    selected = select_repos(candidates, ["Alpha", "Beta"], limit=4)
    assert [r.name for r in selected] == ["beta"]


def test_featured_order_wins_over_recency():
    candidates = [make_record("one"), make_record("two"), make_record("three")]
    selected = select_repos(candidates, ["three", "one"], limit=4)
    assert [r.name for r in selected] == ["three", "one"]


def test_featured_list_is_capped():
    candidates = [make_record(n) for n in "abcdef"]
    selected = select_repos(candidates, list("fedcba"), limit=4)
    assert [r.name for r in selected] == ["f", "e", "d", "c"]


def test_no_featured_takes_most_recent():
    candidates = [make_record(n) for n in "abcdef"]
    assert [r.name for r in select_repos(candidates, [], limit=4)] == ["a", "b", "c", "d"]


def test_no_candidates_selects_nothing():
    assert select_repos([], [], limit=4) == []
    assert select_repos([], ["Alpha"], limit=4) == []
