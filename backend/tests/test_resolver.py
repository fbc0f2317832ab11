"""Report resolver tests — explanation paths and free-text matching."""

import os

import pytest

from app.matching.doc_index import DocumentIndex
from app.matching.resolver import ReportResolver, score_query
from app.models.report_model import ReportRecord


@pytest.fixture
def resolver(docs_dir):
    return ReportResolver(DocumentIndex(str(docs_dir)))


def _resolver_for(tmp_path, *stems):
    for stem in stems:
        (tmp_path / f"{stem}.md").write_text("x")
    return ReportResolver(DocumentIndex(str(tmp_path)))


# ── Explanation paths ─────────────────────────────────────────────────────────


def test_exact_slug_match(resolver, docs_dir):
    path = resolver.resolve_explanation_path(ReportRecord(slug="foo"), slug="token-vault")
    assert path == os.path.join(str(docs_dir), "token-vault.md")


def test_slug_derived_when_not_given(resolver, docs_dir):
    path = resolver.resolve_explanation_path(ReportRecord(title="Token Vault"))
    assert path == os.path.join(str(docs_dir), "token-vault.md")


def test_repo_last_segment_exact_match(resolver, docs_dir):
    report = ReportRecord(title="Oracle issues", github_repo="defi-labs/price-feed")
    assert resolver.resolve_explanation_path(report) == os.path.join(str(docs_dir), "PriceFeed.md")


def test_first_exact_hit_wins_over_later_candidates(resolver, docs_dir):
    report = ReportRecord(title="PriceFeed", github_repo="acme/token-vault")
    assert resolver.resolve_explanation_path(report) == os.path.join(str(docs_dir), "PriceFeed.md")


def test_fuzzy_match_above_threshold(resolver, docs_dir):
    report = ReportRecord(title="Token Vaults")
    assert resolver.resolve_explanation_path(report) == os.path.join(str(docs_dir), "token-vault.md")


def test_no_match_below_threshold(resolver):
    assert resolver.resolve_explanation_path(ReportRecord(title="Governance Timelock")) is None


def test_path_threshold_is_inclusive(tmp_path):
    resolver = _resolver_for(tmp_path, "a" * 100)
    accepted = ReportRecord(slug="a" * 60 + "b" * 40)
    rejected = ReportRecord(slug="a" * 59 + "b" * 41)
    assert resolver.resolve_explanation_path(accepted) == os.path.join(str(tmp_path), "a" * 100 + ".md")
    assert resolver.resolve_explanation_path(rejected) is None


def test_empty_index_resolves_nothing(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path / "missing")))
    assert resolver.resolve_explanation_path(ReportRecord(slug="token-vault")) is None


# ── Free-text query matching ──────────────────────────────────────────────────


def _reports(*titles):
    return [ReportRecord(slug=f"r{i}", title=t) for i, t in enumerate(titles, start=1)]


def test_substring_score_is_coverage_ratio(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    match = resolver.find_best_report_match("reentrancy", _reports("Reentrancy Attack"))
    assert match is not None
    assert match.report.slug == "r1"
    assert match.score == len("reentrancy") / len("reentrancyattack")


def test_long_title_substring_falls_under_query_threshold(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    reports = _reports("Reentrancy Attack in TokenVault")
    assert score_query("reentrancy", "reentrancyattackintokenvault") == 10 / 28
    assert resolver.find_best_report_match("reentrancy", reports) is None


def test_query_threshold_is_inclusive(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    hit = resolver.find_best_report_match("reentrant", _reports("Reentrant bugs in vault"))
    assert hit is not None and hit.score == 0.45
    assert resolver.find_best_report_match("reentrant", _reports("Reentrant bugs in vaults")) is None


def test_best_score_across_fields(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    reports = [
        ReportRecord(slug="vault", title="Reentrancy Attack in TokenVault", github_repo="acme/token-vault"),
        ReportRecord(slug="feed", title="Price Feed", github_repo="defi/price-feed"),
    ]
    match = resolver.find_best_report_match("token vault", reports)
    assert match.report.slug == "vault"
    assert match.score == 10 / len("acmetokenvault")


def test_ties_keep_first_report(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    match = resolver.find_best_report_match("Vault", _reports("Vault", "vault"))
    assert match.report.slug == "r1"
    assert match.score == 1.0


def test_candidate_shorter_than_query_scores_above_one():
    assert score_query("tokenvaultaudit", "vault") == 3.0


def test_similarity_fallback_when_no_substring(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    match = resolver.find_best_report_match("pricefed", _reports("Price Feed"))
    assert match is not None
    assert match.score == pytest.approx(8 / 9)


def test_empty_query_and_empty_catalog(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    assert resolver.find_best_report_match("", _reports("Anything")) is None
    assert resolver.find_best_report_match("!!!", _reports("Anything")) is None
    assert resolver.find_best_report_match("anything", []) is None


def test_reports_without_comparison_fields_are_skipped(tmp_path):
    resolver = ReportResolver(DocumentIndex(str(tmp_path)))
    assert resolver.find_best_report_match("vault", [ReportRecord(slug="vault")]) is None
