"""Shared pytest fixtures — temp catalogs, explanation docs, API client."""

import json

import pytest

from app.matching.doc_index import DocumentIndex
from app.matching.resolver import ReportResolver
from app.services.bug_store import BugStore
from app.services.report_cache import ReportCache


SAMPLE_REPORTS = [
    {
        "slug": "token-vault",
        "title": "Reentrancy Attack in TokenVault",
        "github_repo": "acme/token-vault",
        "url": "https://audits.example.com/reports/TokenVault-Audit.pdf",
        "severity": "high",
    },
    {
        "title": "Oracle Manipulation in PriceFeed",
        "github_repo": "defi-labs/price-feed",
    },
    {
        "github_repo": "someorg/Bridge_Core",
        "url": "https://audits.example.com/reports/Bridge%20Core.pdf",
    },
    {"notes": "no identifying fields at all"},
]


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def docs_dir(tmp_path):
    d = tmp_path / "explanations"
    d.mkdir()
    (d / "token-vault.md").write_text("# TokenVault\n\nReentrancy in withdraw().\n", encoding="utf-8")
    (d / "PriceFeed.md").write_text("# PriceFeed\n\nTWAP window too short.\n", encoding="utf-8")
    (d / "bridge-core.MD").write_text("# Bridge Core\n", encoding="utf-8")
    (d / "notes.txt").write_text("not markdown", encoding="utf-8")
    return d


@pytest.fixture
def reports_path(tmp_path):
    return write_json(tmp_path / "reports.json", SAMPLE_REPORTS)


@pytest.fixture
def catalog(docs_dir, reports_path):
    index = DocumentIndex(str(docs_dir))
    resolver = ReportResolver(index)
    cache = ReportCache(str(reports_path), resolver)
    return cache


@pytest.fixture
def client(tmp_path, monkeypatch, catalog):
    """TestClient wired to temp-dir singletons (lifespan is not run)."""
    from fastapi.testclient import TestClient

    from app.api import dependencies as deps
    from app.main import app

    monkeypatch.setattr(deps, "document_index", catalog.resolver.index)
    monkeypatch.setattr(deps, "resolver", catalog.resolver)
    monkeypatch.setattr(deps, "report_cache", catalog)
    monkeypatch.setattr(deps, "bug_store", BugStore(str(tmp_path / "data" / "bugs.json")))
    monkeypatch.setattr(deps, "blob_store", None)
    return TestClient(app)
