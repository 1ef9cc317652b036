# tests/test_analysis_service.py
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from api.models.analysis_models import AnalysisResult
from database.db import build_engine, make_session_factory
from database.models.experiment_model import Experiment
from services.analysis_cache import AnalysisCache
from services.analysis_service import ExperimentAnalysisService
from services.errors import (
    CacheWriteError,
    NotFoundError,
    SectionNotFoundError,
    UpstreamError,
)
from services.experiment_service import ExperimentRepository
from services.section_parser import get_section_spec

PLANT = {"id": 42, "title": "Plant Growth in Orbit", "authors": "J. Doe", "link": "http://example.org/p"}
PROSE = "Plants grew slower in orbit. No headings were produced by the model."
FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _client(text=PROSE):
    client = MagicMock()
    client.model = "gemini-test"
    client.analyze_experiment.return_value = text
    client.quick_summary.return_value = "Plants in space."
    return client


def _service(repo, client, cache):
    return ExperimentAnalysisService(repo, client, cache, clock=lambda: FIXED_NOW)


class TestAnalyzeWithMocks(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.repo.get.return_value = dict(PLANT)
        self.cache = MagicMock()
        self.cache.get.return_value = None
        self.cache.put.return_value = None
        self.client = _client()

    def test_missing_experiment_never_calls_upstream(self):
        self.repo.get.return_value = None
        service = _service(self.repo, self.client, self.cache)

        with self.assertRaises(NotFoundError):
            service.analyze(999)

        self.client.analyze_experiment.assert_not_called()
        self.cache.put.assert_not_called()

    def test_cache_write_failure_still_returns_result(self):
        self.cache.put.return_value = CacheWriteError(42, "relation does not exist")
        service = _service(self.repo, self.client, self.cache)

        with self.assertLogs("services.analysis_service", level="WARNING"):
            outcome = service.analyze(42)

        self.assertFalse(outcome.cached)
        self.assertEqual(outcome.result.analysis, PROSE)
        self.assertEqual(outcome.result.sections, {"fullAnalysis": PROSE})

    def test_cache_hit_skips_upstream(self):
        cached = AnalysisResult(
            experiment_title=PLANT["title"],
            analysis="old",
            sections={"fullAnalysis": "old"},
            generated_at="2025-01-01T00:00:00+00:00",
            model="gemini-old",
        )
        self.cache.get.return_value = cached
        service = _service(self.repo, self.client, self.cache)

        outcome = service.analyze(42)

        self.assertTrue(outcome.cached)
        self.assertIs(outcome.result, cached)
        self.client.analyze_experiment.assert_not_called()

    def test_refresh_bypasses_cache(self):
        self.cache.get.return_value = MagicMock()
        service = _service(self.repo, self.client, self.cache)

        outcome = service.analyze(42, refresh=True)

        self.assertFalse(outcome.cached)
        self.cache.get.assert_not_called()
        self.client.analyze_experiment.assert_called_once_with(
            PLANT["link"], PLANT["title"], PLANT["authors"]
        )
        self.cache.put.assert_called_once_with(42, outcome.result)

    def test_result_fields(self):
        service = _service(self.repo, self.client, self.cache)

        result = service.analyze(42).result

        self.assertTrue(result.success)
        self.assertEqual(result.experiment_title, PLANT["title"])
        self.assertEqual(result.experiment_authors, PLANT["authors"])
        self.assertEqual(result.experiment_link, PLANT["link"])
        self.assertEqual(result.generated_at, FIXED_NOW.isoformat())
        self.assertEqual(result.model, "gemini-test")

    def test_upstream_error_propagates(self):
        self.client.analyze_experiment.side_effect = UpstreamError(503, "overloaded")
        service = _service(self.repo, self.client, self.cache)

        with self.assertRaises(UpstreamError):
            service.analyze(42)
        self.cache.put.assert_not_called()


class TestSectionsAndSummary(unittest.TestCase):

    def setUp(self):
        self.text = "## EXECUTIVE SUMMARY\nThis study examined bone density.\n## KEY FINDINGS\n- Finding A\n- Finding B\n"
        self.service = _service(MagicMock(), _client(self.text), MagicMock())

    def test_section_is_projected(self):
        label, data = self.service.get_section(get_section_spec("key-findings"), "l", "t", "a")

        self.assertEqual(label, "KEY FINDINGS")
        self.assertEqual(data, "## KEY FINDINGS\n- Finding A\n- Finding B")

    def test_absent_section_raises(self):
        with self.assertRaises(SectionNotFoundError) as ctx:
            self.service.get_section(get_section_spec("biological-impacts"), "l", "t", "a")
        self.assertEqual(ctx.exception.message, "Biological impacts not found")

    def test_knowledge_graph_falls_back_to_text(self):
        service = _service(MagicMock(), _client("## KNOWLEDGE GRAPH\nNo JSON here."), MagicMock())

        label, data = service.get_section(get_section_spec("knowledge-graph"), "l", "t", "a")

        self.assertEqual(label, "KNOWLEDGE GRAPH")
        self.assertEqual(data, "## KNOWLEDGE GRAPH\nNo JSON here.")

    def test_quick_summary_degrades_on_upstream_failure(self):
        repo = MagicMock()
        repo.get.return_value = dict(PLANT)
        client = _client()
        client.quick_summary.side_effect = UpstreamError(500, "boom")
        service = _service(repo, client, MagicMock())

        summary = service.quick_summary(42)

        self.assertFalse(summary["success"])
        self.assertEqual(summary["summary"], "Summary generation failed")

    def test_quick_summary_success(self):
        repo = MagicMock()
        repo.get.return_value = dict(PLANT)
        service = _service(repo, _client(), MagicMock())

        summary = service.quick_summary(42)

        self.assertTrue(summary["success"])
        self.assertEqual(summary["summary"], "Plants in space.")


class TestAnalyzeAgainstDatabase(unittest.TestCase):

    def _seeded_factory(self, with_cache_table=True):
        engine = build_engine("sqlite://")
        self.addCleanup(engine.dispose)
        if with_cache_table:
            from database.db import init_db
            init_db(engine)
        else:
            Experiment.__table__.create(engine)
        factory = make_session_factory(engine)
        with factory() as db:
            db.add(Experiment(**PLANT))
            db.commit()
        return factory

    def test_unrecognised_output_is_cached_as_full_analysis(self):
        factory = self._seeded_factory()
        cache = AnalysisCache(factory)
        service = _service(ExperimentRepository(factory), _client(), cache)

        outcome = service.analyze(42)

        self.assertEqual(outcome.result.sections, {"fullAnalysis": PROSE})
        self.assertEqual(cache.get(42).sections, {"fullAnalysis": PROSE})

    def test_second_call_is_served_from_cache(self):
        factory = self._seeded_factory()
        client = _client()
        service = _service(ExperimentRepository(factory), client, AnalysisCache(factory))

        service.analyze(42)
        outcome = service.analyze(42)

        self.assertTrue(outcome.cached)
        self.assertEqual(client.analyze_experiment.call_count, 1)

    def test_missing_cache_table_does_not_fail_analysis(self):
        factory = self._seeded_factory(with_cache_table=False)
        service = _service(ExperimentRepository(factory), _client(), AnalysisCache(factory))

        outcome = service.analyze(42)

        self.assertFalse(outcome.cached)
        self.assertEqual(outcome.result.sections, {"fullAnalysis": PROSE})


if __name__ == "__main__":
    unittest.main()
