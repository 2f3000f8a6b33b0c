"""Tests for handlers layer."""

import json
import threading
from unittest.mock import MagicMock

import httpx
import pytest

from language_audit.exceptions import DetectionServiceError
from language_audit.handlers.job_runner import process_rows, run_job, run_jobs
from language_audit.handlers.manual_tally import count_manual_analysis
from language_audit.infrastructure.language_detection_client import (
    LanguageDetectionClient,
)
from language_audit.infrastructure.legacy_detector import LegacyDetector
from language_audit.infrastructure.s3_client import S3Client
from language_audit.main import select_jobs
from language_audit.models.schemas import JobConfig, SourceRow
from language_audit.services.dual_detector import DualLanguageDetector
from language_audit.services.materials_reader import MaterialsReader
from language_audit.services.result_classifier import ResultClassifier
from language_audit.services.result_store import ResultStore
from language_audit.services.sampler import Sampler
from language_audit.services.text_preview_fetcher import TextPreviewFetcher

BUCKET_FILES = (
    "different-than-expected-and-current",
    "same-as-current",
    "same-as-expected",
)


def _job(tmp_path, key="pt", current="pt", expected="es") -> JobConfig:
    materials = tmp_path / f"{key}.csv"
    materials.write_text("id,fileurl,name\n1,f1,Doc1\n", encoding="utf-8")
    return JobConfig(
        key=key,
        materials=str(materials),
        current_language=current,
        expected_language=expected,
        output=str(tmp_path / "results" / f"{key}.json"),
        aggregated_results_folder=str(tmp_path / "aggregated" / key),
    )


def _dependencies(pages: dict[str, str], service_handler, legacy_guess: str = "en") -> dict:
    mock_s3_client = MagicMock(spec=S3Client)
    mock_s3_client.get_object_content.side_effect = lambda bucket, key: pages.get(key)

    http_client = httpx.Client(
        transport=httpx.MockTransport(service_handler),
        base_url="http://detector.test",
    )
    mock_legacy = MagicMock(spec=LegacyDetector)
    mock_legacy.detect.return_value = legacy_guess

    result_store = ResultStore()
    return {
        "materials_reader": MaterialsReader(),
        "fetcher": TextPreviewFetcher(mock_s3_client, bucket="previews"),
        "detector": DualLanguageDetector(LanguageDetectionClient(http_client), mock_legacy),
        "result_store": result_store,
        "classifier": ResultClassifier(result_store),
        "sampler": Sampler(result_store),
        "max_workers": 4,
    }


def _service_returning(codex: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"language": [{"codex": codex}]})

    return handler


def _read_bucket_ids(job: JobConfig) -> dict[str, list[str]]:
    folder = job.aggregated_results_folder
    result = {}
    for name in BUCKET_FILES:
        with open(f"{folder}/{name}.json", encoding="utf-8") as f:
            result[name] = [r["id"] for r in json.load(f)]
    return result


HELLO_WORLD_PAGES = {
    "TextPreview/f1/1.txt": "Hello ",
    "TextPreview/f1/2.txt": "World",
}


class TestRunJob:
    """End-to-end tests for run_job."""

    def test_record_in_different_bucket(self, tmp_path):
        """Test a guess matching neither label lands only in different."""
        job = _job(tmp_path)
        deps = _dependencies(HELLO_WORLD_PAGES, _service_returning("en"))

        summary = run_job(job, **deps)

        with open(job.output, encoding="utf-8") as f:
            results = json.load(f)
        assert results == [
            {
                "id": "1",
                "name": "Doc1",
                "fileurl": "f1",
                "currentLanguage": "pt",
                "expectedLanguage": "es",
                "newDetectedLanguage": "en",
                "oldDetectedLanguage": "en",
                "textPreviewLength": 11,
                "textPreview": "Hello World",
            }
        ]
        assert _read_bucket_ids(job) == {
            "different-than-expected-and-current": ["1"],
            "same-as-current": [],
            "same-as-expected": [],
        }
        assert (summary.total, summary.different) == (1, 1)

    def test_record_in_same_as_current_bucket(self, tmp_path):
        """Test a guess matching the current label lands only in same-as-current."""
        job = _job(tmp_path)

        summary = run_job(job, **_dependencies(HELLO_WORLD_PAGES, _service_returning("pt")))

        assert _read_bucket_ids(job) == {
            "different-than-expected-and-current": [],
            "same-as-current": ["1"],
            "same-as-expected": [],
        }
        assert summary.same_as_current == 1

    def test_record_in_same_as_expected_bucket(self, tmp_path):
        """Test a guess matching the expected label lands only in same-as-expected."""
        job = _job(tmp_path)

        summary = run_job(job, **_dependencies(HELLO_WORLD_PAGES, _service_returning("es")))

        assert _read_bucket_ids(job) == {
            "different-than-expected-and-current": [],
            "same-as-current": [],
            "same-as-expected": ["1"],
        }
        assert summary.same_as_expected == 1

    def test_missing_first_page_detects_empty_text(self, tmp_path):
        """Test a document without pages is still detected on empty text."""
        job = _job(tmp_path)
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"language": [{"codex": "en"}]})

        deps = _dependencies({}, handler, legacy_guess="")
        run_job(job, **deps)

        assert sent == [{"text": "", "count": 1}]
        with open(job.output, encoding="utf-8") as f:
            record = json.load(f)[0]
        assert record["textPreview"] == ""
        assert record["textPreviewLength"] == 0
        assert record["oldDetectedLanguage"] == ""

    def test_service_failure_writes_nothing(self, tmp_path):
        """Test a failing detection call aborts the job before any write."""
        job = _job(tmp_path)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="unavailable")

        with pytest.raises(DetectionServiceError):
            run_job(job, **_dependencies(HELLO_WORLD_PAGES, handler))

        assert not (tmp_path / "results").exists()
        assert not (tmp_path / "aggregated").exists()

    def test_samples_are_written(self, tmp_path):
        """Test run_job writes one sample file per bucket."""
        job = _job(tmp_path)

        run_job(job, **_dependencies(HELLO_WORLD_PAGES, _service_returning("en")))

        folder = tmp_path / "aggregated" / "pt" / "manual-analysis"
        assert sorted(p.name for p in folder.iterdir()) == sorted(
            f"{name}-sample.json" for name in BUCKET_FILES
        )


class TestRunJobs:
    """Tests for run_jobs."""

    def test_failure_keeps_earlier_job_output(self, tmp_path):
        """Test a failing job leaves previously completed jobs' files intact."""
        first = _job(tmp_path, key="pt", current="es", expected="pt")
        second = _job(tmp_path, key="es", current="pt", expected="es")
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) > 1:
                return httpx.Response(500)
            return httpx.Response(200, json={"language": [{"codex": "pt"}]})

        with pytest.raises(DetectionServiceError):
            run_jobs([first, second], **_dependencies(HELLO_WORLD_PAGES, handler))

        assert (tmp_path / "results" / "pt.json").exists()
        assert not (tmp_path / "results" / "es.json").exists()


class TestProcessRows:
    """Tests for process_rows."""

    def test_results_keep_input_order(self, tmp_path):
        """Test records follow row order regardless of completion order."""
        job = _job(tmp_path)
        rows = [SourceRow(id=str(i), fileurl=f"f{i}", name=f"Doc{i}") for i in range(20)]

        fetcher = MagicMock(spec=TextPreviewFetcher)
        fetcher.fetch.side_effect = lambda fingerprint: fingerprint
        detector = MagicMock(spec=DualLanguageDetector)
        detector.detect.side_effect = lambda text: MagicMock(new=text, old="")

        records = process_rows(rows, job, fetcher, detector, max_workers=8)

        assert [r.id for r in records] == [str(i) for i in range(20)]
        assert [r.new_detected_language for r in records] == [f"f{i}" for i in range(20)]

    def test_first_failure_propagates(self, tmp_path):
        """Test one failing row fails the whole batch."""
        job = _job(tmp_path)
        rows = [SourceRow(id=str(i), fileurl=f"f{i}", name="") for i in range(5)]
        lock = threading.Lock()
        fetched = []

        def fetch(fingerprint):
            with lock:
                fetched.append(fingerprint)
            if fingerprint == "f2":
                raise RuntimeError("storage failure")
            return "text"

        fetcher = MagicMock(spec=TextPreviewFetcher)
        fetcher.fetch.side_effect = fetch
        detector = MagicMock(spec=DualLanguageDetector)
        detector.detect.return_value = MagicMock(new="pt", old="pt")

        with pytest.raises(RuntimeError, match="storage failure"):
            process_rows(rows, job, fetcher, detector, max_workers=1)

        assert "f2" in fetched

    def test_no_rows(self, tmp_path):
        fetcher = MagicMock(spec=TextPreviewFetcher)
        detector = MagicMock(spec=DualLanguageDetector)

        assert process_rows([], _job(tmp_path), fetcher, detector) == []
        fetcher.fetch.assert_not_called()


class TestCountManualAnalysis:
    """Tests for count_manual_analysis."""

    def _write_samples(self, folder, verdicts: list[tuple[str, str]]):
        target = folder / "manual-analysis"
        target.mkdir(parents=True)
        entries = [
            {
                "id": str(i),
                "currentLanguage": "es",
                "expectedLanguage": "pt",
                "newDetectedLanguage": "pt",
                "newAnalysis": new,
                "oldAnalysis": old,
            }
            for i, (new, old) in enumerate(verdicts)
        ]
        (target / "different-than-expected-and-current-sample.json").write_text(
            json.dumps(entries[:1]), encoding="utf-8"
        )
        (target / "same-as-current-sample.json").write_text(
            json.dumps(entries[1:2]), encoding="utf-8"
        )
        (target / "same-as-expected-sample.json").write_text(
            json.dumps(entries[2:]), encoding="utf-8"
        )

    def test_counts_per_method_across_folders(self, tmp_path):
        self._write_samples(
            tmp_path / "a",
            [("Correto", "Correto"), ("Errado", "Correto"), ("Correto", "")],
        )
        self._write_samples(tmp_path / "b", [("correto", "Correto")])

        tally = count_manual_analysis([tmp_path / "a", tmp_path / "b"], ResultStore())

        assert tally.total == 4
        assert (tally.new_method.correct, tally.new_method.incorrect) == (2, 2)
        assert (tally.old_method.correct, tally.old_method.incorrect) == (3, 1)

    def test_missing_sample_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            count_manual_analysis([tmp_path / "missing"], ResultStore())


class TestSelectJobs:
    """Tests for select_jobs."""

    def test_no_keys_keeps_all(self, tmp_path):
        jobs = [_job(tmp_path, key="pt"), _job(tmp_path, key="es", current="es", expected="pt")]

        assert select_jobs(jobs, []) == jobs

    def test_keeps_configuration_order(self, tmp_path):
        jobs = [_job(tmp_path, key="pt"), _job(tmp_path, key="es", current="es", expected="pt")]

        assert [j.key for j in select_jobs(jobs, ["es", "pt"])] == ["pt", "es"]

    def test_unknown_key_raises(self, tmp_path):
        with pytest.raises(ValueError, match="fr"):
            select_jobs([_job(tmp_path)], ["fr"])
