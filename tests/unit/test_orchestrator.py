"""
Tests for the request orchestrator.

Verifies:
- Stage ordering: probe gate, validation before extraction, generation last
- Status code and body for every failure class
- Successful bodies for text and file requests
- Result store writes happen after success only and never alter the response
"""

from unittest.mock import MagicMock

import pytest

from conftest import make_bootstrap, png_bytes
from inference import ErrorCategory, StubModelBackend
from pipeline.validator import MAX_UPLOAD_BYTES
from services.ocr import StubOCRBackend
from services.pdf import StubPDFBackend
from storage import StubResultStore


@pytest.fixture
def llm_backend():
    return StubModelBackend(outputs={"solve": "# Solution\n2+2=4"})


@pytest.fixture
def orchestrator(bootstrap):
    return bootstrap.get_orchestrator()


class TestProcessText:
    """POST /api/process-text semantics."""

    def test_success_body(self, orchestrator):
        response = orchestrator.process_text({"text": "What is 2+2?"})

        assert response.status_code == 200
        body = response.body
        assert body["success"] is True
        assert body["extractedText"] == "What is 2+2?"
        assert body["solutions"] == "# Solution\n2+2=4"
        assert body["filename"] == "Manual Input"
        assert "fileType" not in body
        assert body["processedAt"].endswith("Z")

    def test_filename_is_kept(self, orchestrator):
        response = orchestrator.process_text({"text": "Q1", "filename": "midterm"})

        assert response.body["filename"] == "midterm"

    def test_text_is_not_trimmed(self, orchestrator, llm_backend):
        response = orchestrator.process_text({"text": "  Q1. Sum 1..n  \n"})

        assert response.body["extractedText"] == "  Q1. Sum 1..n  \n"
        assert "  Q1. Sum 1..n  \n" in llm_backend.calls_for("solve")[0].prompt

    @pytest.mark.parametrize(
        "payload",
        [None, {}, {"text": ""}, {"text": "   "}, {"text": 42}, ["text"], "What is 2+2?"],
    )
    def test_invalid_payload(self, orchestrator, llm_backend, payload):
        response = orchestrator.process_text(payload)

        assert response.status_code == 400
        assert response.body["success"] is False
        assert response.body["message"] == "Invalid input data"
        assert response.body["errors"]
        assert all({"field", "message"} <= set(e) for e in response.body["errors"])
        assert llm_backend.requests == []

    def test_missing_text_field_is_named(self, orchestrator):
        response = orchestrator.process_text({"filename": "x"})

        assert response.body["errors"][0]["field"] == "text"

    def test_repeated_requests_are_equivalent(self, orchestrator):
        first = orchestrator.process_text({"text": "What is 2+2?"}).body
        second = orchestrator.process_text({"text": "What is 2+2?"}).body

        first.pop("processedAt")
        second.pop("processedAt")
        assert first == second


class TestProcessFile:
    """POST /api/process-file semantics."""

    def test_missing_file(self, orchestrator):
        response = orchestrator.process_file(None, None, None)

        assert response.status_code == 400
        assert response.body == {"success": False, "message": "No file uploaded"}

    def test_plain_text_file(self, orchestrator, pdf_backend, ocr_backend):
        content = "Q1: Define a group.\nQ2: Prove Lagrange's theorem.\n"

        response = orchestrator.process_file(content.encode("utf-8"), "text/plain", "algebra.txt")

        assert response.status_code == 200
        assert response.body["extractedText"] == content
        assert response.body["filename"] == "algebra.txt"
        assert response.body["fileType"] == "text/plain"
        assert pdf_backend.requests == []
        assert ocr_backend.requests == []

    def test_pdf_file(self, orchestrator, pdf_backend):
        response = orchestrator.process_file(b"%PDF-1.4", "application/pdf", "exam.pdf")

        assert response.status_code == 200
        assert response.body["extractedText"] == "Q1: Stubbed question extracted from PDF"
        assert response.body["fileType"] == "application/pdf"
        assert len(pdf_backend.requests) == 1

    def test_image_file(self, orchestrator, ocr_backend):
        response = orchestrator.process_file(png_bytes(), "image/png", "scan.png")

        assert response.status_code == 200
        assert response.body["extractedText"] == "Q1: Stubbed question recognized from image"
        assert len(ocr_backend.requests) == 1

    def test_oversize_never_reaches_extraction(self, orchestrator, pdf_backend, llm_backend):
        data = b"0" * (MAX_UPLOAD_BYTES + 1)

        response = orchestrator.process_file(data, "application/pdf", "huge.pdf")

        assert response.status_code == 400
        assert response.body["message"] == "File size too large. Maximum size is 10MB."
        assert pdf_backend.requests == []
        assert llm_backend.calls_for("solve") == []

    def test_unsupported_type_never_reaches_generation(self, orchestrator, llm_backend):
        response = orchestrator.process_file(b"PK\x03\x04", "application/zip", "paper.zip")

        assert response.status_code == 400
        assert response.body["message"] == (
            "Unsupported file type. Please upload PDF, PNG, JPG, or TXT files."
        )
        assert llm_backend.calls_for("solve") == []

    def test_empty_text_file(self, orchestrator, llm_backend):
        response = orchestrator.process_file(b" \n ", "text/plain", "blank.txt")

        assert response.status_code == 400
        assert response.body["message"] == "No text could be extracted from the uploaded file"
        assert llm_backend.calls_for("solve") == []

    def test_pdf_without_text_layer(self, llm_backend):
        orchestrator = make_bootstrap(
            llm_backend, pdf_backend=StubPDFBackend(text="")
        ).get_orchestrator()

        response = orchestrator.process_file(b"%PDF-1.4", "application/pdf", "scan.pdf")

        assert response.status_code == 400
        assert response.body["message"] == "No text could be extracted from the PDF"
        assert llm_backend.calls_for("solve") == []

    def test_unreadable_image(self, orchestrator):
        response = orchestrator.process_file(b"not a png", "image/png", "bad.png")

        assert response.status_code == 400
        assert response.body["message"] == "The uploaded image could not be read"

    def test_image_without_text(self, llm_backend):
        orchestrator = make_bootstrap(
            llm_backend, ocr_backend=StubOCRBackend(text="")
        ).get_orchestrator()

        response = orchestrator.process_file(png_bytes(), "image/jpeg", "blank.jpg")

        assert response.status_code == 400
        assert response.body["message"] == "No text could be extracted from the image"


class TestProbeGate:
    """Requests are refused when the probe fails."""

    @pytest.fixture
    def llm_backend(self):
        return StubModelBackend(error_type=ErrorCategory.INVALID_API_KEY)

    def test_text_request_gets_503(self, orchestrator, llm_backend):
        response = orchestrator.process_text({"text": "What is 2+2?"})

        assert response.status_code == 503
        assert response.body == {
            "success": False,
            "message": "AI service temporarily unavailable",
            "error": "Invalid API key",
            "retryAfter": 60,
        }
        assert llm_backend.calls_for("solve") == []

    def test_file_request_gets_503_before_validation(self, orchestrator, pdf_backend, llm_backend):
        response = orchestrator.process_file(b"%PDF-1.4", "application/pdf", "exam.pdf")

        assert response.status_code == 503
        assert pdf_backend.requests == []
        assert llm_backend.calls_for("solve") == []


class TestGenerationFailures:
    """Classified generation failures."""

    @pytest.mark.parametrize(
        "category,status,message",
        [
            (ErrorCategory.QUOTA_EXCEEDED, 429,
             "API quota exceeded. Please try again later or check your billing."),
            (ErrorCategory.RATE_LIMITED, 429,
             "Rate limit exceeded. Please wait a moment and try again."),
            (ErrorCategory.INVALID_API_KEY, 500,
             "Invalid API key configuration. Please check your Gemini API key."),
            (ErrorCategory.PERMISSION_DENIED, 500,
             "Permission denied. Please verify your API key has proper permissions."),
            (ErrorCategory.UNKNOWN, 500,
             "Failed to generate solutions. Please try again."),
        ],
    )
    def test_status_and_message(self, category, status, message):
        backend = StubModelBackend(error_type=category, failing_tasks={"solve"})
        orchestrator = make_bootstrap(backend).get_orchestrator()

        response = orchestrator.process_text({"text": "What is 2+2?"})

        assert response.status_code == status
        assert response.body["success"] is False
        assert response.body["message"] == message
        if status == 429:
            assert response.body["retryAfter"] == 120
        else:
            assert "retryAfter" not in response.body

    def test_invalid_key_invalidates_cached_probe(self):
        backend = StubModelBackend(
            error_type=ErrorCategory.INVALID_API_KEY, failing_tasks={"solve"}
        )
        orchestrator = make_bootstrap(backend, probe_cache_ttl_s=300).get_orchestrator()

        orchestrator.process_text({"text": "Q1"})
        orchestrator.process_text({"text": "Q1"})

        assert len(backend.calls_for("probe")) == 2

    def test_throttling_keeps_cached_probe(self):
        backend = StubModelBackend(
            error_type=ErrorCategory.RATE_LIMITED, failing_tasks={"solve"}
        )
        orchestrator = make_bootstrap(backend, probe_cache_ttl_s=300).get_orchestrator()

        orchestrator.process_text({"text": "Q1"})
        orchestrator.process_text({"text": "Q1"})

        assert len(backend.calls_for("probe")) == 1

    def test_unexpected_exception_is_generic_500(self, orchestrator):
        orchestrator.extractor = MagicMock()
        orchestrator.extractor.extract.side_effect = RuntimeError("disk on fire")

        response = orchestrator.process_file(b"Q1", "text/plain", "q.txt")

        assert response.status_code == 500
        assert response.body == {"success": False, "message": "Failed to process file"}


class TestResultStore:
    """Optional persistence after success."""

    def test_success_is_stored(self, llm_backend):
        store = StubResultStore()
        orchestrator = make_bootstrap(llm_backend, result_store=store).get_orchestrator()

        orchestrator.process_text({"text": "What is 2+2?"})

        (paper,) = store.papers.values()
        assert paper.filename == "Manual Input"
        assert paper.solutions == "# Solution\n2+2=4"

    def test_failure_is_not_stored(self):
        store = StubResultStore()
        backend = StubModelBackend(error_type=ErrorCategory.UNKNOWN, failing_tasks={"solve"})
        orchestrator = make_bootstrap(backend, result_store=store).get_orchestrator()

        orchestrator.process_text({"text": "Q1"})

        assert store.papers == {}

    def test_raising_store_does_not_change_response(self, llm_backend):
        store = MagicMock()
        store.save.side_effect = RuntimeError("db locked")
        orchestrator = make_bootstrap(llm_backend, result_store=store).get_orchestrator()

        response = orchestrator.process_text({"text": "What is 2+2?"})

        assert response.status_code == 200
        assert response.body["solutions"] == "# Solution\n2+2=4"
        store.save.assert_called_once()
