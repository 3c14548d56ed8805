"""
Integration tests for the solver HTTP API.

Full request flow through FastAPI routing, multipart decoding, the
orchestrator and stub backends.
"""

import asyncio
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_bootstrap, png_bytes
from api import get_bootstrap
from inference import ErrorCategory, StubModelBackend
from main import app
from storage import StubResultStore


@pytest.fixture
def llm_backend():
    return StubModelBackend(outputs={"solve": "# Solution\n2+2=4"})


def _use(bootstrap) -> TestClient:
    app.dependency_overrides[get_bootstrap] = lambda: bootstrap
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


class TestHealth:
    """GET /api/health"""

    def test_connected(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["serviceConnected"] is True
        assert body["timestamp"].endswith("Z")
        assert "apiError" not in body

    def test_disconnected_is_still_200(self):
        client = _use(make_bootstrap(StubModelBackend(error_type=ErrorCategory.QUOTA_EXCEEDED)))

        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["serviceConnected"] is False
        assert response.json()["apiError"] == "API quota exceeded"

    def test_probe_raising_is_500(self, bootstrap):
        bootstrap.probe = MagicMock()
        bootstrap.probe.check.side_effect = RuntimeError("boom")
        client = _use(bootstrap)

        response = client.get("/api/health")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Service health check failed",
            "error": "RuntimeError",
        }


class TestProcessText:
    """POST /api/process-text"""

    def test_end_to_end(self, client):
        response = client.post("/api/process-text", json={"text": "What is 2+2?"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["extractedText"] == "What is 2+2?"
        assert body["solutions"] == "# Solution\n2+2=4"
        assert body["filename"] == "Manual Input"
        assert "processedAt" in body

    def test_missing_text(self, client, llm_backend):
        response = client.post("/api/process-text", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid input data"
        assert response.json()["errors"][0]["field"] == "text"
        assert llm_backend.requests == []

    def test_malformed_json(self, client):
        response = client.post(
            "/api/process-text",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid input data"

    def test_probe_failure_is_503(self):
        backend = StubModelBackend(error_type=ErrorCategory.INVALID_API_KEY)
        client = _use(make_bootstrap(backend))

        response = client.post("/api/process-text", json={"text": "What is 2+2?"})

        assert response.status_code == 503
        assert response.json()["retryAfter"] == 60
        assert backend.calls_for("solve") == []

    def test_quota_is_429(self):
        backend = StubModelBackend(
            error_type=ErrorCategory.QUOTA_EXCEEDED, failing_tasks={"solve"}
        )
        client = _use(make_bootstrap(backend))

        response = client.post("/api/process-text", json={"text": "What is 2+2?"})

        assert response.status_code == 429
        assert response.json()["retryAfter"] == 120


class TestProcessFile:
    """POST /api/process-file"""

    def test_text_upload_is_verbatim(self, client, pdf_backend, ocr_backend):
        content = b"Q1: State Newton's second law.\nQ2: Define momentum.\n"

        response = client.post(
            "/api/process-file",
            files={"file": ("physics.txt", content, "text/plain")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["extractedText"] == content.decode("utf-8")
        assert body["filename"] == "physics.txt"
        assert body["fileType"] == "text/plain"
        assert pdf_backend.requests == []
        assert ocr_backend.requests == []

    def test_pdf_upload(self, client, pdf_backend):
        response = client.post(
            "/api/process-file",
            files={"file": ("exam.pdf", b"%PDF-1.4 stub", "application/pdf")},
        )

        assert response.status_code == 200
        assert response.json()["fileType"] == "application/pdf"
        assert pdf_backend.requests[0].pdf_data == b"%PDF-1.4 stub"

    def test_image_upload(self, client, ocr_backend):
        response = client.post(
            "/api/process-file",
            files={"file": ("scan.png", png_bytes(), "image/png")},
        )

        assert response.status_code == 200
        assert len(ocr_backend.requests) == 1

    def test_no_file(self, client):
        response = client.post("/api/process-file")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No file uploaded"}

    def test_file_part_without_filename_is_no_upload(self, client, llm_backend):
        """httpx drops an empty filename, so the part arrives as a plain field."""
        response = client.post(
            "/api/process-file",
            files={"file": ("", b"Q1: hi", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No file uploaded"}
        assert llm_backend.calls_for("solve") == []

    def test_text_field_named_file_is_no_upload(self, client):
        response = client.post("/api/process-file", data={"file": "not a file"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "No file uploaded"}

    def test_empty_filename_part_is_processed(self, client):
        boundary = "solverboundary"
        body = (
            f"--{boundary}\r\n"
            'Content-Disposition: form-data; name="file"; filename=""\r\n'
            "Content-Type: text/plain\r\n"
            "\r\n"
            "Q1: What is 2+2?\r\n"
            f"--{boundary}--\r\n"
        ).encode("utf-8")

        response = client.post(
            "/api/process-file",
            content=body,
            headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
        )

        assert response.status_code == 200
        assert response.json()["filename"] == "upload"
        assert response.json()["extractedText"] == "Q1: What is 2+2?"

    def test_oversize_upload_is_read_only_past_ceiling(self, llm_backend):
        bootstrap = make_bootstrap(llm_backend, max_upload_bytes=1024)
        orchestrator = bootstrap.get_orchestrator()
        orchestrator.process_file = MagicMock(wraps=orchestrator.process_file)
        client = _use(bootstrap)

        response = client.post(
            "/api/process-file",
            files={"file": ("big.txt", b"x" * 5000, "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("File size too large")
        data, media_type, filename, size = orchestrator.process_file.call_args.args
        assert len(data) == 1025
        assert size == 5000
        assert filename == "big.txt"
        assert llm_backend.calls_for("solve") == []

    def test_unsupported_type(self, client, llm_backend):
        response = client.post(
            "/api/process-file",
            files={"file": ("paper.docx", b"PK\x03\x04", "application/msword")},
        )

        assert response.status_code == 400
        assert "Unsupported file type" in response.json()["message"]
        assert llm_backend.calls_for("solve") == []

    def test_oversize(self, client, pdf_backend):
        data = b"0" * (10 * 1024 * 1024 + 1)

        response = client.post(
            "/api/process-file",
            files={"file": ("huge.pdf", data, "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "File size too large. Maximum size is 10MB."
        assert pdf_backend.requests == []

    def test_probe_failure_is_503(self):
        backend = StubModelBackend(error_type=ErrorCategory.PERMISSION_DENIED)
        client = _use(make_bootstrap(backend))

        response = client.post(
            "/api/process-file",
            files={"file": ("q.txt", b"Q1", "text/plain")},
        )

        assert response.status_code == 503
        assert response.json()["error"] == "API permission denied"


class TestStatusAndPapers:
    """GET /api/status/{job_id} and GET /api/papers/{paper_id}"""

    def test_status_is_always_completed(self, client):
        response = client.get("/api/status/job-123")

        assert response.status_code == 200
        assert response.json() == {"jobId": "job-123", "status": "completed", "progress": 100}

    def test_papers_disabled(self, client):
        response = client.get("/api/papers/abc")

        assert response.status_code == 404
        assert response.json()["message"] == "Result storage is disabled"

    def test_stored_paper_roundtrip(self, llm_backend):
        store = StubResultStore()
        client = _use(make_bootstrap(llm_backend, result_store=store))

        client.post("/api/process-text", json={"text": "What is 2+2?", "filename": "quiz"})
        (paper_id,) = store.papers

        response = client.get(f"/api/papers/{paper_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == paper_id
        assert body["filename"] == "quiz"
        assert body["solutions"] == "# Solution\n2+2=4"

    def test_unknown_paper(self, llm_backend):
        client = _use(make_bootstrap(llm_backend, result_store=StubResultStore()))

        response = client.get("/api/papers/missing")

        assert response.status_code == 404
        assert response.json()["message"] == "Paper not found"


class TestAppRoutes:
    """Routes defined on the application itself."""

    def test_liveness(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()

        assert body["status"] == "running"
        assert body["endpoints"]["process_file"] == "POST /api/process-file"


@pytest.mark.asyncio
async def test_concurrent_requests_do_not_share_state(bootstrap):
    """Requests share only the immutable bootstrap; bodies never mix."""
    app.dependency_overrides[get_bootstrap] = lambda: bootstrap
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        responses = await asyncio.gather(*(
            ac.post("/api/process-text", json={"text": f"Q{i}: What is {i}+{i}?"})
            for i in range(5)
        ))

    for i, response in enumerate(responses):
        assert response.status_code == 200
        assert response.json()["extractedText"] == f"Q{i}: What is {i}+{i}?"
