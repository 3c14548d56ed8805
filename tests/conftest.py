"""Pytest configuration and fixtures."""

import io
import os
import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Never reach real backends from the test suite
os.environ.setdefault("LLM_BACKEND", "stub")
os.environ.setdefault("OCR_BACKEND", "stub")
os.environ.setdefault("PDF_BACKEND", "stub")
os.environ.setdefault("RESULT_STORE", "none")

from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image, ImageDraw  # noqa: E402

from api import get_bootstrap  # noqa: E402
from inference import StubModelBackend  # noqa: E402
from infra import InfraBootstrap, InfraConfig  # noqa: E402
from main import app  # noqa: E402
from services.ocr import StubOCRBackend  # noqa: E402
from services.pdf import StubPDFBackend  # noqa: E402


def make_bootstrap(
    llm_backend=None,
    ocr_backend=None,
    pdf_backend=None,
    result_store=None,
    **config_overrides,
) -> InfraBootstrap:
    """All-stub bootstrap with optional injected backends."""
    config = InfraConfig.for_testing()
    for key, value in config_overrides.items():
        setattr(config, key, value)
    return InfraBootstrap(
        config,
        llm_backend=llm_backend or StubModelBackend(),
        ocr_backend=ocr_backend or StubOCRBackend(),
        pdf_backend=pdf_backend or StubPDFBackend(),
        result_store=result_store,
    )


def png_bytes(size=(120, 60), color="white", text=None) -> bytes:
    """Encode a small RGB image as PNG."""
    image = Image.new("RGB", size, color)
    if text:
        ImageDraw.Draw(image).text((5, 20), text, fill="black")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def llm_backend():
    return StubModelBackend()


@pytest.fixture
def ocr_backend():
    return StubOCRBackend()


@pytest.fixture
def pdf_backend():
    return StubPDFBackend()


@pytest.fixture
def bootstrap(llm_backend, ocr_backend, pdf_backend):
    return make_bootstrap(llm_backend, ocr_backend, pdf_backend)


@pytest.fixture
def client(bootstrap):
    """TestClient wired to the stub bootstrap (lifespan not run)."""
    app.dependency_overrides[get_bootstrap] = lambda: bootstrap
    yield TestClient(app)
    app.dependency_overrides.clear()
