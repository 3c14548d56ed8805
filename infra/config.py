"""
Infrastructure configuration system.

Environment-based backend selection with sensible defaults.
Production defaults: Gemini, Tesseract, PyMuPDF, no persistence.
"""

import os
from typing import Optional, Literal
from dataclasses import dataclass

from inference import ModelBackend, StubModelBackend, GeminiModelBackend
from services.ocr import OCRBackend, StubOCRBackend, TesseractOCRBackend
from services.pdf import PDFBackend, StubPDFBackend, PyMuPDFBackend
from storage import ResultStore, SQLiteResultStore
from pipeline.validator import MAX_UPLOAD_BYTES


LLMBackendType = Literal["stub", "gemini"]
OCRBackendType = Literal["stub", "tesseract"]
PDFBackendType = Literal["stub", "pymupdf"]
ResultStoreType = Literal["none", "sqlite"]


@dataclass
class InfraConfig:
    """Infrastructure configuration from environment."""

    # LLM
    llm_backend: LLMBackendType
    gemini_api_key: str
    gemini_model: str
    gemini_timeout_s: int

    # Extraction
    ocr_backend: OCRBackendType
    ocr_language: str
    tesseract_cmd: Optional[str]
    pdf_backend: PDFBackendType

    # Pipeline
    max_upload_bytes: int
    probe_cache_ttl_s: float

    # Persistence
    result_store: ResultStoreType
    sqlite_db_path: str

    @classmethod
    def from_env(cls) -> "InfraConfig":
        """
        Load configuration from environment variables.

        Defaults:
        - LLM: gemini (GEMINI_API_KEY required)
        - OCR: tesseract (eng)
        - PDF: pymupdf
        - Probe cache: disabled (re-probe on every request)
        - Result store: none
        """
        return cls(
            # LLM Configuration
            llm_backend=os.getenv("LLM_BACKEND", "gemini"),  # type: ignore
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            gemini_timeout_s=int(os.getenv("GEMINI_TIMEOUT_S", "60")),

            # Extraction Configuration
            ocr_backend=os.getenv("OCR_BACKEND", "tesseract"),  # type: ignore
            ocr_language=os.getenv("OCR_LANGUAGE", "eng"),
            tesseract_cmd=os.getenv("TESSERACT_CMD") or None,
            pdf_backend=os.getenv("PDF_BACKEND", "pymupdf"),  # type: ignore

            # Pipeline Configuration
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES))),
            probe_cache_ttl_s=float(os.getenv("PROBE_CACHE_TTL_S", "0")),

            # Persistence Configuration
            result_store=os.getenv("RESULT_STORE", "none"),  # type: ignore
            sqlite_db_path=os.getenv("SQLITE_DB_PATH", "./papers.db"),
        )

    @classmethod
    def for_testing(cls) -> "InfraConfig":
        """All-stub configuration with no external dependencies."""
        return cls(
            llm_backend="stub",
            gemini_api_key="",
            gemini_model="gemini-2.5-flash",
            gemini_timeout_s=60,
            ocr_backend="stub",
            ocr_language="eng",
            tesseract_cmd=None,
            pdf_backend="stub",
            max_upload_bytes=MAX_UPLOAD_BYTES,
            probe_cache_ttl_s=0,
            result_store="none",
            sqlite_db_path=":memory:",
        )

    def create_llm_backend(self) -> ModelBackend:
        """
        Create LLM backend instance based on configuration.

        Raises:
            ValueError: gemini selected without GEMINI_API_KEY
        """
        if self.llm_backend == "stub":
            return StubModelBackend()
        if self.llm_backend == "gemini":
            return GeminiModelBackend(
                api_key=self.gemini_api_key,
                model_name=self.gemini_model,
            )
        raise ValueError(f"Unknown LLM_BACKEND: {self.llm_backend}")

    def create_ocr_backend(self) -> OCRBackend:
        """Create OCR backend instance based on configuration."""
        if self.ocr_backend == "stub":
            return StubOCRBackend()
        if self.ocr_backend == "tesseract":
            return TesseractOCRBackend(
                language=self.ocr_language,
                tesseract_cmd=self.tesseract_cmd,
            )
        raise ValueError(f"Unknown OCR_BACKEND: {self.ocr_backend}")

    def create_pdf_backend(self) -> PDFBackend:
        """Create PDF backend instance based on configuration."""
        if self.pdf_backend == "stub":
            return StubPDFBackend()
        if self.pdf_backend == "pymupdf":
            return PyMuPDFBackend()
        raise ValueError(f"Unknown PDF_BACKEND: {self.pdf_backend}")

    def create_result_store(self) -> Optional[ResultStore]:
        """Create result store, or None when persistence is off."""
        if self.result_store == "none":
            return None
        if self.result_store == "sqlite":
            return SQLiteResultStore(self.sqlite_db_path)
        raise ValueError(f"Unknown RESULT_STORE: {self.result_store}")


def get_config() -> InfraConfig:
    """Load infrastructure configuration from the environment."""
    return InfraConfig.from_env()
