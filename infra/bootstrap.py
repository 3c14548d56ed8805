"""
Infrastructure initialization and bootstrap.

Builds every backend once at process start and wires them into the
request orchestrator. The resulting object is handed to the web layer
explicitly; nothing here is stored at module scope.
"""

import logging
from typing import Optional

from inference import ModelBackend
from services.image import ImageNormalizer
from services.ocr import OCRBackend
from services.pdf import PDFBackend
from storage import ResultStore
from pipeline.extractor import TextExtractor
from pipeline.generator import SolutionGenerator
from pipeline.orchestrator import RequestOrchestrator
from pipeline.probe import AvailabilityProbe
from pipeline.validator import FileValidator

from .config import InfraConfig, get_config

logger = logging.getLogger(__name__)


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Backends may be injected directly (tests); anything not injected is
    created from the configuration.
    """

    def __init__(
        self,
        config: Optional[InfraConfig] = None,
        llm_backend: Optional[ModelBackend] = None,
        ocr_backend: Optional[OCRBackend] = None,
        pdf_backend: Optional[PDFBackend] = None,
        result_store: Optional[ResultStore] = None,
    ):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.llm_backend = llm_backend or self.config.create_llm_backend()
        self.ocr_backend = ocr_backend or self.config.create_ocr_backend()
        self.pdf_backend = pdf_backend or self.config.create_pdf_backend()
        self.result_store = result_store or self.config.create_result_store()
        self.image_normalizer = ImageNormalizer()

        self.probe = AvailabilityProbe(
            self.llm_backend,
            cache_ttl_s=self.config.probe_cache_ttl_s,
            timeout_s=self.config.gemini_timeout_s,
        )
        self.orchestrator = RequestOrchestrator(
            probe=self.probe,
            validator=FileValidator(max_bytes=self.config.max_upload_bytes),
            extractor=TextExtractor(
                pdf_backend=self.pdf_backend,
                ocr_backend=self.ocr_backend,
                image_normalizer=self.image_normalizer,
                ocr_language=self.config.ocr_language,
            ),
            generator=SolutionGenerator(
                self.llm_backend,
                timeout_s=self.config.gemini_timeout_s,
            ),
            result_store=self.result_store,
        )

    def get_llm_backend(self) -> ModelBackend:
        """Get LLM backend."""
        return self.llm_backend

    def get_probe(self) -> AvailabilityProbe:
        """Get the availability probe."""
        return self.probe

    def get_orchestrator(self) -> RequestOrchestrator:
        """Get the request orchestrator."""
        return self.orchestrator

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"InfraBootstrap(llm={self.config.llm_backend}, "
            f"ocr={self.config.ocr_backend}, "
            f"pdf={self.config.pdf_backend}, "
            f"store={self.config.result_store})"
        )


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap all infrastructure backends.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with all backends initialized
    """
    bootstrap = InfraBootstrap(config)
    logger.info(f"Infrastructure ready: {bootstrap!r}")
    return bootstrap
