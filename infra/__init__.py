"""
Infrastructure module exports.

Configuration and bootstrap for all service backends.
"""

from .config import (
    InfraConfig,
    get_config,
    LLMBackendType,
    OCRBackendType,
    PDFBackendType,
    ResultStoreType,
)
from .bootstrap import InfraBootstrap, bootstrap_infrastructure

__all__ = [
    "InfraConfig",
    "get_config",
    "LLMBackendType",
    "OCRBackendType",
    "PDFBackendType",
    "ResultStoreType",
    "InfraBootstrap",
    "bootstrap_infrastructure",
]
