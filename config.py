"""
Configuration management for the Question Paper Solver.

Loads environment variables from .env file and provides typed access to configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the solver service."""

    # Gemini Configuration
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # Server Configuration
    APP_PORT = int(os.getenv("APP_PORT", "5000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Backends
    LLM_BACKEND = os.getenv("LLM_BACKEND", "gemini")
    OCR_BACKEND = os.getenv("OCR_BACKEND", "tesseract")
    PDF_BACKEND = os.getenv("PDF_BACKEND", "pymupdf")
    RESULT_STORE = os.getenv("RESULT_STORE", "none")

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        required = ["GEMINI_API_KEY"] if cls.LLM_BACKEND == "gemini" else []
        missing = [key for key in required if not getattr(cls, key)]

        if missing:
            print(f"⚠️  Missing required environment variables: {', '.join(missing)}")
            print(f"   Please set them in .env file")
            return False

        return True


if __name__ == "__main__":
    print("Configuration loaded:")
    print(f"  Gemini API Key: {'✓ Set' if Config.GEMINI_API_KEY else '✗ Missing'}")
    print(f"  Gemini Model: {Config.GEMINI_MODEL}")
    print(f"  App Port: {Config.APP_PORT}")
    print(f"  LLM Backend: {Config.LLM_BACKEND}")
    print(f"  OCR Backend: {Config.OCR_BACKEND}")
    print(f"  PDF Backend: {Config.PDF_BACKEND}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
