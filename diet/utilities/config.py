"""Configuration management for the Diet Planner application."""
import os
from dataclasses import dataclass
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Generative provider (Gemini REST API)
GEMINI_API_KEY: Final[str] = os.getenv('GEMINI_API_KEY', '')
GEMINI_MODEL: Final[str] = os.getenv('GEMINI_MODEL', 'gemini-2.0-flash')
GEMINI_ENDPOINT: Final[str] = os.getenv('GEMINI_ENDPOINT', 'https://generativelanguage.googleapis.com/v1beta')
PROVIDER_TIMEOUT_SECONDS: Final[float] = float(os.getenv('PROVIDER_TIMEOUT_SECONDS', '30'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DIET_DATA_DIR', str(BASE_DIR / 'data')))


@dataclass(frozen=True)
class ProviderConfig:
    """Settings for the text-generation provider, injected into the generation service."""
    api_key: str = ""
    model: str = GEMINI_MODEL
    endpoint: str = GEMINI_ENDPOINT
    timeout: float = PROVIDER_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @property
    def url(self) -> str:
        return f"{self.endpoint.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls, api_key: Optional[str] = None) -> "ProviderConfig":
        """Read the provider credential once from the process environment."""
        key = api_key if api_key is not None else os.getenv('GEMINI_API_KEY', GEMINI_API_KEY)
        return cls(
            api_key=key or "",
            model=os.getenv('GEMINI_MODEL', GEMINI_MODEL),
            endpoint=os.getenv('GEMINI_ENDPOINT', GEMINI_ENDPOINT),
            timeout=float(os.getenv('PROVIDER_TIMEOUT_SECONDS', str(PROVIDER_TIMEOUT_SECONDS))),
        )
