"""Configuration management for the EcoEats application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# AI collaborator
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_IMAGE_MODEL: Final[str] = os.getenv('OPENAI_IMAGE_MODEL', 'gpt-image-1')
COLLABORATOR_TIMEOUT_SECONDS: Final[float] = float(os.getenv('COLLABORATOR_TIMEOUT_SECONDS', '15'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Donations
NGO_SEARCH_RADIUS_KM: Final[float] = float(os.getenv('NGO_SEARCH_RADIUS_KM', '100'))

# Email (optional; without SMTP_HOST emails are only logged)
SMTP_HOST: Final[str] = os.getenv('SMTP_HOST', '')
SMTP_PORT: Final[int] = int(os.getenv('SMTP_PORT', '587'))
SMTP_USERNAME: Final[str] = os.getenv('SMTP_USERNAME', '')
SMTP_PASSWORD: Final[str] = os.getenv('SMTP_PASSWORD', '')
EMAIL_FROM: Final[str] = os.getenv('EMAIL_FROM', 'EcoEats <no-reply@ecoeats.local>')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('ECOEATS_DATA_DIR', str(BASE_DIR / 'data')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
