from pathlib import Path
from ecoeats.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
STORE_DIR = DATA_DIR / 'store'
IMAGES_DIR = DATA_DIR / 'images'

__all__ = ['DATA_DIR', 'STORE_DIR', 'IMAGES_DIR']
