from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Optional seat layout overrides
LAYOUT_DIR = BASE_DIR / 'config'
