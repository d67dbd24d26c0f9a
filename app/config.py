import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


DATA_PATH = Path(os.getenv("DATA_PATH", str(REPO_ROOT / "app" / "data" / "catalog.json")))

# store layout
PARTITION_COUNT = _env_int("PARTITION_COUNT", 10)
QUERY_PAGE_SIZE = _env_int("QUERY_PAGE_SIZE", 100)

# paging bounds for the listing endpoints
DEFAULT_PAGE_SIZE = max(_env_int("DEFAULT_PAGE_SIZE", 100), 1)
MAX_PAGE_SIZE = max(_env_int("MAX_PAGE_SIZE", 1000), 1)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
