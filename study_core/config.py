"""
Environment configuration.

Values are read from the process environment (a local .env file is loaded
first). Every getter has a default so the scheduling core works without any
configuration; only the Mongo catalog needs MONGO_URI.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load environment
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///study.db"
DEFAULT_CATALOG_DB_NAME = "study_catalog"
DEFAULT_NEW_ITEMS_PER_DAY = 10
DESIRED_RETENTION = 0.9
ENABLE_FUZZING = False  # Fuzzed due dates would make rating non-deterministic


def _get_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return _get_bool("TEST_MODE", False)


def get_database_url() -> str:
    """
    Get the review-store database URL.

    In test mode the database name is suffixed with `_test` so test runs
    never touch real progress.
    """
    url = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    if is_test_mode():
        if url.endswith(".db"):
            return url[:-3] + "_test.db"
        return url + "_test"
    return url


def get_default_user_id() -> str:
    """Get default user id for scoping review data."""
    return os.getenv("DEFAULT_USER_ID", "local")


def get_mongo_uri() -> str:
    """Get the catalog MongoDB URI (required for the Mongo catalog)."""
    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ValueError("MONGO_URI not found in environment variables")
    return mongo_uri


def get_catalog_db_name() -> str:
    return os.getenv("CATALOG_DB_NAME", DEFAULT_CATALOG_DB_NAME)


def get_default_new_items_per_day() -> int:
    """Daily new-item quota used when a scope has no saved settings."""
    value = int(os.getenv("DEFAULT_NEW_ITEMS_PER_DAY", DEFAULT_NEW_ITEMS_PER_DAY))
    return max(1, value)


def get_desired_retention() -> float:
    return float(os.getenv("DESIRED_RETENTION", DESIRED_RETENTION))


def is_fuzzing_enabled() -> bool:
    return _get_bool("ENABLE_FUZZING", ENABLE_FUZZING)


def get_study_timezone() -> str:
    """IANA timezone whose calendar date drives the daily rollover."""
    return os.getenv("STUDY_TIMEZONE", "UTC")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
