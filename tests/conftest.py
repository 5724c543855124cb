"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def temp_db() -> Generator[str, None, None]:
    """Create a temporary database with the adjustments table.

    Yields:
        Path to temporary database file.
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    from cmaadjust.core.database import get_connection
    from cmaadjust.core.repository import init_adjustments_table

    with get_connection(db_path) as conn:
        init_adjustments_table(conn)

    yield db_path

    try:
        os.unlink(db_path)
    except (OSError, PermissionError):
        pass


@pytest.fixture(scope="function")
def test_config(temp_db: str, monkeypatch):
    """Create test configuration with temp database."""
    monkeypatch.setenv("CMAADJUST_DB_PATH", temp_db)
    monkeypatch.setenv("CMAADJUST_LOG_LEVEL", "DEBUG")

    from cmaadjust.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    reset_config()


@pytest.fixture(scope="function")
def app(test_config, temp_db):
    """Flask app bound to the temporary database."""
    from cmaadjust.api.server import create_app
    return create_app({"TESTING": True, "DATABASE_PATH": temp_db})


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def subject_property() -> dict:
    """Subject: 2000 sqft, 3 bed, 2 bath, no pool, 2 garage, 2010, 8000 sqft lot."""
    return {
        "listingId": "SUBJ-1",
        "address": "100 Main Street, Austin, TX",
        "livingArea": 2000,
        "bedroomsTotal": 3,
        "bathroomsTotal": 2,
        "poolFeatures": None,
        "garageSpaces": 2,
        "yearBuilt": 2010,
        "lotSizeSquareFeet": 8000,
        "listPrice": 475000,
    }


@pytest.fixture(scope="function")
def pool_comp() -> dict:
    """Comparable that is 200 sqft smaller but has a pool."""
    return {
        "listingId": "COMP-1",
        "streetAddress": "200 Oak Lane",
        "city": "Austin",
        "livingArea": "1800",
        "bedroomsTotal": "3",
        "bathroomsTotal": 2,
        "poolFeatures": ["In Ground", "Heated"],
        "garageSpaces": 2,
        "yearBuilt": "2010",
        "lotSizeSquareFeet": 8000,
        "closePrice": 450000,
        "listPrice": 460000,
    }


@pytest.fixture(scope="function")
def larger_comp() -> dict:
    """Comparable with an extra bedroom, a newer build and a bigger lot."""
    return {
        "mlsNumber": "MLS-22",
        "address": "300 Pine Road, Austin, TX",
        "squareFeet": 2000,
        "bedroomsTotal": 4,
        "bathroomsTotal": 2.5,
        "poolFeatures": "None",
        "garageSpaces": 3,
        "yearBuilt": 2015,
        "lotSizeArea": "9000",
        "soldPrice": "520000",
    }
