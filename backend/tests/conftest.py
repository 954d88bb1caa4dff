import os
import sys
import tempfile
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Keep the test run away from the user's data directory and tray
os.environ.setdefault("HOSTOCARS_DATA_DIR", tempfile.mkdtemp(prefix="hostocars-tests-"))
os.environ["HOSTOCARS_TRAY_ENABLED"] = "false"

# Now import after path and environment are set
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, set_sqlite_pragma
import models  # noqa: F401


@pytest.fixture
def engine():
    """In-memory database shared by every connection of the test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create in-memory database session for testing"""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    """API client whose requests use the in-memory database"""
    from main import app

    TestingSessionLocal = sessionmaker(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def car_payload():
    """Minimal valid car as sent by the web UI"""
    return {
        "registration": "AB-123-CD",
        "serialNumber": "VF1AA000000000001",
        "owner": "Jean Dupont",
        "brand": "Renault",
        "model": "Clio",
        "releaseDate": "2012-05-01",
    }
