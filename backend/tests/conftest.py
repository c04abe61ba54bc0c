"""Pytest fixtures for the matching service.

Provides reusable test fixtures for:
- Matching config with production defaults
- In-memory catalog with pipe-fitting products
- SQLite-backed session factory with the catalog schema

Environment variables are set before any application import: database.py
builds its engine at import time.
"""

import sys
import os
from pathlib import Path

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("ANALYTICS_ENABLED", "false")
os.environ["OPENAI_API_KEY"] = ""

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))
sys.path.insert(0, str(Path(__file__).parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base
from matching.config import MatchingConfig
from fixtures.matching_fakes import FakeCatalog, make_product


@pytest.fixture
def config():
    return MatchingConfig()


@pytest.fixture
def pipe_products():
    """Electrofusion fittings; two share the 63-50 measurement."""
    return [
        make_product("NTG EF 63-50", "EF Servis Te", diameter="63-50", description="Elektrofüzyon servis te"),
        make_product("NTG EFR 63-50", "EF Redüksiyon", diameter="63-50", description="Elektrofüzyon redüksiyon"),
        make_product("NTG EFM 75-40", "EF Manşon", diameter="75-40", description="Elektrofüzyon manşon"),
        make_product("NTG EF 110-63", "EF Servis Te", diameter="110-63", description="SDR11 servis te"),
    ]


@pytest.fixture
def catalog(pipe_products):
    return FakeCatalog(pipe_products)


@pytest.fixture
def session_factory():
    """Session factory over a single in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()
