import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool


@pytest.fixture
def sql_engine():
    """In-memory SQLite engine; one shared connection keeps the schema alive."""
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    yield engine
    engine.dispose()
