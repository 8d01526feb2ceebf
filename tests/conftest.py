import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from fastapi_column_sortable import SortableSettings
from tests.models import Author, Base, Book, Category


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def library(session):
    ann = Author(name="Ann", born=1970)
    zed = Author(name="Zed", born=1950)
    session.add_all([
        Book(title="Beta", pages=300, author=zed),
        Book(title="Alpha", pages=120, author=ann),
        Book(title="Gamma", pages=80),
    ])
    tools = Category(name="Tools")
    blades = Category(name="Blades")
    session.add_all([
        tools,
        blades,
        Category(name="Hammers", parent=tools),
        Category(name="Saws", parent=blades),
    ])
    session.commit()
    return session


@pytest.fixture()
def settings():
    return SortableSettings(_env_file=None)
