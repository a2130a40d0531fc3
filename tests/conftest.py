import os

# app modules build their engine at import time; keep it off Postgres here
os.environ.setdefault("DATABASE_ASYNC_URL", "sqlite+aiosqlite://")

import datetime
from types import SimpleNamespace

import httpx
import pytest_asyncio

from database import create_all, get_sessionmaker, make_engine, make_sessionmaker
from main import app
from models import Author, Book, BookInstance, BookInstanceStatus, Genre


@pytest_asyncio.fixture
async def sessions(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await create_all(engine)
    yield make_sessionmaker(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def catalog(sessions):
    """Two authors, two genres, a book with one copy and a book with none."""
    async with sessions() as db:
        herbert = Author(
            first_name="Frank",
            family_name="Herbert",
            date_of_birth=datetime.date(1920, 10, 8),
        )
        le_guin = Author(first_name="Ursula", family_name="Le Guin")
        scifi = Genre(name="Science Fiction")
        fantasy = Genre(name="Fantasy")
        dune = Book(
            title="Dune",
            author=herbert,
            summary="Desert planet.",
            isbn="0441013597",
            genre=[scifi],
        )
        left_hand = Book(
            title="The Left Hand of Darkness",
            author=le_guin,
            summary="Gethen.",
            isbn="0441478123",
            genre=[scifi, fantasy],
        )
        copy = BookInstance(
            book=dune,
            imprint="Ace, 2005",
            status=BookInstanceStatus.loaned,
            due_back=datetime.date(2030, 1, 15),
        )
        db.add_all([herbert, le_guin, scifi, fantasy, dune, left_hand, copy])
        await db.commit()
        return SimpleNamespace(
            herbert=herbert.id,
            le_guin=le_guin.id,
            scifi=scifi.id,
            fantasy=fantasy.id,
            dune=dune.id,
            left_hand=left_hand.id,
            copy=copy.id,
        )


@pytest_asyncio.fixture
async def client(sessions):
    app.dependency_overrides[get_sessionmaker] = lambda: sessions
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
