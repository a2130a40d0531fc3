"""
Async seeding script to populate the catalog with authors, genres, books and copies.

Usage (from the repository root):
    python -m scripts.seed_async --authors 10 --books 20 --copies 3

Writes straight to DATABASE_ASYNC_URL; tables are created when missing.
"""

import argparse
import asyncio
import datetime
import random
import uuid

from sqlalchemy.ext.asyncio import async_sessionmaker

from database import AsyncSessionLocal, async_engine, create_all
from models import Author, Book, BookInstance, BookInstanceStatus, Genre

GENRE_NAMES = ["Fantasy", "Science Fiction", "French Poetry", "History", "Mystery"]


def _isbn() -> str:
    # Generate a 13-digit ISBN-like string
    return f"978{uuid.uuid4().int % 10**10:010d}"


async def seed(
    sessions: async_sessionmaker, authors: int, books: int, max_copies: int
):
    async with sessions() as db:
        author_objs = []
        for idx in range(authors):
            suffix = uuid.uuid4().hex[:6]
            author_objs.append(
                Author(
                    first_name=f"Seed{idx}",
                    family_name=f"Author-{suffix}",
                    date_of_birth=datetime.date(1900 + idx % 90, 1, 1),
                )
            )
        db.add_all(author_objs)

        genre_objs = [Genre(name=f"{name} {uuid.uuid4().hex[:4]}") for name in GENRE_NAMES]
        db.add_all(genre_objs)

        if not author_objs:
            print("No authors created; skipping book creation.")
            await db.commit()
            return

        copies = 0
        for idx in range(books):
            suffix = uuid.uuid4().hex[:6]
            book = Book(
                title=f"Seed Book {idx}-{suffix}",
                author=random.choice(author_objs),
                summary="seeded via scripts/seed_async.py",
                isbn=_isbn(),
                genre=random.sample(genre_objs, k=random.randint(0, 2)),
            )
            db.add(book)
            for _ in range(random.randint(0, max_copies)):
                db.add(
                    BookInstance(
                        book=book,
                        imprint=f"Seed Press, {2000 + idx % 25}",
                        status=random.choice(list(BookInstanceStatus)),
                        due_back=datetime.date.today()
                        + datetime.timedelta(days=random.randint(0, 30)),
                    )
                )
                copies += 1
        await db.commit()

    print(f"Seeded {len(author_objs)} authors, {books} books and {copies} copies")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Async seeder for the Local Library catalog")
    parser.add_argument("--authors", type=int, default=10, help="Number of authors to create")
    parser.add_argument("--books", type=int, default=20, help="Number of books to create")
    parser.add_argument(
        "--copies",
        type=int,
        default=3,
        help="Maximum copies (book instances) to create per book",
    )
    return parser.parse_args()


async def run(args: argparse.Namespace):
    await create_all()
    try:
        await seed(AsyncSessionLocal, args.authors, args.books, args.copies)
    finally:
        await async_engine.dispose()


def main():
    asyncio.run(run(parse_args()))


if __name__ == "__main__":
    main()
