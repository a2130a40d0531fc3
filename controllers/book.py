"""Book catalog operations.

Each operation receives the session factory and its parsed inputs and returns
an Outcome. Reads that do not depend on each other go through ``gather_all``,
and each of them opens its own session, since one AsyncSession cannot run two
statements at once.
"""
import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import load_only, selectinload

from controllers.outcomes import NotFound, Outcome, Redirect, Render
from helpers import gather_all
from models import Author, Book, BookInstance, Genre, valid_id
from schemas.book import BookForm, FieldError
from schemas.shared import AuthorOption, GenreOption

logger = logging.getLogger(__name__)

BOOK_LIST_URL = "/catalog/books"


async def fetch_book(sessions: async_sessionmaker, book_id: int) -> Book | None:
    if not valid_id(book_id):
        return None
    async with sessions() as db:
        stmt = (
            select(Book)
            .options(selectinload(Book.author))
            .options(selectinload(Book.genre))
            .where(Book.id == book_id)
        )
        return (await db.execute(stmt)).scalar_one_or_none()


async def fetch_book_instances(
    sessions: async_sessionmaker, book_id: int
) -> list[BookInstance]:
    if not valid_id(book_id):
        return []
    async with sessions() as db:
        stmt = (
            select(BookInstance)
            .where(BookInstance.book_id == book_id)
            .order_by(BookInstance.id)
        )
        return list((await db.execute(stmt)).scalars().all())


async def fetch_authors(sessions: async_sessionmaker) -> list[AuthorOption]:
    async with sessions() as db:
        stmt = select(Author).order_by(Author.family_name, Author.first_name)
        authors = (await db.execute(stmt)).scalars().all()
        return [AuthorOption.model_validate(a, from_attributes=True) for a in authors]


async def fetch_genres(sessions: async_sessionmaker) -> list[Genre]:
    async with sessions() as db:
        stmt = select(Genre).order_by(Genre.name)
        return list((await db.execute(stmt)).scalars().all())


def mark_checked(genres: Iterable[Genre], selected_ids: Iterable[int]) -> list[GenreOption]:
    selected = set(selected_ids)
    return [
        GenreOption(id=g.id, name=g.name, checked=g.id in selected) for g in genres
    ]


async def _resolve_references(
    db: AsyncSession, form: BookForm
) -> tuple[Author | None, list[Genre], list[FieldError]]:
    errors: list[FieldError] = []
    author = await db.get(Author, form.author_id)
    if author is None:
        errors.append(
            FieldError(
                param="author", msg="Author must be a valid selection.", value=form.author
            )
        )

    genres: list[Genre] = []
    genre_ids = form.genre_ids
    if genre_ids:
        stmt = select(Genre).where(Genre.id.in_(genre_ids))
        genres = list((await db.execute(stmt)).scalars().all())
        if len(genres) != len(genre_ids):
            errors.append(
                FieldError(param="genre", msg="Genre must be a valid selection.")
            )
    return author, genres, errors


async def _render_form(
    sessions: async_sessionmaker,
    title: str,
    form: BookForm,
    errors: list[FieldError],
) -> Render:
    results = await gather_all(
        authors=fetch_authors(sessions),
        genres=fetch_genres(sessions),
    )
    return Render(
        "book_form.html",
        {
            "title": title,
            "authors": results["authors"],
            "genres": mark_checked(results["genres"], form.genre_ids),
            "book": form,
            "errors": errors,
        },
    )


async def list_books(sessions: async_sessionmaker) -> Outcome:
    async with sessions() as db:
        stmt = (
            select(Book)
            .options(load_only(Book.title, Book.author_id))
            .options(selectinload(Book.author))
            .order_by(Book.title, Book.id)
        )
        books = (await db.execute(stmt)).scalars().all()
    return Render("book_list.html", {"title": "Book List", "book_list": books})


async def book_detail(sessions: async_sessionmaker, book_id: int) -> Outcome:
    results = await gather_all(
        book=fetch_book(sessions, book_id),
        book_instances=fetch_book_instances(sessions, book_id),
    )
    if results["book"] is None:
        return NotFound("Book not found")
    return Render(
        "book_detail.html",
        {
            "title": "Book Detail",
            "book": results["book"],
            "book_instances": results["book_instances"],
        },
    )


async def create_form(sessions: async_sessionmaker) -> Outcome:
    results = await gather_all(
        authors=fetch_authors(sessions),
        genres=fetch_genres(sessions),
    )
    return Render(
        "book_form.html",
        {
            "title": "Create Book",
            "authors": results["authors"],
            "genres": mark_checked(results["genres"], []),
        },
    )


async def create_book(sessions: async_sessionmaker, form: BookForm) -> Outcome:
    errors = form.errors()
    if not errors:
        async with sessions() as db:
            author, genres, errors = await _resolve_references(db, form)
            if not errors:
                new_book = Book(
                    title=form.title,
                    author_id=author.id,
                    summary=form.summary,
                    isbn=form.isbn,
                    genre=genres,
                )
                db.add(new_book)
                await db.commit()
                logger.info("Created book %s (%r)", new_book.id, new_book.title)
                return Redirect(new_book.url)

    return await _render_form(sessions, "Create Book", form, errors)


async def delete_form(sessions: async_sessionmaker, book_id: int) -> Outcome:
    results = await gather_all(
        book=fetch_book(sessions, book_id),
        book_instances=fetch_book_instances(sessions, book_id),
    )
    if results["book"] is None:
        return Redirect(BOOK_LIST_URL)
    return Render(
        "book_delete.html",
        {
            "title": "Delete Book",
            "book": results["book"],
            "book_instances": results["book_instances"],
        },
    )


async def delete_book(sessions: async_sessionmaker, book_id: int) -> Outcome:
    results = await gather_all(
        book=fetch_book(sessions, book_id),
        book_instances=fetch_book_instances(sessions, book_id),
    )
    if results["book_instances"]:
        logger.info(
            "Refusing to delete book %s: %d copies still reference it",
            book_id,
            len(results["book_instances"]),
        )
        return Render(
            "book_delete.html",
            {
                "title": "Delete Book",
                "book": results["book"],
                "book_instances": results["book_instances"],
            },
        )

    if results["book"] is not None:
        async with sessions() as db:
            old_book = await db.get(Book, book_id, options=[selectinload(Book.genre)])
            if old_book is not None:
                await db.delete(old_book)
                await db.commit()
                logger.info("Deleted book %s", book_id)
    return Redirect(BOOK_LIST_URL)


async def update_form(sessions: async_sessionmaker, book_id: int) -> Outcome:
    results = await gather_all(
        book=fetch_book(sessions, book_id),
        authors=fetch_authors(sessions),
        genres=fetch_genres(sessions),
    )
    book = results["book"]
    if book is None:
        return NotFound("Book not found")
    return Render(
        "book_form.html",
        {
            "title": "Update Book",
            "book": book,
            "authors": results["authors"],
            "genres": mark_checked(results["genres"], [g.id for g in book.genre]),
        },
    )


async def update_book(
    sessions: async_sessionmaker, book_id: int, form: BookForm
) -> Outcome:
    errors = form.errors()
    if not errors:
        if not valid_id(book_id):
            return NotFound("Book not found")
        async with sessions() as db:
            old_book = await db.get(Book, book_id, options=[selectinload(Book.genre)])
            if old_book is None:
                return NotFound("Book not found")

            author, genres, errors = await _resolve_references(db, form)
            if not errors:
                old_book.title = form.title
                old_book.author_id = author.id
                old_book.summary = form.summary
                old_book.isbn = form.isbn
                old_book.genre = genres
                await db.commit()
                logger.info("Updated book %s", book_id)
                return Redirect(old_book.url)

    return await _render_form(sessions, "Update Book", form, errors)
