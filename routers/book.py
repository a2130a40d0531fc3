from typing import List
from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import async_sessionmaker
from controllers import book as controller
from controllers.outcomes import NotFound, Outcome, Redirect
from database import get_sessionmaker
from schemas.book import BookForm

router = APIRouter(prefix="/catalog", tags=["catalog"])


def respond(request: Request, outcome: Outcome):
    """Turn a controller outcome into the HTTP response for this request."""
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=outcome.status_code)
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=outcome.status_code, detail=outcome.detail)
    return request.app.state.templates.TemplateResponse(
        request, outcome.template, outcome.context, status_code=outcome.status_code
    )


def book_form(
    title: str = Form(""),
    author: str = Form(""),
    summary: str = Form(""),
    isbn: str = Form(""),
    genre: List[str] = Form([]),
) -> BookForm:
    return BookForm(title=title, author=author, summary=summary, isbn=isbn, genre=genre)


@router.get("/books", response_class=HTMLResponse)
async def get_books_router(
    request: Request,
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.list_books(sessions))


# registered ahead of /book/{book_id} so "create" is not read as an id
@router.get("/book/create", response_class=HTMLResponse)
async def get_create_form(
    request: Request,
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.create_form(sessions))


@router.post("/book/create", response_class=HTMLResponse)
async def create_book(
    request: Request,
    form: BookForm = Depends(book_form),
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.create_book(sessions, form))


@router.get("/book/{book_id}", response_class=HTMLResponse)
async def get_book_router(
    request: Request,
    book_id: int,
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.book_detail(sessions, book_id))


@router.get("/book/{book_id}/delete", response_class=HTMLResponse)
async def get_delete_form(
    request: Request,
    book_id: int,
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.delete_form(sessions, book_id))


@router.post("/book/{book_id}/delete", response_class=HTMLResponse)
async def delete_book(
    request: Request,
    book_id: int,
    bookid: int | None = Form(None),
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    target = bookid if bookid is not None else book_id
    return respond(request, await controller.delete_book(sessions, target))


@router.get("/book/{book_id}/update", response_class=HTMLResponse)
async def get_update_form(
    request: Request,
    book_id: int,
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.update_form(sessions, book_id))


@router.post("/book/{book_id}/update", response_class=HTMLResponse)
async def update_book(
    request: Request,
    book_id: int,
    form: BookForm = Depends(book_form),
    sessions: async_sessionmaker = Depends(get_sessionmaker),
):
    return respond(request, await controller.update_book(sessions, book_id, form))
