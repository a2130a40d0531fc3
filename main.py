import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from routers import book
from database import async_engine, create_all
from errors import register_error_handlers

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CREATE_SCHEMA = os.getenv("CREATE_SCHEMA", "0") == "1"
TEMPLATES_DIR = os.getenv(
    "TEMPLATES_DIR", str(Path(__file__).resolve().parent / "templates")
)


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if CREATE_SCHEMA:
        await create_all()
    yield
    await async_engine.dispose()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Local Library", lifespan=lifespan)
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(book.router)
    register_error_handlers(app)

    @app.get("/", include_in_schema=False)
    async def index():
        return RedirectResponse("/catalog/books", status_code=303)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
