from typing import Any, List
from markupsafe import escape
from pydantic import BaseModel, Field, field_validator
from models import valid_id

REQUIRED_FIELDS = (
    ("title", "Title must not be empty."),
    ("author", "Author must not be empty."),
    ("summary", "Summary must not be empty."),
    ("isbn", "ISBN must not be empty"),
)


def normalize_genre(value: Any) -> list[str]:
    """Submitted genre ids as a list: absent is empty, a single value is a singleton."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def sanitize(value: Any) -> str:
    """Trim surrounding whitespace and escape markup."""
    if value is None:
        return ""
    return str(escape(str(value).strip()))


def parse_id(value: str) -> int | None:
    if not (value.isascii() and value.isdigit()):
        return None
    parsed = int(value)
    return parsed if valid_id(parsed) else None


class FieldError(BaseModel):
    param: str
    msg: str
    value: str = ""


class BookForm(BaseModel):
    """A submitted book form, already trimmed and escaped.

    Sanitizing happens on construction whatever the field contents are;
    ``errors()`` reports what is still missing or malformed afterwards, so a
    failed submission can be shown back to the user as entered.
    """

    title: str = ""
    author: str = ""
    summary: str = ""
    isbn: str = ""
    genre: List[str] = Field(default_factory=list)

    @field_validator("title", "author", "summary", "isbn", mode="before")
    @classmethod
    def _sanitize_text(cls, value: Any) -> str:
        return sanitize(value)

    @field_validator("genre", mode="before")
    @classmethod
    def _normalize_genre(cls, value: Any) -> list[str]:
        return [g for g in (sanitize(v) for v in normalize_genre(value)) if g]

    @property
    def author_id(self) -> int | None:
        return parse_id(self.author)

    @property
    def genre_ids(self) -> list[int]:
        ids: list[int] = []
        for raw in self.genre:
            gid = parse_id(raw)
            if gid is not None and gid not in ids:
                ids.append(gid)
        return ids

    def errors(self) -> list[FieldError]:
        result: list[FieldError] = []
        for name, msg in REQUIRED_FIELDS:
            if not getattr(self, name):
                result.append(FieldError(param=name, msg=msg))

        if self.author and self.author_id is None:
            result.append(
                FieldError(
                    param="author",
                    msg="Author must be a valid selection.",
                    value=self.author,
                )
            )
        for raw in self.genre:
            if parse_id(raw) is None:
                result.append(
                    FieldError(
                        param="genre", msg="Genre must be a valid selection.", value=raw
                    )
                )
                break
        return result
