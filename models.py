import datetime
import enum

from database import Base
from sqlalchemy import Column, Date, Enum, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

# primary keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1


def valid_id(value: int) -> bool:
    return 0 < value <= MAX_ID


class BookInstanceStatus(str, enum.Enum):
    available = "Available"
    maintenance = "Maintenance"
    loaned = "Loaned"
    reserved = "Reserved"


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[datetime.date | None] = mapped_column(Date)
    date_of_death: Mapped[datetime.date | None] = mapped_column(Date)

    books: Mapped[list["Book"]] = relationship(back_populates="author")

    @property
    def name(self) -> str:
        # empty when either part is missing
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"


class Genre(Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"


book_genre_relation = Table(
    "book_genre_relation",
    Base.metadata,
    Column("book_id", ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(String(), nullable=False, index=True)

    author: Mapped["Author"] = relationship(back_populates="books")
    genre: Mapped[list["Genre"]] = relationship(secondary=book_genre_relation)

    # no cascade: copies must be removed before the book can be
    instances: Mapped[list["BookInstance"]] = relationship(
        back_populates="book", passive_deletes="all"
    )

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"


class BookInstance(Base):
    __tablename__ = "book_instances"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    imprint: Mapped[str] = mapped_column(String(), nullable=False)
    status: Mapped[BookInstanceStatus] = mapped_column(
        Enum(
            BookInstanceStatus,
            name="book_instance_status",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookInstanceStatus.maintenance,
    )
    due_back: Mapped[datetime.date] = mapped_column(
        Date, nullable=False, default=datetime.date.today
    )

    book: Mapped["Book"] = relationship(back_populates="instances")

    @property
    def url(self) -> str:
        return f"/catalog/bookinstance/{self.id}"
