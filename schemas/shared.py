from pydantic import BaseModel


class AuthorOption(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class GenreOption(BaseModel):
    id: int
    name: str
    checked: bool = False

    class Config:
        from_attributes = True
