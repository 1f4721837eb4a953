from pydantic import field_validator
from sqlmodel import SQLModel, Field


class FilmBase(SQLModel):
    title: str = Field(min_length=1)
    director: str = Field(min_length=1)
    genre: str = Field(min_length=1, max_length=55)
    duration: int = Field(ge=60, le=700)

    @field_validator("title", "director", "genre")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class Film(FilmBase, table=True):
    id: int | None = Field(default=None, primary_key=True)


class CreateFilmDto(FilmBase):
    pass


class UpdateFilmDto(FilmBase):
    pass


class ReadFilmDto(SQLModel):
    id: int
    title: str
    director: str
    genre: str
    duration: int
