from .films import Film, CreateFilmDto, UpdateFilmDto, ReadFilmDto

__all__ = ["Film", "CreateFilmDto", "UpdateFilmDto", "ReadFilmDto"]
