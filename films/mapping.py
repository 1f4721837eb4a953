from films.models.films import Film, CreateFilmDto, UpdateFilmDto, ReadFilmDto

FILM_FIELDS = ("title", "director", "genre", "duration")


def _fields(source) -> dict:
    return {name: getattr(source, name) for name in FILM_FIELDS}


def to_entity(film_dto: CreateFilmDto) -> Film:
    return Film(**_fields(film_dto))


def apply_update(film_dto: UpdateFilmDto, film: Film) -> Film:
    for name, value in _fields(film_dto).items():
        setattr(film, name, value)
    return film


def to_read_dto(film: Film) -> ReadFilmDto:
    return ReadFilmDto(id=film.id, **_fields(film))


def to_update_dto(film: Film) -> UpdateFilmDto:
    # unvalidated: stored rows are re-checked after patching
    return UpdateFilmDto.model_construct(**_fields(film))
