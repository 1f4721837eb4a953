"""Movie resource operations.

Every function takes the request's ``Session`` explicitly; the caller owns
its lifetime. Store errors are not caught here.
"""
from typing import Any, List

from sqlmodel import select, Session

from films import mapping
from films.config import DEFAULT_SKIP, DEFAULT_TAKE
from films.errors import NotFoundError, ValidationError
from films.models.films import Film, CreateFilmDto, UpdateFilmDto, ReadFilmDto
from films.patch import apply_patch, parse_patch
from films.validation import validate_film
import logging

logger = logging.getLogger(__name__)

MAX_ROWS = 2 ** 63 - 1


def _find(session: Session, film_id: int) -> Film:
    film = session.get(Film, film_id)
    if not film:
        logger.warning(f"A non-existent movie ID was requested {film_id}")
        raise NotFoundError(film_id)
    return film


def _validated(dto_class, data: Any):
    film_dto, violations = validate_film(dto_class, data)
    if violations:
        logger.warning(f"Rejected {dto_class.__name__}: {violations}")
        raise ValidationError(violations)
    return film_dto


def create_film(session: Session, film_data: Any) -> Film:
    film_dto = _validated(CreateFilmDto, film_data)
    film = mapping.to_entity(film_dto)
    session.add(film)
    session.commit()
    session.refresh(film)
    logger.info(f"A new movie has been added: ID {film.id}, {film.title}")
    return film


def list_films(session: Session, skip: int = DEFAULT_SKIP, take: int = DEFAULT_TAKE) -> List[ReadFilmDto]:
    # OFFSET/LIMIT are bound as 64-bit integers
    if take <= 0 or skip > MAX_ROWS:
        return []
    query = select(Film).order_by(Film.id).offset(max(skip, 0)).limit(min(take, MAX_ROWS))
    films = session.exec(query).all()
    logger.info(f"A list of films was requested, {len(films)} entries were found")
    return [mapping.to_read_dto(film) for film in films]


def get_film(session: Session, film_id: int) -> ReadFilmDto:
    return mapping.to_read_dto(_find(session, film_id))


def update_film(session: Session, film_id: int, film_data: Any) -> None:
    film = _find(session, film_id)
    film_dto = _validated(UpdateFilmDto, film_data)
    mapping.apply_update(film_dto, film)
    session.add(film)
    session.commit()
    logger.info(f"Updated movie ID {film_id}: {film.title}")


def patch_film(session: Session, film_id: int, patch_document: Any) -> None:
    film = _find(session, film_id)
    operations, violations = parse_patch(patch_document)
    if violations:
        logger.warning(f"Rejected patch document for movie ID {film_id}: {violations}")
        raise ValidationError(violations)
    current = mapping.to_update_dto(film).model_dump()
    patched, violations = apply_patch(current, operations)
    film_dto, invalid = validate_film(UpdateFilmDto, patched)
    violations.extend(invalid)
    if violations:
        logger.warning(f"Rejected patch for movie ID {film_id}: {violations}")
        raise ValidationError(violations)
    mapping.apply_update(film_dto, film)
    session.add(film)
    session.commit()
    logger.info(f"Patched movie ID {film_id} with {len(operations)} operation(s)")


def delete_film(session: Session, film_id: int) -> None:
    film = _find(session, film_id)
    title = film.title
    session.delete(film)
    session.commit()
    logger.info(f"Deleted movie ID {film_id}: {title}")
