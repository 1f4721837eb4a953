import pytest

from films import service
from films.errors import NotFoundError, ValidationError
from films.models.films import Film
from films.patch import PatchOperation


def patch(*raw):
    return [PatchOperation.model_validate(op) for op in raw]


def test_create_then_get(session, matrix):
    film = service.create_film(session, matrix)

    assert film.id is not None
    assert service.get_film(session, film.id).model_dump() == {"id": film.id, **matrix}


def test_create_rejects_invalid_payload(session, matrix):
    with pytest.raises(ValidationError) as exc_info:
        service.create_film(session, {**matrix, "duration": 701})

    assert exc_info.value.as_dict() == {"duration": ["The duration must be between 60 and 700 minutes"]}
    assert service.list_films(session) == []


def test_list_pages_in_insertion_order(session, matrix):
    ids = [service.create_film(session, {**matrix, "title": f"Film {n}"}).id for n in range(5)]

    assert [f.id for f in service.list_films(session)] == ids
    assert [f.title for f in service.list_films(session, skip=1, take=2)] == ["Film 1", "Film 2"]
    assert service.list_films(session, skip=10) == []


def test_list_bounds(session, matrix):
    service.create_film(session, matrix)

    assert len(service.list_films(session, skip=-3)) == 1
    assert service.list_films(session, take=0) == []
    assert service.list_films(session, take=-1) == []


def test_get_missing(session):
    with pytest.raises(NotFoundError):
        service.get_film(session, 42)


def test_update_overwrites_all_fields(session, matrix):
    film = service.create_film(session, matrix)
    changes = {"title": "Reloaded", "director": "Lana", "genre": "Action", "duration": 138}

    service.update_film(session, film.id, changes)

    assert service.get_film(session, film.id).model_dump() == {"id": film.id, **changes}


def test_update_invalid_leaves_record(session, matrix):
    film = service.create_film(session, matrix)

    with pytest.raises(ValidationError):
        service.update_film(session, film.id, {**matrix, "genre": "g" * 56})

    session.expire_all()
    assert session.get(Film, film.id).genre == "SciFi"


def test_missing_id_wins_over_invalid_payload(session):
    with pytest.raises(NotFoundError):
        service.update_film(session, 5, {"duration": 1})
    with pytest.raises(NotFoundError):
        service.patch_film(session, 5, patch({"op": "replace", "path": "/duration", "value": 1}))
    with pytest.raises(NotFoundError):
        service.delete_film(session, 5)


def test_patch_only_duration(session, matrix):
    film = service.create_film(session, matrix)

    service.patch_film(session, film.id, patch({"op": "replace", "path": "/duration", "value": 90}))

    assert service.get_film(session, film.id).model_dump() == {"id": film.id, **matrix, "duration": 90}


def test_patch_revalidates(session, matrix):
    film = service.create_film(session, matrix)

    with pytest.raises(ValidationError) as exc_info:
        service.patch_film(session, film.id, patch({"op": "remove", "path": "/title"}))

    assert exc_info.value.as_dict() == {"title": ["The film title is required"]}
    session.expire_all()
    assert session.get(Film, film.id).title == "Matrix"


def test_patch_reports_bad_path_as_validation_error(session, matrix):
    film = service.create_film(session, matrix)

    with pytest.raises(ValidationError) as exc_info:
        service.patch_film(session, film.id, patch({"op": "replace", "path": "/rating", "value": 3}))

    assert list(exc_info.value.as_dict()) == ["rating"]


def test_delete(session, matrix):
    film = service.create_film(session, matrix)

    service.delete_film(session, film.id)

    with pytest.raises(NotFoundError):
        service.get_film(session, film.id)


def test_list_beyond_integer_range(session, matrix):
    service.create_film(session, matrix)

    assert service.list_films(session, skip=10 ** 20) == []
    assert len(service.list_films(session, take=10 ** 20)) == 1


def test_patch_document_must_be_a_list(session, matrix):
    film = service.create_film(session, matrix)

    with pytest.raises(ValidationError) as exc_info:
        service.patch_film(session, film.id, {"op": "replace", "path": "/duration", "value": 90})

    assert list(exc_info.value.as_dict()) == ["body"]
