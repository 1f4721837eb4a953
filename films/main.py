from fastapi import FastAPI, Body, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlmodel import Session
from typing import Any, List
from films import __version__, service
from films.config import DEFAULT_SKIP, DEFAULT_TAKE, LOG_LEVEL
from films.database.db import get_session, wait_for_db
from films.errors import NotFoundError, ValidationError
from films.models.films import Film, CreateFilmDto, UpdateFilmDto, ReadFilmDto
from films.patch import PatchOperation
from films.validation import violations_from_errors
import logging

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Films service",
    description="API for managing films list",
    version=__version__
)

NOT_FOUND = {404: {"description": "The movie was not found"}}
INVALID = {400: {"description": "One or more fields failed validation"}}


def _request_schema(schema: dict) -> dict:
    # bodies of PUT/PATCH are read loosely so the id lookup runs first
    return {"requestBody": {"required": True, "content": {"application/json": {"schema": schema}}}}


@app.on_event("startup")
async def startup_event():
    logger.info("Launching the movie service...")
    wait_for_db()
    logger.info("The service is ready to work")


def _validation_problem(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(error), "errors": error.as_dict()}
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _validation_problem(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request to {request.url.path}")
    return _validation_problem(ValidationError(violations_from_errors(exc.errors())))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Film not found"}
    )


@app.post("/filme",
          response_model=Film,
          status_code=status.HTTP_201_CREATED,
          summary="Add a new movie",
          response_description="The data of the created movie",
          responses=INVALID)
def create_film(
        film_dto: CreateFilmDto,
        request: Request,
        response: Response,
        session: Session = Depends(get_session)
):
    film = service.create_film(session, film_dto)
    response.headers["Location"] = str(request.url_for("read_film", film_id=film.id))
    return film


@app.get("/filme",
         response_model=List[ReadFilmDto],
         summary="Get a page of movies",
         response_description="Movies in insertion order, skipping `skip` and returning at most `take`")
def read_films(
        skip: int = DEFAULT_SKIP,
        take: int = DEFAULT_TAKE,
        session: Session = Depends(get_session)
):
    return service.list_films(session, skip=skip, take=take)


@app.get("/filme/{film_id}",
         response_model=ReadFilmDto,
         summary="Get a movie by ID",
         responses=NOT_FOUND)
def read_film(film_id: int, session: Session = Depends(get_session)):
    return service.get_film(session, film_id)


@app.put("/filme/{film_id}",
         status_code=status.HTTP_204_NO_CONTENT,
         summary="Replace all fields of a movie",
         responses={**NOT_FOUND, **INVALID},
         openapi_extra=_request_schema(UpdateFilmDto.model_json_schema()))
def update_film(
        film_id: int,
        film_data: Any = Body(..., description="title, director, genre and duration"),
        session: Session = Depends(get_session)
):
    service.update_film(session, film_id, film_data)


@app.patch("/filme/{film_id}",
           status_code=status.HTTP_204_NO_CONTENT,
           summary="Update some fields of a movie with a JSON Patch document",
           responses={**NOT_FOUND, **INVALID},
           openapi_extra=_request_schema({"type": "array", "items": PatchOperation.model_json_schema()}))
def patch_film(
        film_id: int,
        patch_document: Any = Body(..., description="JSON Patch operations"),
        session: Session = Depends(get_session)
):
    service.patch_film(session, film_id, patch_document)


@app.delete("/filme/{film_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            summary="Delete a movie",
            responses=NOT_FOUND)
def delete_film(film_id: int, session: Session = Depends(get_session)):
    service.delete_film(session, film_id)
