"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints consumed by the delivery
dashboard. Controllers are intentionally thin: they accept requests,
delegate to services, and translate service outcomes into status codes.

Endpoints implemented (for each of clients, projects, users):
- GET /{collection}?page=&pageSize=
- GET /{collection}/{id}
- POST /{collection}
- PUT /{collection}/{id}
- DELETE /{collection}/{id}
plus GET /health.
"""

import json
import logging
import time
import uuid

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from . import schemas, services
from .config import settings
from .database import create_db_and_tables, get_session
from .errors import ConflictError, ValidationError
from .pagination import DEFAULT_PAGE_SIZE

app = FastAPI(
    title="Swee API",
    version="v1",
    description="A minimal API for software development process management",
)
logger = logging.getLogger("sweem.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

# Wide-open CORS keeps a locally served dashboard working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
            ensure_ascii=True,
        ),
    )
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "internal server error"})


def _page_params(
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
):
    return page, page_size


def _crud_router(collection: str, tag: str, service_class, create_dto, update_dto, view) -> APIRouter:
    """Build the five CRUD routes for one collection on top of `service_class`."""
    router = APIRouter(prefix=f"/{collection}", tags=[tag])
    noun = tag[:-1].lower()

    @router.get("", response_model=schemas.PaginatedResult[view], summary=f"Get all {collection} with pagination")
    def list_entities(paging=Depends(_page_params), db: Session = Depends(get_session)):
        page, page_size = paging
        return service_class(db).get_all(page, page_size)

    @router.get("/{entity_id}", response_model=view, summary=f"Get a {noun} by ID")
    def get_entity(entity_id: uuid.UUID, db: Session = Depends(get_session)):
        found = service_class(db).get_by_id(entity_id)
        if found is None:
            raise HTTPException(status_code=404, detail=f"{noun} not found")
        return found

    @router.post("", status_code=201, response_model=uuid.UUID, summary=f"Create a new {noun}")
    def create_entity(payload: create_dto, response: Response, db: Session = Depends(get_session)):
        new_id = service_class(db).create(payload)
        response.headers["Location"] = f"/{collection}/{new_id}"
        return new_id

    @router.put("/{entity_id}", response_model=view, summary=f"Update an existing {noun}")
    def update_entity(entity_id: uuid.UUID, payload: update_dto, db: Session = Depends(get_session)):
        updated = service_class(db).update(entity_id, payload)
        if updated is None:
            raise HTTPException(status_code=404, detail=f"{noun} not found")
        return updated

    @router.delete("/{entity_id}", response_model=uuid.UUID, summary=f"Delete a {noun}")
    def delete_entity(entity_id: uuid.UUID, db: Session = Depends(get_session)):
        if not service_class(db).delete(entity_id):
            raise HTTPException(status_code=404, detail=f"{noun} not found")
        return entity_id

    return router


app.include_router(_crud_router(
    "clients", "Clients", services.ClientService,
    schemas.CreateClientDto, schemas.UpdateClientDto, schemas.ClientDto,
))
app.include_router(_crud_router(
    "projects", "Projects", services.ProjectService,
    schemas.CreateProjectDto, schemas.UpdateProjectDto, schemas.ProjectDto,
))
app.include_router(_crud_router(
    "users", "Users", services.UserService,
    schemas.CreateUserDto, schemas.UpdateUserDto, schemas.UserDto,
))


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
