"""Business logic services used by HTTP controllers.

This module holds the CRUD service classes for clients, projects and
users. They share one contract (`CrudService`): validate input, map it
onto table models through `mappers`, persist inside a single unit of
work and map results back to wire schemas. Entity specific rules are
supplied by each subclass.
"""

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from . import mappers, models, passwords, repositories, schemas
from .database import unit_of_work
from .errors import ConflictError, SweemError, ValidationError
from .pagination import DEFAULT_PAGE_SIZE, paginate

logger = logging.getLogger("sweem.services")


def _require_text(value: Optional[str], field: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty")


class CrudService:
    """Create/list/get/update/delete for one table model.

    Subclasses set `repository_class`, `view` and the three mapping
    callables, and override the `validate_*` / `before_delete` hooks.
    """
    repository_class = repositories.Repository
    view = None
    entity_name = "entity"
    to_entity = None
    apply_update = None
    to_view = None

    def __init__(self, session: Session):
        self.session = session
        self.repo = self.repository_class(session)

    def validate_create(self, dto) -> None:
        pass

    def validate_update(self, entity, dto) -> None:
        pass

    def before_delete(self, entity) -> None:
        pass

    def integrity_message(self, exc: IntegrityError) -> str:
        return f"{self.entity_name} change violates a storage constraint"

    def create(self, dto) -> uuid.UUID:
        """Validate and persist a new entity, returning its generated id."""
        try:
            with unit_of_work(self.session):
                self.validate_create(dto)
                entity = self.repo.add(self.to_entity(dto))
                entity_id = entity.id
        except IntegrityError as exc:
            logger.warning("create %s rejected by store: %s", self.entity_name, exc.orig)
            raise ConflictError(self.integrity_message(exc)) from exc
        except SweemError as exc:
            logger.warning("create %s rejected: %s", self.entity_name, exc)
            raise
        logger.info("created %s %s", self.entity_name, entity_id)
        return entity_id

    def get_all(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> schemas.PaginatedResult:
        """Return one page of the collection ordered by id."""
        result = paginate(self.session, self.repo.ordered(), page, page_size)
        return schemas.PaginatedResult[self.view](
            items=[self.to_view(e) for e in result.items],
            page=result.page,
            page_size=result.page_size,
            total_count=result.total_count,
        )

    def get_by_id(self, entity_id: uuid.UUID):
        """Return the view of one entity or `None` when it does not exist."""
        return self.to_view(self.repo.get(entity_id))

    def update(self, entity_id: uuid.UUID, dto):
        """Apply the mutable fields of `dto`; returns `None` when the entity is absent."""
        try:
            with unit_of_work(self.session):
                entity = self.repo.get(entity_id)
                if entity is None:
                    return None
                self.validate_update(entity, dto)
                self.apply_update(entity, dto)
                self.repo.add(entity)
        except IntegrityError as exc:
            logger.warning("update %s %s rejected by store: %s", self.entity_name, entity_id, exc.orig)
            raise ConflictError(self.integrity_message(exc)) from exc
        except SweemError as exc:
            logger.warning("update %s %s rejected: %s", self.entity_name, entity_id, exc)
            raise
        self.session.refresh(entity)
        logger.info("updated %s %s", self.entity_name, entity_id)
        return self.to_view(entity)

    def delete(self, entity_id: uuid.UUID) -> bool:
        """Delete an entity after applying its integrity policy.

        Returns False when the entity does not exist; a delete refused by
        policy raises `ConflictError`.
        """
        try:
            with unit_of_work(self.session):
                entity = self.repo.get(entity_id)
                if entity is None:
                    return False
                self.before_delete(entity)
                self.repo.delete(entity)
        except IntegrityError as exc:
            logger.warning("delete %s %s rejected by store: %s", self.entity_name, entity_id, exc.orig)
            raise ConflictError(self.integrity_message(exc)) from exc
        except SweemError as exc:
            logger.warning("delete %s %s refused: %s", self.entity_name, entity_id, exc)
            raise
        logger.info("deleted %s %s", self.entity_name, entity_id)
        return True


class ClientService(CrudService):
    """Clients; deleting one removes its projects in the same transaction."""
    repository_class = repositories.ClientRepository
    view = schemas.ClientDto
    entity_name = "client"
    to_entity = staticmethod(mappers.to_client)
    apply_update = staticmethod(mappers.apply_client_update)
    to_view = staticmethod(mappers.client_to_dto)

    def __init__(self, session: Session):
        super().__init__(session)
        self.projects = repositories.ProjectRepository(session)

    def validate_create(self, dto: schemas.CreateClientDto) -> None:
        _require_text(dto.name, "name")
        _require_text(dto.address, "address")
        if dto.projects_completed > dto.projects_total:
            raise ValidationError("projectsCompleted must not exceed projectsTotal")

    def validate_update(self, entity: models.Client, dto: schemas.UpdateClientDto) -> None:
        self.validate_create(dto)

    def before_delete(self, entity: models.Client) -> None:
        projects = self.projects.list_for_client(entity.id)
        for project in projects:
            self.session.delete(project)
        self.session.flush()
        if projects:
            logger.info("cascading delete of client %s to %d project(s)", entity.id, len(projects))


class ProjectService(CrudService):
    """Projects; the client and manager they point to must exist."""
    repository_class = repositories.ProjectRepository
    view = schemas.ProjectDto
    entity_name = "project"
    to_entity = staticmethod(mappers.to_project)
    apply_update = staticmethod(mappers.apply_project_update)
    to_view = staticmethod(mappers.project_to_dto)

    def __init__(self, session: Session):
        super().__init__(session)
        self.clients = repositories.ClientRepository(session)
        self.users = repositories.UserRepository(session)

    def _validate_dates(self, start: date, planned_end: date, actual_end: Optional[date]) -> None:
        if start > planned_end:
            raise ValidationError("plannedEndDate must not be before startDate")
        if actual_end is not None and actual_end < start:
            raise ValidationError("actualEndDate must not be before startDate")

    def _validate_manager(self, manager_id: uuid.UUID) -> None:
        if not self.users.exists(manager_id):
            raise ValidationError(f"manager not found: {manager_id}")

    def validate_create(self, dto: schemas.CreateProjectDto) -> None:
        _require_text(dto.name, "name")
        if not self.clients.exists(dto.client_id):
            raise ValidationError(f"client not found: {dto.client_id}")
        self._validate_manager(dto.manager_id)
        self._validate_dates(dto.start_date, dto.planned_end_date, dto.actual_end_date)

    def validate_update(self, entity: models.Project, dto: schemas.UpdateProjectDto) -> None:
        _require_text(dto.name, "name")
        self._validate_manager(dto.manager_id)
        self._validate_dates(entity.start_date, dto.planned_end_date, dto.actual_end_date)


class UserService(CrudService):
    """Users; logins are unique and a user still managing projects cannot be deleted."""
    repository_class = repositories.UserRepository
    view = schemas.UserDto
    entity_name = "user"
    apply_update = staticmethod(mappers.apply_user_update)
    to_view = staticmethod(mappers.user_to_dto)

    def __init__(self, session: Session):
        super().__init__(session)
        self.projects = repositories.ProjectRepository(session)

    def to_entity(self, dto: schemas.CreateUserDto) -> models.User:
        return mappers.to_user(dto, passwords.hash_password(dto.password))

    def validate_create(self, dto: schemas.CreateUserDto) -> None:
        _require_text(dto.name, "name")
        _require_text(dto.login, "login")
        if not dto.password:
            raise ValidationError("password must not be empty")
        if self.repo.get_by_login(dto.login) is not None:
            raise ConflictError(f"login already exists: {dto.login}")

    def validate_update(self, entity: models.User, dto: schemas.UpdateUserDto) -> None:
        _require_text(dto.name, "name")
        _require_text(dto.login, "login")
        _require_text(dto.password_hash, "passwordHash")
        other = self.repo.get_by_login(dto.login)
        if other is not None and other.id != entity.id:
            raise ConflictError(f"login already exists: {dto.login}")

    def before_delete(self, entity: models.User) -> None:
        managed = self.projects.count_for_manager(entity.id)
        if managed:
            raise ConflictError(f"user {entity.id} still manages {managed} project(s)")

    def integrity_message(self, exc: IntegrityError) -> str:
        if "login" in str(exc.orig).lower():
            return "login already exists"
        return "user is still referenced by other records"
