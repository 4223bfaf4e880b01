"""Stateless transforms between wire schemas and table models.

`to_*` build a new entity with a fresh id, `apply_*_update` copy only the
mutable fields onto an existing entity, and `*_to_dto` build the outward
view (returning `None` for a missing entity).
"""

import uuid
from typing import Optional

from . import models, schemas


def to_client(dto: schemas.CreateClientDto) -> models.Client:
    return models.Client(
        id=uuid.uuid4(),
        name=dto.name,
        address=dto.address,
        projects_total=dto.projects_total,
        projects_completed=dto.projects_completed,
    )


def apply_client_update(client: models.Client, dto: schemas.UpdateClientDto) -> None:
    client.name = dto.name
    client.address = dto.address
    client.projects_total = dto.projects_total
    client.projects_completed = dto.projects_completed


def client_to_dto(client: Optional[models.Client]) -> Optional[schemas.ClientDto]:
    if client is None:
        return None
    return schemas.ClientDto(
        id=client.id,
        name=client.name,
        address=client.address,
        projects_total=client.projects_total,
        projects_completed=client.projects_completed,
    )


def to_project(dto: schemas.CreateProjectDto) -> models.Project:
    return models.Project(
        id=uuid.uuid4(),
        client_id=dto.client_id,
        name=dto.name,
        start_date=dto.start_date,
        planned_end_date=dto.planned_end_date,
        actual_end_date=dto.actual_end_date,
        manager_id=dto.manager_id,
    )


def apply_project_update(project: models.Project, dto: schemas.UpdateProjectDto) -> None:
    # client_id and start_date stay as created
    project.name = dto.name
    project.planned_end_date = dto.planned_end_date
    project.actual_end_date = dto.actual_end_date
    project.manager_id = dto.manager_id


def project_to_dto(project: Optional[models.Project]) -> Optional[schemas.ProjectDto]:
    if project is None:
        return None
    return schemas.ProjectDto(
        id=project.id,
        client_id=project.client_id,
        name=project.name,
        start_date=project.start_date,
        planned_end_date=project.planned_end_date,
        actual_end_date=project.actual_end_date,
        manager_id=project.manager_id,
    )


def to_user(dto: schemas.CreateUserDto, password_hash: str) -> models.User:
    """Build a `User` from the create payload and an already computed hash."""
    return models.User(
        id=uuid.uuid4(),
        name=dto.name,
        login=dto.login,
        password_hash=password_hash,
        role=dto.role,
    )


def apply_user_update(user: models.User, dto: schemas.UpdateUserDto) -> None:
    user.name = dto.name
    user.login = dto.login
    user.password_hash = dto.password_hash
    user.role = dto.role


def user_to_dto(user: Optional[models.User]) -> Optional[schemas.UserDto]:
    if user is None:
        return None
    return schemas.UserDto(id=user.id, name=user.name, login=user.login, role=user.role)
