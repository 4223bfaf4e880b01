"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests. JSON field names are camelCase; the
snake_case attribute names are accepted on input too.
"""

import math
import uuid
from datetime import date
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .models import Role

T = TypeVar("T")

# counters are stored as signed 64-bit integers
MAX_COUNTER = 2**63 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateClientDto(CamelModel):
    """Payload for creating a client."""
    name: str
    address: str
    projects_total: int = Field(default=0, ge=0, le=MAX_COUNTER)
    projects_completed: int = Field(default=0, ge=0, le=MAX_COUNTER)


class UpdateClientDto(CreateClientDto):
    """Payload for updating a client; every field is mutable."""


class ClientDto(CamelModel):
    id: uuid.UUID
    name: str
    address: str
    projects_total: int
    projects_completed: int


class CreateProjectDto(CamelModel):
    """Payload for creating a project for an existing client and manager."""
    client_id: uuid.UUID
    name: str
    start_date: date
    planned_end_date: date
    actual_end_date: Optional[date] = None
    manager_id: uuid.UUID


class UpdateProjectDto(CamelModel):
    """Payload for updating a project.

    The owning client and the start date are not part of it: anything
    else sent along (`id`, `clientId`, ...) is ignored.
    """
    name: str
    planned_end_date: date
    actual_end_date: Optional[date] = None
    manager_id: uuid.UUID


class ProjectDto(CamelModel):
    id: uuid.UUID
    client_id: uuid.UUID
    name: str
    start_date: date
    planned_end_date: date
    actual_end_date: Optional[date] = None
    manager_id: uuid.UUID


class CreateUserDto(CamelModel):
    """Payload for registering a user with a plaintext password."""
    name: str
    login: str
    password: str
    role: Role = Role.USER


class UpdateUserDto(CamelModel):
    """Payload for updating a user.

    `password_hash` is stored as given; callers are expected to send an
    already hashed value.
    """
    name: str
    login: str
    password_hash: str
    role: Role = Role.USER


class UserDto(CamelModel):
    """Outward view of a user. Never carries the password hash."""
    id: uuid.UUID
    name: str
    login: str
    role: Role


class PaginatedResult(CamelModel, Generic[T]):
    """One page of a collection plus navigation metadata.

    `total_pages` is derived from `total_count`, not from the number of
    items on the current page.
    """
    items: List[T]
    page: int
    page_size: int
    total_count: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @computed_field(alias="hasPrevious")
    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @computed_field(alias="hasNext")
    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
