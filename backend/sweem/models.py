"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to a table; the foreign keys from `Project` carry the
delete policies (cascade to `Client`, restrict to `User`).
"""

import uuid
from datetime import date
from enum import IntEnum
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field


class Role(IntEnum):
    """Closed set of user roles, serialized as integers on the wire."""
    USER = 0
    ADMIN = 1


class Client(SQLModel, table=True):
    """A customer that owns projects.

    `projects_completed` is expected to never exceed `projects_total`.
    """
    __table_args__ = (
        CheckConstraint("projects_total >= 0", name="ck_client_projects_total_non_negative"),
        CheckConstraint("projects_completed >= 0", name="ck_client_projects_completed_non_negative"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    address: str
    projects_total: int = 0
    projects_completed: int = 0


class Project(SQLModel, table=True):
    """A delivery project for a client, managed by a user."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    client_id: uuid.UUID = Field(foreign_key="client.id", ondelete="CASCADE", index=True)
    name: str
    start_date: date
    planned_end_date: date
    actual_end_date: Optional[date] = None
    manager_id: uuid.UUID = Field(foreign_key="user.id", ondelete="RESTRICT", index=True)


class User(SQLModel, table=True):
    """A system user.

    Fields:
    - `login`: unique login name (exact match)
    - `password_hash`: hashed password string (never store plaintext)
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    login: str = Field(index=True, nullable=False, unique=True)
    password_hash: str
    role: Role = Role.USER
