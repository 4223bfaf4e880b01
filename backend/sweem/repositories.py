"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate (clients,
projects, users). Repositories return SQLModel objects and stage changes
on the session; committing is left to the caller's unit of work.
"""

import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from . import models


class Repository:
    """Shared lookups for a single table model keyed by UUID."""
    model = None

    def __init__(self, session: Session):
        self.session = session

    def get(self, entity_id: uuid.UUID):
        """Get an entity by primary key, or `None`."""
        return self.session.get(self.model, entity_id)

    def exists(self, entity_id: uuid.UUID) -> bool:
        return self.get(entity_id) is not None

    def add(self, entity):
        """Stage a new or modified entity and flush it so constraints are checked early."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity) -> None:
        self.session.delete(entity)
        self.session.flush()

    def ordered(self):
        """Select statement over the whole table in primary key order."""
        return select(self.model).order_by(self.model.id)


class ClientRepository(Repository):
    """CRUD operations for `Client` objects."""
    model = models.Client


class ProjectRepository(Repository):
    """CRUD operations for `Project` objects."""
    model = models.Project

    def list_for_client(self, client_id: uuid.UUID) -> List[models.Project]:
        """Return all projects owned by `client_id`."""
        stmt = select(models.Project).where(models.Project.client_id == client_id)
        return self.session.exec(stmt).all()

    def count_for_manager(self, manager_id: uuid.UUID) -> int:
        """Count projects managed by `manager_id`."""
        stmt = select(func.count()).select_from(models.Project).where(models.Project.manager_id == manager_id)
        return self.session.exec(stmt).one()


class UserRepository(Repository):
    """CRUD operations for `User` objects."""
    model = models.User

    def get_by_login(self, login: str) -> Optional[models.User]:
        """Return a `User` by exact login or `None` if not found."""
        stmt = select(models.User).where(models.User.login == login)
        return self.session.exec(stmt).first()
