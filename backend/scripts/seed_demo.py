"""CLI script to fill the backend DB with demo clients, projects and users.
Usage: python scripts/seed_demo.py [--clients N]
"""
import sys
import argparse
import pathlib
from datetime import date, timedelta
# Ensure `backend/` is on sys.path so `sweem` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from sweem.database import engine, create_db_and_tables
from sweem import models, repositories, schemas, services


def main(clients: int = 3):
    """Create an admin, a manager and `clients` clients with two projects each.

    Runs again without duplicating users: existing logins are reused.
    """
    create_db_and_tables()
    with Session(engine) as session:
        users = repositories.UserRepository(session)
        user_svc = services.UserService(session)
        ids = {}
        for login, role in (('admin', models.Role.ADMIN), ('manager', models.Role.USER)):
            existing = users.get_by_login(login)
            if existing:
                ids[login] = existing.id
                continue
            ids[login] = user_svc.create(schemas.CreateUserDto(name=login.title(), login=login, password=login, role=role))
            print(f'Created user {login}')
        client_svc = services.ClientService(session)
        project_svc = services.ProjectService(session)
        start = date.today() - timedelta(days=60)
        for i in range(clients):
            client_id = client_svc.create(schemas.CreateClientDto(
                name=f'Demo Client {i + 1}', address=f'{i + 1} Demo Street', projects_total=2, projects_completed=1,
            ))
            for j, done in enumerate((True, False)):
                project_svc.create(schemas.CreateProjectDto(
                    client_id=client_id,
                    name=f'Project {i + 1}.{j + 1}',
                    start_date=start,
                    planned_end_date=start + timedelta(days=45 + 30 * j),
                    actual_end_date=start + timedelta(days=40) if done else None,
                    manager_id=ids['manager'],
                ))
            print(f'Created client {client_id} with 2 projects')


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--clients', type=int, default=3, help='Number of demo clients to create')
    args = parser.parse_args()
    main(clients=args.clients)
