"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    PASSWORD_SCHEMES: list
    ALLOW_DEV_CORS: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'swee.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        # first scheme hashes new passwords, the rest stay verifiable
        self.PASSWORD_SCHEMES = [
            s.strip() for s in os.getenv("PASSWORD_SCHEMES", "pbkdf2_sha256").split(",") if s.strip()
        ]
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self._validate()

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def _validate(self):
        if not self.PASSWORD_SCHEMES:
            raise RuntimeError("PASSWORD_SCHEMES must name at least one passlib scheme")
        if self.ENV not in ("dev", "test") and self.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
            raise RuntimeError("an in-memory database is only allowed in dev/test environments")


settings = Settings()
