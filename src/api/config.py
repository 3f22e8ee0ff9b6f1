"""Application settings, read from the environment once at startup."""

import os
from dataclasses import dataclass
from functools import lru_cache

from services.password import DEFAULT_BCRYPT_ROUNDS

RECORD_STORE_AIRTABLE = "airtable"
RECORD_STORE_MONGODB = "mongodb"


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    record_store: str = RECORD_STORE_AIRTABLE
    airtable_api_key: str | None = None
    airtable_base_id: str | None = None
    airtable_user_table: str = "Users"
    airtable_project_table: str = "Projects"
    airtable_like_table: str = "Likes"
    store_timeout_seconds: float = 10.0
    mongo_url: str | None = None
    mongodb_database: str = "portfolio"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: JWT_SECRET_KEY is missing, or RECORD_STORE is unknown
        """
        secret = os.getenv("JWT_SECRET_KEY")
        if not secret:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        record_store = os.getenv("RECORD_STORE", RECORD_STORE_AIRTABLE).lower()
        if record_store not in (RECORD_STORE_AIRTABLE, RECORD_STORE_MONGODB):
            raise ValueError(f"Unsupported RECORD_STORE: {record_store}")

        return cls(
            jwt_secret_key=secret,
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)),
            record_store=record_store,
            airtable_api_key=os.getenv("AIRTABLE_API_KEY"),
            airtable_base_id=os.getenv("AIRTABLE_BASE_ID"),
            airtable_user_table=os.getenv("AIRTABLE_USER_TABLE_ID", "Users"),
            airtable_project_table=os.getenv("AIRTABLE_PROJECT_TABLE_ID", "Projects"),
            airtable_like_table=os.getenv("AIRTABLE_LIKE_TABLE_ID", "Likes"),
            store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "10")),
            mongo_url=os.getenv("MONGO_URL"),
            mongodb_database=os.getenv("MONGODB_DATABASE", "portfolio"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
