from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.airtable.client import AirtableClient
from adapter.airtable.like_repository import AirtableLikeRepository
from adapter.airtable.project_repository import AirtableProjectRepository
from adapter.airtable.user_repository import AirtableUserRepository
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.like_repository import MongoLikeRepository
from adapter.mongodb.project_repository import MongoProjectRepository
from adapter.mongodb.user_repository import MongoUserRepository
from api.config import RECORD_STORE_MONGODB, Settings, get_settings
from port.like_repository import LikeRepository
from port.project_repository import ProjectRepository
from port.user_repository import UserRepository
from services.like_service import KeyedLocks
from services.token_service import TokenService


@lru_cache(maxsize=1)
def _airtable_client(api_key: str, base_id: str, timeout: float) -> AirtableClient:
    return AirtableClient(api_key=api_key, base_id=base_id, timeout=timeout)


def _get_airtable(settings: Settings) -> AirtableClient:
    """Get the shared Airtable client, raising 503 if unconfigured."""
    if not settings.airtable_api_key or not settings.airtable_base_id:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return _airtable_client(
        settings.airtable_api_key, settings.airtable_base_id, settings.store_timeout_seconds,
    )


def _get_db(settings: Settings):
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client(settings.mongo_url, timeout_ms=int(settings.store_timeout_seconds * 1000))
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[settings.mongodb_database]


def get_user_repo(settings: Settings = Depends(get_settings)) -> UserRepository:
    if settings.record_store == RECORD_STORE_MONGODB:
        return MongoUserRepository(_get_db(settings))
    return AirtableUserRepository(_get_airtable(settings), settings.airtable_user_table)


def get_project_repo(settings: Settings = Depends(get_settings)) -> ProjectRepository:
    if settings.record_store == RECORD_STORE_MONGODB:
        return MongoProjectRepository(_get_db(settings))
    return AirtableProjectRepository(_get_airtable(settings), settings.airtable_project_table)


def get_like_repo(settings: Settings = Depends(get_settings)) -> LikeRepository:
    if settings.record_store == RECORD_STORE_MONGODB:
        return MongoLikeRepository(_get_db(settings))
    return AirtableLikeRepository(_get_airtable(settings), settings.airtable_like_table)


@lru_cache(maxsize=1)
def _token_service(secret_key: str) -> TokenService:
    return TokenService(secret_key)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return _token_service(settings.jwt_secret_key)


_like_locks = KeyedLocks()


def get_like_locks() -> KeyedLocks:
    return _like_locks
