"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from installment_portal.config import settings
from installment_portal.infrastructure.clients.store import RestStoreClient
from installment_portal.infrastructure.database.repositories import SqlStore
from installment_portal.infrastructure.database.session import SessionLocal


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store():
    """Provide the backing store: direct database if configured, else the hosted REST API"""
    if settings.database_url:
        db = SessionLocal()
        try:
            yield SqlStore(db)
        finally:
            db.close()
    else:
        yield RestStoreClient()
