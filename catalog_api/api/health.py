from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from catalog_api.storage import StorageAdapter, get_storage

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the database answers."
)
def readiness_check(storage: StorageAdapter = Depends(get_storage)):
    """Readiness check for the database connection."""
    checks = {"database": False}

    try:
        storage.ping()
        checks["database"] = True
    except SQLAlchemyError as e:
        checks["database_error"] = str(e)

    return {
        "status": "ready" if checks["database"] else "not_ready",
        "checks": checks
    }
