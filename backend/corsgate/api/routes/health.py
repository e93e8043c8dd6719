from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from corsgate.core.database import get_db

router = APIRouter(tags=["health"])


@router.get("/health/live")
def liveness():
    return {"status": "alive", "timestamp": datetime.now(UTC).isoformat()}


@router.get("/health/ready")
def readiness(db: Session = Depends(get_db)):
    services: dict[str, str] = {}
    try:
        db.scalar(text("SELECT 1"))
        services["database"] = "ready"
    except SQLAlchemyError as e:
        logger.error(f"Readiness DB failure: {e}")
        services["database"] = "not_ready"
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "timestamp": datetime.now(UTC).isoformat(), "services": services},
        )
    return {"status": "ready", "timestamp": datetime.now(UTC).isoformat(), "services": services}
