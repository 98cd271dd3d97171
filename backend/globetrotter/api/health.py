from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from globetrotter.config import get_settings
from globetrotter.database import get_db

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    if get_settings().store_backend == "local":
        return {"status": "ok", "database": "local"}

    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "ok" if db_status == "healthy" else "degraded",
        "database": db_status
    }
