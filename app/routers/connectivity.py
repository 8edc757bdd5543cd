import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from ..db import get_db, masked_database_url
from .. import models, schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/test", tags=["test"])

TEST_ENTRY_NAME = "Test Entry"


def _error_details(exc: Exception) -> str:
    return str(exc) or "Unknown error"


@router.get(
    "",
    response_model=schemas.ConnectionTestOk,
    responses={500: {"model": schemas.ConnectionTestFailed}},
)
def check_database(db: Session = Depends(get_db)):
    """Round-trip a query and insert one row into ``example``.

    Every successful call leaves a new row behind.
    """
    logger.info("Testing database connection...")
    # never log the raw URL, it carries the password
    logger.info("DATABASE_URL: %s", masked_database_url())
    try:
        result = db.execute(text("SELECT 1+1 AS result")).scalar()
        logger.debug("Basic query result: %s", result)

        entry = models.Example(name=TEST_ENTRY_NAME)
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database connection error details: %s", e)
        return JSONResponse(
            status_code=500,
            content=schemas.ConnectionTestFailed(
                error="Failed to connect to database",
                details=_error_details(e),
            ).model_dump(),
        )
    return schemas.ConnectionTestOk(
        message="Database is connected!",
        data=schemas.ExampleOut(id=entry.id, name=entry.name, createdAt=entry.created_at),
    )
