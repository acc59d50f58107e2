import os
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse
from app.core.config import settings
from app.api.dependencies import get_user_store
from app.models.user import UserCreate
from app.services.user_service import user_service
from app.storage.csv_store import CsvStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
def create_user(payload: UserCreate, store: CsvStore = Depends(get_user_store)):
    """Create a new user and append it to the CSV file"""
    logger.info(f"Received POST /api/users: {payload.model_dump(by_alias=True, exclude_none=True)}")
    try:
        user_service.create_user(store, payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error in /api/users")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error: {str(e)}"
        )

    return {"message": "User created successfully and appended to CSV"}


@router.get("/download")
def download_users(store: CsvStore = Depends(get_user_store)):
    """Download the CSV file"""
    logger.info("Received GET /api/users/download")
    if not store.exists():
        logger.error(f"CSV file not found: {store.file_path}")
        raise HTTPException(status_code=404, detail="No user data available")

    # FileResponse opens the file only after headers are sent, so check it first
    if not store.file_path.is_file() or not os.access(store.file_path, os.R_OK):
        logger.error(f"Error downloading file: {store.file_path} is not readable")
        raise HTTPException(status_code=500, detail="Error downloading file")

    return FileResponse(
        store.file_path,
        media_type="text/csv",
        filename=settings.DOWNLOAD_FILENAME,
    )
