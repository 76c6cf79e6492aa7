"""
SiteCMS Backend: Upload Routes
===============================

What:  POST /api/upload     store one file (multipart field `image`)
       GET  /api/uploads    list stored filenames (diagnostics)
       GET  /uploads/{name} serve a stored file byte-for-byte

Request Flow (POST /api/upload):
    1. Client sends multipart/form-data with an `image` field
    2. FastAPI extracts the UploadFile (absent field → None)
    3. FileService writes the bytes under a generated name
    4. Response: {"success": true, "imageUrl": "/uploads/<name>"}

The returned URL is what the admin panel stores in `services.file_url`
or `team.image`. Served files carry no access control and never expire.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import FileResponse

from sitecms.exceptions import UploadError
from sitecms.schemas.common import ErrorResponse, UploadListResponse, UploadResponse
from sitecms.services.file_service import UPLOAD_URL_PREFIX, FileService, get_file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Uploads"])

# Mounted without the /api prefix: stored URLs look like /uploads/<name>
files_router = APIRouter(prefix=UPLOAD_URL_PREFIX, tags=["Uploads"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"description": "No file uploaded", "model": ErrorResponse},
        500: {"description": "File could not be written", "model": ErrorResponse},
    },
    summary="Upload an image or document",
)
async def upload_file(
    image: Optional[UploadFile] = File(
        default=None,
        description="The file to store (any type, stored unchanged)",
    ),
    file_service: FileService = Depends(get_file_service),
) -> UploadResponse:
    logger.info("Received upload request")
    if image is None:
        logger.warning("No file in request")
        raise UploadError.no_file()

    try:
        content = await image.read()
        stored_name = await file_service.store(image.filename, content)
    finally:
        await image.close()

    return UploadResponse(success=True, imageUrl=file_service.url_for(stored_name))


@router.get(
    "/uploads",
    response_model=UploadListResponse,
    responses={500: {"description": "Unable to scan directory", "model": ErrorResponse}},
    summary="List uploaded files",
)
async def list_uploads(
    file_service: FileService = Depends(get_file_service),
) -> UploadListResponse:
    return UploadListResponse(success=True, files=await file_service.list_files())


@files_router.get(
    "/{filename:path}",
    responses={
        200: {"description": "The stored file"},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded file",
)
async def serve_upload(
    filename: str,
    file_service: FileService = Depends(get_file_service),
) -> FileResponse:
    # Media type is guessed from the stored name's extension
    return FileResponse(path=str(file_service.resolve(filename)))
