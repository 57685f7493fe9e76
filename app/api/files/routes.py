import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from app.core.context import AppContext, get_context

logger = logging.getLogger(__name__)

router = APIRouter()


def _download(context: AppContext, filename: str) -> FileResponse:
    path = context.files.path_for(filename)
    if path is None:
        logger.info("File not found: %s", filename)
        raise HTTPException(status_code=404, detail="File not found")

    logger.info("File found, downloading: %s", path)
    return FileResponse(path, filename=filename)


@router.get("/projects/{project_id}/files/{filename}")
def download_project_file(
    project_id: str,
    filename: str,
    context: AppContext = Depends(get_context)
):
    # project_id is not checked against the file, any stored name is served
    return _download(context, filename)


@router.get("/api/download/{filename}")
def download_file(filename: str, context: AppContext = Depends(get_context)):
    return _download(context, filename)
