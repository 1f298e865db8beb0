from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from mandala_cms.dependencies import get_media
from mandala_cms.media import MediaStorage, MediaUpload

router = APIRouter()


@router.post("/media", status_code=status.HTTP_201_CREATED)
async def upload_media(
    path: str = Query(..., min_length=1, description="Logical folder, e.g. 'gallery' or 'news/thumbnails'"),
    file_content: UploadFile = File(..., description="Image or video to upload"),
    media: MediaStorage = Depends(get_media),
):
    """
    Upload an image or video and return the URL to store on a document.

    Images are limited to 5MB and videos to 50MB.

    Returns:
        dict: The public URL of the stored file
    """
    upload = MediaUpload(
        filename=file_content.filename or "upload",
        content_type=file_content.content_type or "",
        content=await file_content.read(),
    )
    url = await media.upload_media(upload, path)
    return {"url": url}


@router.delete("/media")
async def delete_media(
    url: str = Query(..., description="URL previously returned by the upload route"),
    media: MediaStorage = Depends(get_media),
):
    """Delete a media file. Deleting a file that is already gone succeeds."""
    deleted = await media.delete_file(url)
    return {"url": url, "deleted": deleted}
