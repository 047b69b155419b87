"""Upload Routes — image upload consumed by the post composer.

Invariants:
    - Multipart field name is "image"; no file → 400
    - Oversized files → 413 and nothing kept on disk
    - Success body is the JSON string "Uploaded"
"""

from fastapi import APIRouter, Depends, File, UploadFile

from postfeed.api.dependencies import get_image_storage
from postfeed.core.errors import UploadMissingError
from postfeed.infrastructure.image_storage import LocalImageStorage

router = APIRouter(prefix="/posts", tags=["uploads"])


@router.post("/imageboi")
async def upload_image(
    image: UploadFile | None = File(None),
    storage: LocalImageStorage = Depends(get_image_storage),
):
    """Store an image in the public images directory."""
    if image is None or not image.filename:
        raise UploadMissingError("image")
    try:
        await storage.save(image)
    finally:
        await image.close()
    return "Uploaded"
