"""Image upload endpoint"""

from fastapi import APIRouter, File, UploadFile, status

from ..services.images import ImageStorage

router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
def upload_image(file: UploadFile = File(...)):
    """
    Upload an image (jpg, jpeg, png or gif)

    Returns the URL the stored file is served from.
    """

    stored = ImageStorage().save(file)
    return {"message": "File uploaded successfully", **stored}
