"""
Upload image → data URI base64 (pas de stockage fichier).
POST /api/upload  (Bearer admin, multipart, champ `image`, un fichier par appel)
Re-valide type + taille côté serveur : le contrôle client n'est pas une garantie.
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse

from ...auth import require_admin
from ...images import size_kb, to_data_uri, validation_error
from ...models import UploadResult

log = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


@router.post("/api/upload")
async def upload_image(request: Request, image: Optional[UploadFile] = File(None)):
    require_admin(request)

    if image is None or not image.filename:
        return JSONResponse({"error": "No image file provided"}, status_code=400)

    try:
        data = await image.read()
        err = validation_error(image.content_type, len(data))
        if err:
            return JSONResponse({"error": err}, status_code=400)

        result = UploadResult(
            image_url=to_data_uri(image.content_type, data),
            file_name=image.filename,
            file_size=len(data),
        )
    except Exception:
        log.exception("Upload failed")
        return JSONResponse({"error": "Failed to upload image"}, status_code=500)

    log.info("Image uploaded successfully: %s (%s, %s)", image.filename, image.content_type, size_kb(len(data)))
    return result.model_dump(by_alias=True)
