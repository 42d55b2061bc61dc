"""Image gallery endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status

from pousada_api.api.schemas import ImageOut
from pousada_api.api.security import require_admin

if TYPE_CHECKING:
    from pousada_api.containers import AppContainer

router = APIRouter(prefix="/images", tags=["images"])


@router.get("")
async def list_images(request: Request) -> list[ImageOut]:
    """Return the image catalog."""
    container: AppContainer = request.app.state.container
    assets = await container.image_service.list_images()
    return [ImageOut.from_domain(asset) for asset in assets]


@router.get("/{image_id}")
async def get_image(image_id: str, request: Request) -> Response:
    """Return the raw image bytes with their content type."""
    container: AppContainer = request.app.state.container
    image = await container.image_service.get_image(image_id)
    return Response(content=image.content, media_type=image.content_type)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def upload_image(request: Request, file: UploadFile = File(...)) -> ImageOut:
    """Upload an image to the gallery."""
    container: AppContainer = request.app.state.container
    content = await file.read()
    asset = await container.image_service.upload_image(
        content, file.filename or "image", file.content_type
    )
    return ImageOut.from_domain(asset)


@router.delete(
    "/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_image(image_id: str, request: Request) -> Response:
    """Remove an image from the gallery."""
    container: AppContainer = request.app.state.container
    await container.image_service.delete_image(image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
