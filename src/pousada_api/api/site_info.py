"""Site description and options endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from pousada_api.api.schemas import SiteConfigModel
from pousada_api.api.security import require_admin

if TYPE_CHECKING:
    from pousada_api.containers import AppContainer

router = APIRouter(prefix="/pousada-info", tags=["site"])


@router.get("")
async def get_site_info(request: Request) -> SiteConfigModel:
    """Return the site configuration."""
    container: AppContainer = request.app.state.container
    config = await container.site_config_service.get_config()
    return SiteConfigModel.from_domain(config)


@router.put("", dependencies=[Depends(require_admin)])
async def update_site_info(
    payload: SiteConfigModel, request: Request
) -> SiteConfigModel:
    """Replace the site configuration."""
    container: AppContainer = request.app.state.container
    config = await container.site_config_service.update_config(payload.to_domain())
    return SiteConfigModel.from_domain(config)
