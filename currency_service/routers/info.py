from fastapi import APIRouter, Depends, Request

from currency_service.models.exchange import VersionInfo
from currency_service.services.version import VersionProvider

router = APIRouter(prefix="/api", tags=["info"])


def get_version_provider(request: Request) -> VersionProvider:
    return request.app.state.version_provider


@router.get("/info", response_model=VersionInfo, summary="Running application version")
async def info(provider: VersionProvider = Depends(get_version_provider)) -> VersionInfo:
    return VersionInfo(version=provider.get_version())
