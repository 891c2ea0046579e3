"""Admin API routes for the plugin configuration."""

from fastapi import APIRouter, Depends, Request

from .settings_schemas import VideoSettingsModel, VideoSettingsUpdateRequest
from .settings_service import ConfigurationProvider

router = APIRouter(prefix="/api/settings", tags=["settings"])


def get_configuration_provider(request: Request) -> ConfigurationProvider:
    try:
        return request.app.state.configuration_provider  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ConfigurationProvider is not configured") from exc


@router.get("/video", response_model=VideoSettingsModel)
def read_video_settings(
    provider: ConfigurationProvider = Depends(get_configuration_provider),
) -> VideoSettingsModel:
    return VideoSettingsModel(**provider.load().to_host_json())


@router.put("/video", response_model=VideoSettingsModel)
def update_video_settings(
    payload: VideoSettingsUpdateRequest,
    provider: ConfigurationProvider = Depends(get_configuration_provider),
) -> VideoSettingsModel:
    snapshot = provider.update(payload.model_dump(exclude_none=True), actor="admin-ui")
    return VideoSettingsModel(**snapshot.to_host_json())
