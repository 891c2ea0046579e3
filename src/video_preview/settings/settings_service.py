"""Load and update the plugin configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from ..db.db_init import PLUGIN_CONFIGURATION_KEY
from ..exceptions import ConfigLoadError
from .settings_models import PluginConfiguration
from .settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConfigurationProvider:
    """Read the plugin configuration fresh from the settings table.

    Nothing is cached: every call to :meth:`load` returns a new snapshot, so
    concurrent operations may observe different snapshots while an update is
    in flight.
    """

    repo: SettingsRepository
    log: logging.Logger = field(default_factory=lambda: logger)

    def load(self) -> PluginConfiguration:
        """Return the current snapshot, or the zero configuration on failure."""
        try:
            return self._read()
        except ConfigLoadError as exc:
            self.log.error("settings.video.load_failed", extra={"error": str(exc)})
            return PluginConfiguration()

    def update(self, payload: dict[str, Any], actor: str | None = None) -> PluginConfiguration:
        """Merge ``payload`` (host JSON keys) into the stored configuration."""
        current = self.load().to_host_json()
        current.update(payload)
        snapshot = PluginConfiguration.model_validate(current)
        self.repo.upsert(
            PLUGIN_CONFIGURATION_KEY,
            json.dumps(snapshot.to_host_json()),
            updated_by=actor,
        )
        self.log.info(
            "settings.video.updated",
            extra={"actor": actor, "configuration": snapshot.to_host_json()},
        )
        return snapshot

    def _read(self) -> PluginConfiguration:
        try:
            raw = self.repo.read(PLUGIN_CONFIGURATION_KEY)
        except SQLAlchemyError as exc:
            raise ConfigLoadError(f"settings table unavailable: {exc}") from exc
        if raw is None:
            raise ConfigLoadError("plugin configuration is not set")
        try:
            return PluginConfiguration.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"invalid plugin configuration: {exc}") from exc
