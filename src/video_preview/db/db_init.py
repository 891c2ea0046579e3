"""Database initialization helpers."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db_models import Base, SettingModel

PLUGIN_CONFIGURATION_KEY = "video_plugin_configuration"


def init_db(
    engine: Engine,
    session_factory: sessionmaker[Session],
    *,
    plugin_defaults: dict[str, Any] | None = None,
) -> None:
    """Create tables and seed the plugin configuration if it is missing."""
    Base.metadata.create_all(engine)

    if plugin_defaults is None:
        return
    with session_factory() as session:
        _seed_plugin_configuration(session, plugin_defaults)
        session.commit()


def _seed_plugin_configuration(session: Session, defaults: dict[str, Any]) -> None:
    if session.get(SettingModel, PLUGIN_CONFIGURATION_KEY) is not None:
        return
    session.add(
        SettingModel(
            key=PLUGIN_CONFIGURATION_KEY,
            value=json.dumps(defaults),
            updated_at=datetime.utcnow(),
            updated_by="bootstrap",
        )
    )
