"""Tests for create_alert_engine — wiring from settings and state reload."""

from __future__ import annotations

from pathlib import Path

from src.alerts.factory import create_alert_engine
from src.core.config import NotificationsConfig, PolicyConfig, Settings, StorageConfig
from src.core.types import AlertType, Role, User
from src.monitor.dispatcher import NotificationDispatcher
from src.storage.memory import InMemoryKeyValueStore

ANA = User(id="u1", name="Ana", role=Role.USER)
CARA = User(id="a1", name="Cara", role=Role.ADMIN)


class TestCreateAlertEngine:
    async def test_default_notifier(self) -> None:
        engine = await create_alert_engine(Settings(), kv=InMemoryKeyValueStore())
        assert isinstance(engine._sink, NotificationDispatcher)

    async def test_reloads_file_state(self, tmp_path: Path) -> None:
        settings = Settings(
            storage=StorageConfig(backend="file", path=str(tmp_path / "alerts.json")),
            notifications=NotificationsConfig(log_only=True),
        )
        first = await create_alert_engine(settings)
        await first.initiate("lockdown", ANA)
        await first.change_type("evacuate", ANA)

        second = await create_alert_engine(settings)
        current = second.current_alert()
        assert current is not None
        assert current.type == AlertType.EVACUATE
        assert second.history() == first.history()

    async def test_policy_applied(self) -> None:
        settings = Settings(policy=PolicyConfig(allow_initiator_resolve=True))
        engine = await create_alert_engine(settings, kv=InMemoryKeyValueStore())
        await engine.initiate("hold", ANA)
        assert engine.can_resolve(ANA) is True

    async def test_memory_backend_starts_idle(self) -> None:
        settings = Settings(storage=StorageConfig(backend="memory"))
        engine = await create_alert_engine(settings)
        assert engine.current_alert() is None
        assert engine.history() == ()
        await engine.resolve(CARA)
        assert engine.history() == ()
