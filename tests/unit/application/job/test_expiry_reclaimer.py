"""Unit tests for the expiry reclaimer."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from pydantic import ValidationError as PydanticValidationError

from famlink.application.job.expiry_reclaimer import ExpiryReclaimer, next_run_after
from famlink.config import InvitationSettings
from famlink.domain.model.common import utc_now
from famlink.domain.value import ConnectionStatus
from famlink.persistence.repository.inmemory import InMemoryStore
from tests.conftest import add_connection, seed_family
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    """Application-scope container; the reclaimer opens its own request scopes."""
    container = build_test_container()
    yield container
    await container.close()


class TestNextRunAfter:
    """Tests for next_run_after."""

    def test_later_today(self):
        now = datetime(2025, 3, 10, 1, 30, tzinfo=timezone.utc)

        assert next_run_after(now, "0 2 * * *") == datetime(
            2025, 3, 10, 2, 0, tzinfo=timezone.utc
        )

    def test_already_passed_today(self):
        now = datetime(2025, 3, 10, 2, 0, 1, tzinfo=timezone.utc)

        assert next_run_after(now, "0 2 * * *") == datetime(
            2025, 3, 11, 2, 0, tzinfo=timezone.utc
        )

    def test_exactly_at_run_time_schedules_tomorrow(self):
        now = datetime(2025, 12, 31, 2, 0, tzinfo=timezone.utc)

        assert next_run_after(now, "0 2 * * *") == datetime(
            2026, 1, 1, 2, 0, tzinfo=timezone.utc
        )

    def test_custom_schedule(self):
        now = datetime(2025, 3, 10, 7, 10, tzinfo=timezone.utc)

        assert next_run_after(now, "*/30 * * * *") == datetime(
            2025, 3, 10, 7, 30, tzinfo=timezone.utc
        )

    def test_default_schedule_is_daily_at_two(self):
        assert InvitationSettings().sweep_cron == "0 2 * * *"

    def test_invalid_schedule_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            InvitationSettings(sweep_cron="every night")


class TestRunOnce:
    """Tests for run_once."""

    @pytest.mark.asyncio
    async def test_run_once_expires_overdue_and_is_idempotent(self, container):
        """A second run right after the first expires nothing."""
        # Arrange
        store = await container.get(InMemoryStore)
        family = seed_family(store)
        overdue = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            invited_at=utc_now() - timedelta(days=6),
        )
        reclaimer = ExpiryReclaimer(container, InvitationSettings())

        # Act
        first = await reclaimer.run_once()
        second = await reclaimer.run_once()

        # Assert
        assert first == 1
        assert second == 0
        assert store.connections[overdue.id].status == ConnectionStatus.EXPIRED


class TestLifecycle:
    """Tests for start and stop."""

    @pytest.mark.asyncio
    async def test_start_sweeps_immediately_and_stops(self, container):
        """Invitations that lapsed while the process was down expire on start."""
        # Arrange
        store = await container.get(InMemoryStore)
        family = seed_family(store)
        overdue = add_connection(
            store,
            family.person,
            family.invitee.id,
            family.inviter.id,
            invited_at=utc_now() - timedelta(days=6),
        )
        reclaimer = ExpiryReclaimer(container, InvitationSettings())

        # Act
        reclaimer.start()
        assert reclaimer.running
        for _ in range(50):
            if store.connections[overdue.id].status == ConnectionStatus.EXPIRED:
                break
            await asyncio.sleep(0.01)
        await reclaimer.stop()

        # Assert
        assert store.connections[overdue.id].status == ConnectionStatus.EXPIRED
        assert not reclaimer.running

    @pytest.mark.asyncio
    async def test_failed_sweep_keeps_job_alive(self, container, monkeypatch):
        """A failing run is logged; the job keeps waiting for the next one."""
        # Arrange
        reclaimer = ExpiryReclaimer(container, InvitationSettings())
        calls = []

        async def failing_run():
            calls.append(1)
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(reclaimer, "run_once", failing_run)

        # Act
        reclaimer.start()
        await asyncio.sleep(0.05)

        # Assert
        assert calls == [1]
        assert reclaimer.running
        await reclaimer.stop()
        assert not reclaimer.running

    @pytest.mark.asyncio
    async def test_stop_cancels_a_hung_sweep(self, container, monkeypatch):
        """A sweep that outlives the stop timeout is cancelled and awaited."""
        # Arrange
        reclaimer = ExpiryReclaimer(container, InvitationSettings(), stop_timeout=0.05)
        started = asyncio.Event()

        async def hanging_run():
            started.set()
            await asyncio.Event().wait()

        monkeypatch.setattr(reclaimer, "run_once", hanging_run)
        reclaimer.start()
        await asyncio.wait_for(started.wait(), timeout=1)
        task = reclaimer._task

        # Act
        await reclaimer.stop()

        # Assert
        assert task is not None
        assert task.done()
        assert task.cancelled()
        assert not reclaimer.running
