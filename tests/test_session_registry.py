"""Tests for the booking session registry."""

from unittest.mock import MagicMock

import pytest

from clinic.core.exceptions import SessionNotFoundError
from web.state import BookingSessionRegistry


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return BookingSessionRegistry(ttl_seconds=60, clock=clock)


class TestBookingSessionRegistry:
    """Test session lifecycle and idle expiry."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, registry):
        wizard = MagicMock()
        session = await registry.create(wizard)

        assert len(session.session_id) == 32
        assert (await registry.get(session.session_id)).wizard is wizard
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_unknown_session(self, registry):
        with pytest.raises(SessionNotFoundError):
            await registry.get("missing")

    @pytest.mark.asyncio
    async def test_access_extends_lifetime(self, registry, clock):
        session = await registry.create(MagicMock())
        clock.now += 50
        await registry.get(session.session_id)
        clock.now += 50
        assert (await registry.get(session.session_id)).last_seen == clock.now

    @pytest.mark.asyncio
    async def test_idle_session_expires(self, registry, clock):
        session = await registry.create(MagicMock())
        clock.now += 61
        with pytest.raises(SessionNotFoundError):
            await registry.get(session.session_id)
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_remove(self, registry):
        session = await registry.create(MagicMock())
        assert await registry.remove(session.session_id) is True
        assert await registry.remove(session.session_id) is False

    @pytest.mark.asyncio
    async def test_purge_expired(self, registry, clock):
        old = await registry.create(MagicMock())
        clock.now += 45
        fresh = await registry.create(MagicMock())
        clock.now += 30

        assert await registry.purge_expired() == 1
        with pytest.raises(SessionNotFoundError):
            await registry.get(old.session_id)
        assert (await registry.get(fresh.session_id)).session_id == fresh.session_id
