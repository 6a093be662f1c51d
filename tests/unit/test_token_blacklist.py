"""Unit tests for the in-memory token blacklist."""

import asyncio

import pytest
from jose import jwt

from ski_scheduler.adapters.outbound.security.token_blacklist import TokenBlacklist
from ski_scheduler.domain.exceptions import MalformedTokenError


class FakeClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_token(exp: float, subject: str = "alice") -> str:
    return jwt.encode({"sub": subject, "exp": exp}, "blacklist-test-key", algorithm="HS256")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def blacklist(clock: FakeClock) -> TokenBlacklist:
    return TokenBlacklist(sweep_interval=600, clock=clock)


class TestAddAndHas:
    """Tests for revoking and looking up tokens."""

    def test_unknown_token(self, blacklist: TokenBlacklist) -> None:
        """Test that a token never added is not revoked."""
        assert not blacklist.has(make_token(2_000))

    def test_added_token_is_revoked(self, blacklist: TokenBlacklist) -> None:
        """Test that a token is revoked right after it is added."""
        token = make_token(2_000)

        blacklist.add(token)

        assert blacklist.has(token)
        assert len(blacklist) == 1

    def test_adding_twice_keeps_one_entry(self, blacklist: TokenBlacklist) -> None:
        """Test that revoking the same token again is harmless."""
        token = make_token(2_000)

        blacklist.add(token)
        blacklist.add(token)

        assert blacklist.has(token)
        assert len(blacklist) == 1

    def test_other_tokens_unaffected(self, blacklist: TokenBlacklist) -> None:
        """Test that revocation is per token."""
        blacklist.add(make_token(2_000, "alice"))

        assert not blacklist.has(make_token(2_000, "bob"))

    def test_revoked_until_expiry(self, blacklist: TokenBlacklist, clock: FakeClock) -> None:
        """Test that a token stays revoked up to and including its expiry second."""
        token = make_token(2_000)
        blacklist.add(token)

        clock.now = 2_000

        assert blacklist.has(token)

    def test_lookup_after_expiry_prunes(self, blacklist: TokenBlacklist, clock: FakeClock) -> None:
        """Test that an expired entry is dropped when it is looked up."""
        token = make_token(2_000)
        blacklist.add(token)

        clock.now = 2_001

        assert not blacklist.has(token)
        assert len(blacklist) == 0

    def test_malformed_token_rejected(self, blacklist: TokenBlacklist) -> None:
        """Test that a token without readable expiry is not stored."""
        with pytest.raises(MalformedTokenError):
            blacklist.add("garbage")

        assert len(blacklist) == 0


class TestCleanup:
    """Tests for the sweep of expired entries."""

    def test_removes_only_expired(self, blacklist: TokenBlacklist, clock: FakeClock) -> None:
        """Test that cleanup drops expired entries and keeps live ones."""
        old = make_token(1_500, "old")
        live = make_token(5_000, "live")
        blacklist.add(old)
        blacklist.add(live)

        clock.now = 2_000
        removed = blacklist.cleanup()

        assert removed == 1
        assert len(blacklist) == 1
        assert blacklist.has(live)

    def test_nothing_to_remove(self, blacklist: TokenBlacklist) -> None:
        """Test that cleanup on live entries removes nothing."""
        blacklist.add(make_token(2_000))

        assert blacklist.cleanup() == 0
        assert len(blacklist) == 1


class TestPeriodicSweep:
    """Tests for the background sweep task."""

    def test_rejects_non_positive_interval(self) -> None:
        """Test that the sweep interval must be positive."""
        with pytest.raises(ValueError):
            TokenBlacklist(sweep_interval=0)

    async def test_sweep_removes_expired_entries(self, clock: FakeClock) -> None:
        """Test that entries disappear once an interval passes after their expiry."""
        blacklist = TokenBlacklist(sweep_interval=0.01, clock=clock)
        blacklist.add(make_token(1_500, "a"))
        blacklist.add(make_token(1_600, "b"))
        clock.now = 2_000

        blacklist.start()
        try:
            await asyncio.sleep(0.1)
            assert len(blacklist) == 0
        finally:
            await blacklist.stop()

    async def test_start_is_idempotent(self) -> None:
        """Test that starting twice keeps a single sweep task."""
        blacklist = TokenBlacklist(sweep_interval=60)

        blacklist.start()
        task = blacklist._sweep_task
        blacklist.start()

        try:
            assert blacklist._sweep_task is task
            assert blacklist.is_running
        finally:
            await blacklist.stop()

    async def test_stop_halts_sweep(self, clock: FakeClock) -> None:
        """Test that nothing is swept after stop."""
        blacklist = TokenBlacklist(sweep_interval=0.01, clock=clock)
        blacklist.start()
        await blacklist.stop()

        blacklist.add(make_token(1_500))
        clock.now = 2_000
        await asyncio.sleep(0.05)

        assert not blacklist.is_running
        assert len(blacklist) == 1

    async def test_stop_without_start(self) -> None:
        """Test that stopping a blacklist that never started is harmless."""
        blacklist = TokenBlacklist()

        await blacklist.stop()

        assert not blacklist.is_running
