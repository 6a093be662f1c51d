# ski_scheduler/adapters/outbound/security/token_blacklist.py

"""
In-memory blacklist of revoked session tokens.

A token lands here on logout and stays until its own expiry passes;
after that the token is rejected by verification anyway, so the entry
is dropped, either lazily when it is looked up or by a periodic sweep.

The map lives in this process only. A restart or a second server
instance does not see revocations made elsewhere.
"""

import asyncio
import logging
import threading
import time
from typing import Callable, Dict, Optional

from ski_scheduler.adapters.outbound.security.auth_user_manager import UserAuthManager
from ski_scheduler.application.ports.outbound import ITokenBlacklist

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 10 * 60  # seconds


class TokenBlacklist(ITokenBlacklist):
    """
    Tracks tokens that must be rejected even though their signature
    and expiry would still accept them.

    Args:
        sweep_interval: Seconds between two sweeps of expired entries
        clock: Returns the current time in epoch seconds
    """

    def __init__(self, sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
                 clock: Callable[[], float] = time.time):
        if sweep_interval <= 0:
            raise ValueError("sweep_interval must be positive")
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._tokens: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._sweep_task: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    @property
    def is_running(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    def add(self, token: str) -> None:
        """
        Revoke a token until its natural expiry.

        Raises:
            MalformedTokenError: The token's expiry cannot be decoded
        """
        expires_at = UserAuthManager.read_expiry(token)
        with self._lock:
            self._tokens[token] = expires_at

    def has(self, token: str) -> bool:
        """Return True while the token is revoked and not yet expired."""
        with self._lock:
            expires_at = self._tokens.get(token)
            if expires_at is None:
                return False

            if self._clock() > expires_at:
                del self._tokens[token]
                return False
            return True

    def cleanup(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [token for token, expires_at in self._tokens.items() if expires_at < now]
            for token in expired:
                del self._tokens[token]
        return len(expired)

    def start(self) -> None:
        """Schedule the periodic sweep on the running event loop."""
        if self.is_running:
            return
        self._sweep_task = asyncio.get_running_loop().create_task(self._periodic_sweep())
        logger.info(f"Token blacklist sweep started (every {self.sweep_interval}s)")

    async def stop(self) -> None:
        """Cancel the periodic sweep and wait until it has finished."""
        task, self._sweep_task = self._sweep_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Token blacklist sweep stopped")

    async def _periodic_sweep(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval)
            removed = self.cleanup()
            if removed:
                logger.info(f"Cleaned up {removed} expired tokens from blacklist")
