"""Service for managing per-quiz IP allow and deny lists."""

from __future__ import annotations

from quizhall.core.errors import AccessDeniedError, AccessRestrictedError
from quizhall.core.models import AccessLists


class AccessControlList:
    """Whitelist/blacklist pair where an address lives in at most one list."""

    def __init__(self) -> None:
        self._whitelist: set[str] = set()
        self._blacklist: set[str] = set()

    def allow(self, ip: str) -> None:
        """Whitelist an address, removing it from the blacklist."""
        cleaned = (ip or "").strip()
        if not cleaned:
            return
        self._blacklist.discard(cleaned)
        self._whitelist.add(cleaned)

    def deny(self, ip: str) -> None:
        """Blacklist an address, removing it from the whitelist."""
        cleaned = (ip or "").strip()
        if not cleaned:
            return
        self._whitelist.discard(cleaned)
        self._blacklist.add(cleaned)

    def check(self, ip: str) -> None:
        """Raise if ``ip`` may not join. The blacklist is consulted first."""
        cleaned = (ip or "").strip()
        if cleaned in self._blacklist:
            raise AccessDeniedError("Your device is not permitted to join this quiz.")
        if self._whitelist and cleaned not in self._whitelist:
            raise AccessRestrictedError("This quiz is restricted to approved participants.")

    def snapshot(self) -> AccessLists:
        return AccessLists(whitelist=sorted(self._whitelist), blacklist=sorted(self._blacklist))
