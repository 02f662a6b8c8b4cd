"""
Play-count strategies.

Recording a play is best-effort: the preferred path is the backend's atomic
increment function, and the fallback reads the current value and writes it
back plus one. The fallback can lose updates when two plays of the same track
overlap (both read N, both write N + 1). That is accepted; it only runs when the
atomic function is missing or failing.
"""

import threading
from typing import Optional, Protocol

from ..core.exceptions import CatalogError
from ..core.logger import get_logger

logger = get_logger("services.play_counter")


class PlayCountStore(Protocol):
    """The part of the catalog client the counters depend on."""

    play_count_rpc: str

    def increment_play_count(self, track_id: str) -> None: ...

    def get_play_count(self, track_id: str) -> int: ...

    def set_play_count(self, track_id: str, play_count: int) -> None: ...

    def has_rpc(self, name: str) -> bool: ...


class PlayCounter:
    """Base class for play-count strategies."""

    def __init__(self, store: PlayCountStore):
        self.store = store

    def increment(self, track_id: str) -> None:
        """Add one play. May raise CatalogError."""
        raise NotImplementedError

    def record_play(self, track_id: str) -> bool:
        """
        Add one play, never raising.

        Returns:
            True if the play was stored, False if every path failed
        """
        try:
            self.increment(track_id)
            return True
        except Exception as e:
            logger.warning(f"Play count for {track_id} could not be updated: {e}")
            return False


class AtomicPlayCounter(PlayCounter):
    """Single call to the backend's increment function."""

    def increment(self, track_id: str) -> None:
        self.store.increment_play_count(track_id)


class ReadWritePlayCounter(PlayCounter):
    """Read the stored count, then write it back plus one. Not safe under concurrent plays."""

    def increment(self, track_id: str) -> None:
        current = self.store.get_play_count(track_id)
        self.store.set_play_count(track_id, current + 1)


class FallbackPlayCounter(PlayCounter):
    """Try the atomic path first and fall back to read-then-write when it fails for any reason."""

    def __init__(self, store: PlayCountStore):
        super().__init__(store)
        self.primary = AtomicPlayCounter(store)
        self.fallback = ReadWritePlayCounter(store)

    def increment(self, track_id: str) -> None:
        try:
            self.primary.increment(track_id)
        except Exception as e:
            logger.debug(f"Atomic play count failed for {track_id}, falling back: {e}")
            self.fallback.increment(track_id)


def select_play_counter(store: PlayCountStore, probe: bool = True) -> PlayCounter:
    """
    Pick a counter strategy by checking once whether the increment function exists.

    Args:
        store: Catalog client
        probe: Ask the backend; when False the fallback chain is used unconditionally

    Returns:
        ReadWritePlayCounter if the backend reports no increment function,
        FallbackPlayCounter otherwise (including when the probe itself fails)
    """
    if not probe:
        return FallbackPlayCounter(store)

    available: Optional[bool]
    try:
        available = store.has_rpc(store.play_count_rpc)
    except CatalogError as e:
        logger.debug(f"Could not probe for {store.play_count_rpc}: {e}")
        available = None

    if available is False:
        logger.info(f"Backend has no {store.play_count_rpc}; using read-then-write play counts")
        return ReadWritePlayCounter(store)
    return FallbackPlayCounter(store)


class DeferredPlayCounter(PlayCounter):
    """
    Runs the strategy probe on the first recorded play instead of up front.

    Plays are recorded on the session's dispatcher, so the probe's HTTP call
    happens there too and never delays the start of playback.
    """

    def __init__(self, store: PlayCountStore, probe: bool = True):
        super().__init__(store)
        self.probe = probe
        self._strategy: Optional[PlayCounter] = None
        self._lock = threading.Lock()

    @property
    def strategy(self) -> PlayCounter:
        with self._lock:
            if self._strategy is None:
                self._strategy = select_play_counter(self.store, self.probe)
            return self._strategy

    def increment(self, track_id: str) -> None:
        self.strategy.increment(track_id)
