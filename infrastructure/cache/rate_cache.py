import asyncio
import logging
import time
from collections.abc import Callable

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import FetchError, ParseError, RatesUnavailableError
from domain.models.rates import CacheStatus, RateLookup, RateSnapshot
from infrastructure.parsers.snapshot_parser import SnapshotParser
from infrastructure.providers.base import RateProvider

logger = logging.getLogger(__name__)


class RateCache:
    """Holds the current rate snapshot and refreshes it when it goes stale.

    Refreshes are coalesced behind a single lock: callers that find a refresh
    in flight either wait for its outcome or, with
    `serve_stale_while_refreshing`, take the snapshot that existed before it
    started. A failed refresh falls back to the last good snapshot (flagged as
    degraded) and suppresses new attempts for `failure_cooldown` seconds.
    Only when no snapshot was ever obtained does a failure reach the caller,
    as `RatesUnavailableError`.
    """

    def __init__(
        self,
        provider: RateProvider,
        parser: SnapshotParser,
        credential: str,
        staleness: float = 3600,
        fetch_timeout: float = 10,
        failure_cooldown: float = 60,
        serve_stale_while_refreshing: bool = False,
        retry_attempts: int = 1,
        retry_backoff: float = 1,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self.parser = parser
        self.staleness = staleness
        self.fetch_timeout = fetch_timeout
        self.failure_cooldown = failure_cooldown
        self.serve_stale_while_refreshing = serve_stale_while_refreshing
        self.retry_attempts = retry_attempts
        self.retry_backoff = retry_backoff
        self._credential = credential
        self._clock = clock

        self._lock = asyncio.Lock()
        self._snapshot: RateSnapshot | None = None
        self._attempts = 0
        self._refresh_count = 0
        self._failure_count = 0
        self._last_error: str | None = None
        self._last_exception: Exception | None = None
        self._last_failure_at: float | None = None

    def peek(self) -> RateSnapshot | None:
        return self._snapshot

    def is_stale(self, snapshot: RateSnapshot, now: float | None = None) -> bool:
        now = self._clock() if now is None else now
        return snapshot.age(now) > self.staleness

    async def get_current(self) -> RateLookup:
        now = self._clock()
        snapshot = self._snapshot

        if snapshot is not None and not self.is_stale(snapshot, now):
            return RateLookup(snapshot=snapshot)

        if self._in_cooldown(now):
            return self._fallback()

        if snapshot is not None and self.serve_stale_while_refreshing and self._lock.locked():
            logger.debug("Refresh in progress, serving previous snapshot")
            return RateLookup(snapshot=snapshot)

        attempt = self._attempts
        async with self._lock:
            if self._attempts != attempt:
                # A refresh finished while we were waiting; share its outcome
                return self._latest_outcome()

            snapshot = self._snapshot
            if snapshot is not None and not self.is_stale(snapshot):
                return RateLookup(snapshot=snapshot)

            if snapshot is None:
                logger.info("No rates cached yet, fetching")
            else:
                logger.info(
                    f"Rates are {snapshot.age(self._clock()):.0f}s old "
                    f"(limit {self.staleness:.0f}s), refreshing"
                )

            try:
                fresh = await self._refresh_locked()
            except Exception:
                return self._fallback()
            return RateLookup(snapshot=fresh)

    async def refresh(self) -> RateSnapshot:
        """Force a refresh, ignoring staleness and cooldown. Errors propagate."""
        attempt = self._attempts
        async with self._lock:
            if self._attempts != attempt and self._last_failure_at is None:
                return self._snapshot
            return await self._refresh_locked()

    def status(self) -> CacheStatus:
        now = self._clock()
        snapshot = self._snapshot
        return CacheStatus(
            has_snapshot=snapshot is not None,
            is_stale=snapshot is None or self.is_stale(snapshot, now),
            refreshing=self._lock.locked(),
            age_seconds=snapshot.age(now) if snapshot else None,
            staleness_seconds=self.staleness,
            refresh_count=self._refresh_count,
            failure_count=self._failure_count,
            last_error=self._last_error,
            last_failure_at=self._last_failure_at,
            currencies=snapshot.currencies if snapshot else [],
        )

    async def _refresh_locked(self) -> RateSnapshot:
        try:
            raw = await self._fetch_with_retry()
            snapshot = self.parser.parse(raw, fetched_at=self._clock())
            if not snapshot.valid:
                raise ParseError("Parser returned a snapshot marked invalid")
        except Exception as e:
            # Any failure counts as a finished attempt so queued callers share it
            self._attempts += 1
            self._failure_count += 1
            self._last_error = str(e)
            self._last_exception = e
            self._last_failure_at = self._clock()
            if not isinstance(e, (FetchError, ParseError)):
                logger.error(f"Rate refresh failed unexpectedly: {e!r}", exc_info=True)
            elif self._snapshot is None:
                logger.error(f"Rate refresh failed and no rates are cached: {e}")
            else:
                logger.warning(f"Rate refresh failed, serving rates from {self._snapshot.as_of}: {e}")
            raise

        self._attempts += 1
        self._refresh_count += 1
        self._snapshot = snapshot
        self._last_error = None
        self._last_exception = None
        self._last_failure_at = None
        logger.info(
            f"Rates refreshed from {self.provider.name}: base={snapshot.base} "
            f"date={snapshot.as_of} currencies={len(snapshot.rates)}"
        )
        return snapshot

    async def _fetch_with_retry(self) -> bytes:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_backoff, max=10),
            retry=retry_if_exception_type(FetchError),
            before_sleep=lambda state: logger.warning(
                f"Fetch attempt {state.attempt_number} failed, retrying: {state.outcome.exception()}"
            ),
            reraise=True,
        )
        return await retrying(self._fetch_once)

    async def _fetch_once(self) -> bytes:
        try:
            return await asyncio.wait_for(
                self.provider.fetch(self._credential), timeout=self.fetch_timeout
            )
        except FetchError:
            raise
        except TimeoutError as e:
            raise FetchError(
                f"{self.provider.name} fetch timed out after {self.fetch_timeout}s"
            ) from e
        except Exception as e:
            raise FetchError(f"{self.provider.name} fetch failed: {e!r}") from e

    def _in_cooldown(self, now: float) -> bool:
        return self._last_failure_at is not None and now - self._last_failure_at < self.failure_cooldown

    def _latest_outcome(self) -> RateLookup:
        if self._last_failure_at is not None:
            return self._fallback()
        return RateLookup(snapshot=self._snapshot)

    def _fallback(self) -> RateLookup:
        if self._snapshot is None:
            raise RatesUnavailableError(
                f"No exchange rates available: {self._last_error}"
            ) from self._last_exception
        return RateLookup(snapshot=self._snapshot, degraded=True, error=self._last_error)
