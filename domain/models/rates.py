from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class RateSnapshot:
    """One fetched set of rates, each expressed as units of `base` per currency."""

    fetched_at: float
    base: str
    as_of: str
    rates: Mapping[str, float]
    valid: bool = True
    source_timestamp: int | None = None

    def __post_init__(self):
        # Detach from the caller's dict so the snapshot cannot change underneath readers
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def has_currency(self, code: str) -> bool:
        return code == self.base or code in self.rates

    def rate_for(self, code: str) -> float:
        if code in self.rates:
            return self.rates[code]
        if code == self.base:
            return 1.0
        raise KeyError(code)

    @property
    def currencies(self) -> list[str]:
        return sorted(set(self.rates) | {self.base})

    def age(self, now: float) -> float:
        return now - self.fetched_at


@dataclass(frozen=True)
class RateLookup:
    snapshot: RateSnapshot
    degraded: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: float
    raw_value: float
    value: float
    rate: float
    base: str
    fetched_at: float
    as_of: str


@dataclass(frozen=True)
class CacheStatus:
    has_snapshot: bool
    is_stale: bool
    refreshing: bool
    age_seconds: float | None
    staleness_seconds: float
    refresh_count: int
    failure_count: int
    last_error: str | None = None
    last_failure_at: float | None = None
    currencies: list[str] = field(default_factory=list)
