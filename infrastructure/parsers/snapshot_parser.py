import json
import logging
import time
from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from domain.exceptions.currency import ParseError
from domain.models.rates import RateSnapshot

logger = logging.getLogger(__name__)

FiniteRate = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class LatestRatesDocument(BaseModel):
    """Schema of the upstream `latest` document. Every field is required."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    success: bool
    timestamp: int
    base: str = Field(min_length=1)
    date: str
    rates: dict[str, FiniteRate] = Field(min_length=1)


class SnapshotParser:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def parse(self, raw: bytes | str, fetched_at: float | None = None) -> RateSnapshot:
        document = self._decode(raw)
        self._check_upstream_success(document)

        try:
            payload = LatestRatesDocument.model_validate(document)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or None
            raise ParseError(error["msg"], field=field) from e

        return RateSnapshot(
            fetched_at=self._clock() if fetched_at is None else fetched_at,
            base=payload.base,
            as_of=payload.date,
            rates=payload.rates,
            valid=True,
            source_timestamp=payload.timestamp,
        )

    @staticmethod
    def _decode(raw: bytes | str) -> dict[str, Any]:
        try:
            document = json.loads(raw)
        except ValueError as e:
            raise ParseError(f"Malformed JSON document: {e}") from e

        if not isinstance(document, dict):
            raise ParseError(f"Expected a JSON object, got {type(document).__name__}")
        return document

    @staticmethod
    def _check_upstream_success(document: dict[str, Any]) -> None:
        # Upstream error documents carry no rates; report the upstream reason instead
        if document.get("success") is not False:
            return

        error = document.get("error")
        info = "Unknown error"
        if isinstance(error, dict):
            info = error.get("info") or error.get("type") or info
        logger.debug(f"Upstream reported failure: {error!r}")
        raise ParseError(f"Upstream reported failure: {info}", field="success")
