from typing import Protocol, runtime_checkable


@runtime_checkable
class RateProvider(Protocol):
    """Fetches a raw rate document from an upstream source.

    Implementations perform exactly one outbound request per `fetch` call and
    never interpret the payload; decoding belongs to the snapshot parser.
    """

    @property
    def name(self) -> str:
        ...

    async def fetch(self, credential: str) -> bytes:
        ...

    async def close(self) -> None:
        ...
