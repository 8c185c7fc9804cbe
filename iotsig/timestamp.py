from dataclasses import dataclass
from datetime import datetime, timezone

from .errors import SigningError

DATE_FORMAT = '%Y%m%d'
AMZ_DATE_FORMAT = '%Y%m%dT%H%M%SZ'


@dataclass(frozen=True)
class Timestamp:
    """A single UTC instant, rendered in the two forms SigV4 needs.

    Every value derived during one signing operation must come from the same
    Timestamp, so it is captured once and passed around rather than re-read
    from the clock.
    """

    instant: datetime

    def __post_init__(self) -> None:
        instant = self.instant
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        object.__setattr__(self, 'instant', instant.astimezone(timezone.utc).replace(microsecond=0))

    @classmethod
    def parse(cls, value: str) -> 'Timestamp':
        """Rebuild a timestamp from an ``X-Amz-Date`` value."""
        try:
            return cls(datetime.strptime(value, AMZ_DATE_FORMAT))
        except (TypeError, ValueError) as e:
            raise SigningError(f"Malformed X-Amz-Date value: {value!r}") from e

    def date_stamp(self) -> str:
        return self.instant.strftime(DATE_FORMAT)

    def full_stamp(self) -> str:
        return self.instant.strftime(AMZ_DATE_FORMAT)

    def __str__(self) -> str:
        return self.full_stamp()


def capture_now() -> Timestamp:
    return Timestamp(datetime.now(timezone.utc))
