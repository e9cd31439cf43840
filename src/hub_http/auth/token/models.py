from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Token:
    token_value: str
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        # naive datetimes are local time, as returned by datetime.now()
        if self.expires_at is not None and self.expires_at.tzinfo is None:
            object.__setattr__(self, "expires_at", self.expires_at.astimezone(timezone.utc))

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at

    def seconds_until_expiration(self) -> float:
        if self.expires_at is not None:
            return (self.expires_at - datetime.now(timezone.utc)).total_seconds()
        return 0

    def will_expire_within(self, seconds: int) -> bool:
        if self.expires_at is None:
            return False
        return self.seconds_until_expiration() <= seconds

    def serialize_token(self) -> dict[str, str]:
        return {
            "token_value": self.token_value,
            "expires_at": self.expires_at.isoformat() if self.expires_at else "",
        }
