"""Pickup scheduling — when a customer may collect an order.

Times are reasoned about in the campus timezone and stored in UTC.

Rules:
- Ordering closes for the day at the cutoff hour (campus-local)
- The earliest pickup is now plus the truck's preparation time
- The latest pickup is the earlier of now plus the order window and today
  at the cutoff hour
- Slots start at the earliest time rounded up to a slot boundary
- A requested time may fall up to one slot interval before the earliest
  time, absorbing the delay between showing a slot and submitting it
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from shared import clock
from shared.config import Settings, get_settings
from shared.exceptions import ValidationError


@dataclass(frozen=True)
class PickupWindow:
    earliest: datetime
    latest: datetime


class PickupPolicy:
    def __init__(
        self,
        timezone: str = "UTC",
        cutoff_hour: int = 23,
        window_minutes: int = 180,
        slot_minutes: int = 15,
        default_prep_minutes: int = 15,
    ):
        self.timezone = ZoneInfo(timezone)
        self.cutoff_hour = cutoff_hour
        self.window = timedelta(minutes=window_minutes)
        self.slot = timedelta(minutes=slot_minutes)
        self.default_prep_minutes = default_prep_minutes

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PickupPolicy":
        settings = settings or get_settings()
        return cls(
            timezone=settings.campus_timezone,
            cutoff_hour=settings.order_cutoff_hour,
            window_minutes=settings.order_window_minutes,
            slot_minutes=settings.pickup_slot_minutes,
            default_prep_minutes=settings.default_prep_minutes,
        )

    def local(self, moment: datetime) -> datetime:
        """``moment`` on the campus clock; naive values are taken as UTC."""
        return clock.as_utc(moment).astimezone(self.timezone)

    def to_utc(self, moment: datetime) -> datetime:
        """Read a client-supplied time; naive values are campus-local."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=self.timezone)
        return moment.astimezone(UTC)

    def _local_now(self, now: datetime | None) -> datetime:
        return self.local(now if now is not None else clock.now())

    def is_closed(self, now: datetime | None = None) -> bool:
        return self._local_now(now).hour >= self.cutoff_hour

    def window_for(self, prep_minutes: int | None = None, now: datetime | None = None) -> PickupWindow | None:
        """The bounds for a pickup placed at ``now``, or ``None`` once ordering has closed."""
        local_now = self._local_now(now)
        if local_now.hour >= self.cutoff_hour:
            return None

        prep = timedelta(minutes=prep_minutes or self.default_prep_minutes)
        cutoff = local_now.replace(hour=self.cutoff_hour, minute=0, second=0, microsecond=0)
        return PickupWindow(
            earliest=local_now + prep,
            latest=min(local_now + self.window, cutoff),
        )

    def _round_up(self, moment: datetime) -> datetime:
        midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
        elapsed = moment - midnight
        remainder = elapsed % self.slot
        if not remainder:
            return moment
        return moment + (self.slot - remainder)

    def slots(self, prep_minutes: int | None = None, now: datetime | None = None) -> list[datetime]:
        """Selectable pickup times, campus-local, in ascending order."""
        window = self.window_for(prep_minutes, now)
        if window is None:
            return []

        slots = []
        slot = self._round_up(window.earliest)
        while slot <= window.latest:
            slots.append(slot)
            slot += self.slot
        return slots

    def validate(self, requested: datetime, prep_minutes: int | None = None, now: datetime | None = None) -> datetime:
        """Check a requested pickup time and return it in UTC.

        Naive times are read as campus-local.
        """
        window = self.window_for(prep_minutes, now)
        if window is None:
            raise ValidationError(
                {"scheduled_pickup_time": [f"Ordering is closed for today after {self.cutoff_hour}:00"]}
            )

        requested = self.to_utc(requested)
        if requested < window.earliest - self.slot:
            prep = prep_minutes or self.default_prep_minutes
            raise ValidationError(
                {"scheduled_pickup_time": [f"Pickup time must be at least {prep} minutes from now"]}
            )
        if requested > window.latest:
            raise ValidationError(
                {
                    "scheduled_pickup_time": [
                        f"Pickup time must be within the next {int(self.window.total_seconds() // 60)} minutes "
                        f"and before {self.cutoff_hour}:00"
                    ]
                }
            )
        return requested
