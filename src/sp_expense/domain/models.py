"""Domain models for sp_expense — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Expense:
    owner_id: int                  # user who paid
    other_ids: tuple[int, ...]     # everyone else sharing it, never the owner
    amount: float                  # positive, fractional units allowed
    description: str
    created_at: datetime
    id: int | None = None          # assigned by the store on append

    @property
    def participant_ids(self) -> tuple[int, ...]:
        """Owner first, then each other participant exactly once."""
        seen = {self.owner_id}
        ordered = [self.owner_id]
        for user_id in self.other_ids:
            if user_id not in seen:
                seen.add(user_id)
                ordered.append(user_id)
        return tuple(ordered)
