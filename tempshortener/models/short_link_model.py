from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortLinkModel:
    """Point-in-time snapshot of a short link record.

    Snapshots are handed out by the registry (e.g. `list_by_owner()`) and never
    change after creation. The live record keeps counting clicks independently.
    """

    # fmt: off
    target: str             # Original long URL
    shortcode: str          # Unique short identifier of shortened URL
    owner_id: str           # Identity of the link's creator
    click_limit: int        # Maximum number of successful clicks
    click_count: int        # Clicks consumed so far
    created_at: datetime    # Creation time (UTC)
    expires_at: datetime    # Time after which this link is expired (UTC)
    # fmt: on

    @property
    def leftover_hits(self) -> int:
        return self.click_limit - self.click_count
