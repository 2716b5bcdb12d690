"""Finding looks at the destination that match an imported look."""

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from lookshift.looker.store import LookStore

logger = logging.getLogger(__name__)


class MatchPolicy(StrEnum):
    """Order applied to search results before callers take the first one.

    REMOTE_ORDER keeps whatever order the API returned. MOST_RECENTLY_UPDATED
    puts the look with the latest ``updated_at`` first; looks without a
    timestamp go last and ties keep API order.
    """

    REMOTE_ORDER = "remote_order"
    MOST_RECENTLY_UPDATED = "most_recently_updated"


def first_match(results: Sequence[dict[str, Any]]) -> dict[str, Any] | None:
    return results[0] if results else None


class IdentityResolver:
    """Searches the destination for looks by slug or title.

    Non-deleted looks are searched first; only when none match is the trash
    searched. Both lookups are read-only and let RemoteQueryError propagate.
    """

    def __init__(self, store: LookStore, policy: MatchPolicy = MatchPolicy.REMOTE_ORDER):
        self.store = store
        self.policy = MatchPolicy(policy)

    def find_by_slug(self, slug: str, folder_id: str | None = None) -> list[dict[str, Any]]:
        return self._search({"slug": slug}, folder_id)

    def find_by_title(self, title: str, folder_id: str | None = None) -> list[dict[str, Any]]:
        return self._search({"title": title}, folder_id)

    def _search(self, criteria: dict[str, Any], folder_id: str | None) -> list[dict[str, Any]]:
        if folder_id:
            criteria["folder_id"] = str(folder_id)
        results = self.store.search_looks(**criteria)
        if not results:
            results = self.store.search_looks(**criteria, deleted=True)
            if results:
                logger.debug(f"Only deleted looks match {criteria}")
        return self._order(results)

    def _order(self, results: list[dict[str, Any]]) -> list[dict[str, Any]]:
        if self.policy is MatchPolicy.MOST_RECENTLY_UPDATED:
            with_ts = [r for r in results if r.get("updated_at")]
            without_ts = [r for r in results if not r.get("updated_at")]
            with_ts.sort(key=lambda r: str(r["updated_at"]), reverse=True)
            return with_ts + without_ts
        return list(results)
