"""In-memory storage for A/B summary pairs and preference votes."""

import threading
from dataclasses import replace

from ....core.domain import ABSummaryPair, UserPreference
from ....core.ports import ABPairRepositoryPort


class InMemoryABPairRepository(ABPairRepositoryPort):
    """Stores pairs by id and keeps an append-only vote log."""

    def __init__(self) -> None:
        self._pairs: dict[str, ABSummaryPair] = {}
        self._preferences: list[UserPreference] = []
        self._lock = threading.Lock()

    def add_pair(self, pair: ABSummaryPair) -> None:
        with self._lock:
            self._pairs[pair.id] = pair

    def get_pair(self, pair_id: str) -> ABSummaryPair | None:
        return self._pairs.get(pair_id)

    def list_pairs(self) -> list[ABSummaryPair]:
        with self._lock:
            return list(self._pairs.values())

    def update_feedback(self, pair_id: str, feedback: UserPreference) -> ABSummaryPair | None:
        with self._lock:
            pair = self._pairs.get(pair_id)
            if pair is None:
                return None
            # Stored pairs are replaced rather than mutated so earlier readers keep their copy
            updated = replace(pair, user_feedback=feedback)
            self._pairs[pair_id] = updated
            return updated

    def add_preference(self, preference: UserPreference) -> None:
        with self._lock:
            self._preferences.append(preference)

    def list_preferences(self) -> list[UserPreference]:
        with self._lock:
            return list(self._preferences)
