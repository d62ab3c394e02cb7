"""A/B summary pair repository port."""

from abc import ABC, abstractmethod

from ..domain import ABSummaryPair, UserPreference


class ABPairRepositoryPort(ABC):
    """Abstract interface for persisting A/B pairs and preference votes."""

    @abstractmethod
    def add_pair(self, pair: ABSummaryPair) -> None:
        """Persist a newly generated pair."""
        ...

    @abstractmethod
    def get_pair(self, pair_id: str) -> ABSummaryPair | None:
        """Return a pair or ``None`` when unknown."""
        ...

    @abstractmethod
    def list_pairs(self) -> list[ABSummaryPair]:
        """Return all pairs in creation order."""
        ...

    @abstractmethod
    def update_feedback(self, pair_id: str, feedback: UserPreference) -> ABSummaryPair | None:
        """Set ``user_feedback`` on a pair; returns the pair or ``None`` when unknown."""
        ...

    @abstractmethod
    def add_preference(self, preference: UserPreference) -> None:
        """Append a vote to the preference log used for analytics."""
        ...

    @abstractmethod
    def list_preferences(self) -> list[UserPreference]:
        """Return every recorded vote, oldest first."""
        ...
