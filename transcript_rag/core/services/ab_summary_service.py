"""A/B summary generation and preference tracking."""

import logging
import time
from collections.abc import Callable

from ..domain import (
    ABSummaryPair,
    ABTestingStats,
    Document,
    StyleGuide,
    SummarizationResult,
    SummaryVariant,
    UserPreference,
    Winner,
)
from ..domain.exceptions import ABGenerationError, PairNotFoundError
from ..ports import ABPairRepositoryPort, LoggerPort, SummarizerPort
from .style_guide import (
    create_conversational_variant,
    create_professional_variant,
    merge_style_guide,
)

logger = logging.getLogger(__name__)

ABProgressCallback = Callable[[str, int, int], None]

TOTAL_STAGES = 3
STAGE_SUMMARY_A = "Generating Summary A"
STAGE_SUMMARY_B = "Generating Summary B"
STAGE_FINALIZE = "Finalizing A/B Pair"


class ABSummaryService:
    """Generates paired, differently styled summaries and records votes.

    The two passes run one after the other with a pause in between so a
    single local model server is never asked for both at once.
    """

    def __init__(
        self,
        summarizer: SummarizerPort,
        repository: ABPairRepositoryPort,
        inter_variant_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        log: LoggerPort | None = None,
    ) -> None:
        self.summarizer = summarizer
        self.repository = repository
        self.inter_variant_delay = inter_variant_delay
        self.sleep = sleep
        self.log = log or logger

    def generate_pair(
        self,
        document: Document,
        base_style_guide: StyleGuide,
        on_progress: ABProgressCallback | None = None,
    ) -> ABSummaryPair:
        """Summarize ``document`` under both canonical variants and store the pair.

        Raises:
            ABGenerationError: If either pass fails. Nothing is stored.
        """

        def report(stage: str, current: int, total: int) -> None:
            if on_progress:
                on_progress(stage, current, total)

        variant_a = create_professional_variant(base_style_guide)
        variant_b = create_conversational_variant(base_style_guide)
        self.log.info(
            f"Starting A/B summary generation for {document.title} "
            f"({variant_a.name} vs {variant_b.name})"
        )

        report(STAGE_SUMMARY_A, 1, TOTAL_STAGES)
        summary_a = self._summarize(document, base_style_guide, variant_a, "A", report)

        if self.inter_variant_delay > 0:
            self.sleep(self.inter_variant_delay)

        report(STAGE_SUMMARY_B, 2, TOTAL_STAGES)
        summary_b = self._summarize(document, base_style_guide, variant_b, "B", report)

        report(STAGE_FINALIZE, 3, TOTAL_STAGES)
        pair = ABSummaryPair(
            document_id=document.id,
            document_title=document.title,
            summary_a=summary_a,
            summary_b=summary_b,
            variant_a=variant_a,
            variant_b=variant_b,
        )
        self.repository.add_pair(pair)
        self.log.info(
            f"A/B pair {pair.id} created for {document.title}: "
            f"{len(summary_a.markdown_summary)} vs {len(summary_b.markdown_summary)} chars"
        )
        return pair

    def _summarize(
        self,
        document: Document,
        base: StyleGuide,
        variant: SummaryVariant,
        label: str,
        report: ABProgressCallback,
    ) -> SummarizationResult:
        style = merge_style_guide(base, variant.style_modifications)
        stage = f"Summary {label} ({variant.name})"
        try:
            return self.summarizer.summarize_document(
                document,
                style,
                on_progress=lambda current, total: report(stage, current, total),
                prompt_strategy=variant.prompt_strategy,
            )
        except Exception as e:
            self.log.error(
                f"A/B summary generation failed for {document.title} on variant {label}: {e}"
            )
            raise ABGenerationError(
                f"Summary {label} ({variant.name}) failed for document '{document.title}': {e}",
                cause=e,
                context={
                    "document_id": document.id,
                    "document_title": document.title,
                    "variant": variant.name,
                },
            ) from e

    def record_feedback(
        self, pair_id: str, winner: Winner | str, reason: str | None = None
    ) -> UserPreference:
        """Record which summary the user preferred.

        Voting again replaces the pair's previous vote; every vote is also
        appended to the preference log.

        Raises:
            PairNotFoundError: If no pair has this id.
        """
        preference = UserPreference(pair_id=pair_id, winner=Winner(winner), reason=reason or None)
        if self.repository.update_feedback(pair_id, preference) is None:
            raise PairNotFoundError(f"A/B pair not found: {pair_id}", context={"pair_id": pair_id})
        self.repository.add_preference(preference)
        self.log.info(
            f"Feedback recorded for pair {pair_id}: winner {preference.winner.value}, "
            f"reason {reason or 'No reason provided'}"
        )
        return preference

    def get_ab_testing_stats(self) -> ABTestingStats:
        pairs = self.repository.list_pairs()
        total = len(pairs)
        completed = [p for p in pairs if p.user_feedback is not None]
        a_wins = sum(1 for p in completed if p.user_feedback.winner is Winner.A)
        b_wins = sum(1 for p in completed if p.user_feedback.winner is Winner.B)
        rate = len(completed) / total * 100 if total else 0.0
        return ABTestingStats(
            total_tests=total,
            completed_tests=len(completed),
            variant_a_wins=a_wins,
            variant_b_wins=b_wins,
            completion_rate=round(rate, 2),
        )

    def list_pairs(self) -> list[ABSummaryPair]:
        return self.repository.list_pairs()

    def get_pair(self, pair_id: str) -> ABSummaryPair:
        pair = self.repository.get_pair(pair_id)
        if pair is None:
            raise PairNotFoundError(f"A/B pair not found: {pair_id}", context={"pair_id": pair_id})
        return pair
