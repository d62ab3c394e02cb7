"""transcript-rag: grounded Q&A and A/B summaries over long transcripts."""

__version__ = "1.0.0"
