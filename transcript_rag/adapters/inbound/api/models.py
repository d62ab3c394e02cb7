"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ....core import domain


class ToneSettingsModel(BaseModel):
    """Tone sliders; out-of-range values are clamped to [0, 100]."""

    formality: int = 50
    enthusiasm: int = 50
    technicality: int = 50


class ExamplePhrasesModel(BaseModel):
    preferred_openings: list[str] = Field(default_factory=list)
    preferred_transitions: list[str] = Field(default_factory=list)
    preferred_conclusions: list[str] = Field(default_factory=list)
    avoid_phrases: list[str] = Field(default_factory=list)


class StyleGuideModel(BaseModel):
    """Writing profile used for chat answers and summaries."""

    instructions: str = ""
    tone_settings: ToneSettingsModel = Field(default_factory=ToneSettingsModel)
    keywords: list[str] = Field(default_factory=list)
    example_phrases: ExamplePhrasesModel = Field(default_factory=ExamplePhrasesModel)

    def to_domain(self) -> domain.StyleGuide:
        phrases = self.example_phrases
        return domain.StyleGuide(
            instructions=self.instructions,
            tone_settings=domain.ToneSettings(**self.tone_settings.model_dump()),
            keywords=tuple(self.keywords),
            example_phrases=domain.ExamplePhrases(
                preferred_openings=tuple(phrases.preferred_openings),
                preferred_transitions=tuple(phrases.preferred_transitions),
                preferred_conclusions=tuple(phrases.preferred_conclusions),
                avoid_phrases=tuple(phrases.avoid_phrases),
            ),
        )


class DocumentCreate(BaseModel):
    """Request model for uploading a transcript."""

    title: str = Field(..., min_length=1, max_length=300)
    text: str = Field(..., min_length=1, description="Full transcript text")
    filename: str | None = None
    tags: list[str] = Field(default_factory=list)


class DocumentResponse(BaseModel):
    id: str
    title: str
    word_count: int
    filename: str | None = None
    file_type: str | None = None
    date_added: str
    tags: list[str] = Field(default_factory=list)
    indexed: bool = False

    @classmethod
    def from_domain(cls, document: domain.Document, indexed: bool) -> DocumentResponse:
        return cls(
            id=document.id,
            title=document.title,
            word_count=document.metadata.word_count,
            filename=document.metadata.filename,
            file_type=document.metadata.file_type,
            date_added=document.metadata.date_added,
            tags=list(document.tags),
            indexed=indexed,
        )


class IndexResponse(BaseModel):
    document_id: str
    chunks: int
    dimension: int


class ChatMessageModel(BaseModel):
    """A single message in the chat history."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request model for one chat turn."""

    query: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        json_schema_extra={"example": "Summarize this in 3 sentences"},
    )
    messages: list[ChatMessageModel] = Field(default_factory=list, description="Prior turns")
    document_ids: list[str] = Field(
        default_factory=list, description="Restrict retrieval to these documents; empty = all"
    )
    selected_document_summary: str | None = None
    style_guide: StyleGuideModel | None = None

    def to_context(self, max_context_length: int) -> domain.ChatContext:
        return domain.ChatContext(
            messages=[
                domain.ChatMessage(role=domain.MessageRole(m.role), content=m.content)
                for m in self.messages
            ],
            document_ids=list(self.document_ids),
            selected_document_summary=self.selected_document_summary,
            max_context_length=max_context_length,
        )


class SourceInfo(BaseModel):
    """A retrieved chunk cited by an answer."""

    document_id: str
    chunk_id: str
    chunk_index: int
    rank: int
    similarity: float = Field(..., ge=0, le=1)
    excerpt: str


class MetricsInfo(BaseModel):
    retrieval_count: int
    top_similarity: float
    response_length: int
    processing_time_ms: float


class ChatResponseModel(BaseModel):
    answer: str
    outcome: str
    has_grounding: bool
    sources: list[SourceInfo] = Field(default_factory=list)
    metrics: MetricsInfo
    constraints: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, response: domain.ChatResponse) -> ChatResponseModel:
        return cls(
            answer=response.message.content,
            outcome=response.outcome.value,
            has_grounding=response.has_grounding,
            sources=[
                SourceInfo(
                    document_id=s.chunk.document_id,
                    chunk_id=s.chunk.id,
                    chunk_index=s.chunk.chunk_index,
                    rank=s.rank,
                    similarity=s.similarity,
                    excerpt=s.chunk.text[:300],
                )
                for s in response.sources
            ],
            metrics=MetricsInfo(
                retrieval_count=response.metrics.retrieval_count,
                top_similarity=response.metrics.top_similarity,
                response_length=response.metrics.response_length,
                processing_time_ms=response.metrics.processing_time_ms,
            ),
            constraints=[line for c in response.constraints for line in c.instructions()],
        )


class ABPairCreate(BaseModel):
    document_id: str
    style_guide: StyleGuideModel | None = None


class VariantInfo(BaseModel):
    name: str
    description: str
    prompt_strategy: str


class SummaryInfo(BaseModel):
    markdown_summary: str
    total_chunks: int
    successful_chunks: int
    failed_chunks: int
    processing_time_ms: float


class FeedbackInfo(BaseModel):
    winner: Literal["A", "B"]
    reason: str | None = None
    created_at: str


class ABPairResponse(BaseModel):
    id: str
    document_id: str
    document_title: str
    created_at: str
    summary_a: SummaryInfo
    summary_b: SummaryInfo
    variant_a: VariantInfo
    variant_b: VariantInfo
    user_feedback: FeedbackInfo | None = None

    @classmethod
    def from_domain(cls, pair: domain.ABSummaryPair) -> ABPairResponse:
        def summary(result: domain.SummarizationResult) -> SummaryInfo:
            stats = result.processing_stats
            return SummaryInfo(
                markdown_summary=result.markdown_summary,
                total_chunks=stats.total_chunks,
                successful_chunks=stats.successful_chunks,
                failed_chunks=stats.failed_chunks,
                processing_time_ms=stats.processing_time_ms,
            )

        def variant(v: domain.SummaryVariant) -> VariantInfo:
            return VariantInfo(
                name=v.name,
                description=v.description,
                prompt_strategy=v.prompt_strategy,
            )

        feedback = pair.user_feedback
        return cls(
            id=pair.id,
            document_id=pair.document_id,
            document_title=pair.document_title,
            created_at=pair.created_at,
            summary_a=summary(pair.summary_a),
            summary_b=summary(pair.summary_b),
            variant_a=variant(pair.variant_a),
            variant_b=variant(pair.variant_b),
            user_feedback=(
                FeedbackInfo(
                    winner=feedback.winner.value,
                    reason=feedback.reason,
                    created_at=feedback.created_at,
                )
                if feedback
                else None
            ),
        )


class FeedbackRequest(BaseModel):
    winner: Literal["A", "B"]
    reason: str | None = Field(None, max_length=1000)


class ABStatsResponse(BaseModel):
    total_tests: int
    completed_tests: int
    variant_a_wins: int
    variant_b_wins: int
    completion_rate: float


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    ollama: str = Field(..., description="Model server status")
    documents: int = 0
    indexed_documents: int = 0


class ErrorDetail(BaseModel):
    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., TR_SVC_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str
    file: str
    line: int
    timestamp: str | None = None


class ErrorResponse(BaseModel):
    """Structured error body returned by the exception handlers."""

    error: ErrorDetail
    location: ErrorLocation | None = None
    context: dict | None = None
    cause: dict | None = None
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
