"""Style guide merging and the canonical A/B summary variants."""

from dataclasses import replace

from ..domain import (
    ExamplePhrases,
    ExamplePhrasesDelta,
    StyleGuide,
    StyleGuideDelta,
    SummaryVariant,
    ToneDelta,
    ToneSettings,
    clamp_tone,
)

PROFESSIONAL_VARIANT_NAME = "Professional & Structured"
CONVERSATIONAL_VARIANT_NAME = "Conversational & Engaging"


def default_style_guide() -> StyleGuide:
    return StyleGuide(
        instructions="Write clearly and warmly. Keep explanations practical and grounded in the source.",
        tone_settings=ToneSettings(formality=50, enthusiasm=50, technicality=50),
    )


def _pick(override, base):
    return base if override is None else override


def merge_style_guide(base: StyleGuide, delta: StyleGuideDelta) -> StyleGuide:
    """Apply ``delta`` on top of ``base`` field by field.

    Tone sliders take the delta's value when present and are clamped to
    [0, 100]. Phrase lists, keywords and instructions present in the delta
    replace the base values wholesale. Neither argument is modified.
    """
    tone = base.tone_settings
    if delta.tone_settings is not None:
        tone = ToneSettings(
            formality=_pick(delta.tone_settings.formality, tone.formality),
            enthusiasm=_pick(delta.tone_settings.enthusiasm, tone.enthusiasm),
            technicality=_pick(delta.tone_settings.technicality, tone.technicality),
        )

    phrases = base.example_phrases
    if delta.example_phrases is not None:
        d = delta.example_phrases
        phrases = ExamplePhrases(
            preferred_openings=tuple(_pick(d.preferred_openings, phrases.preferred_openings)),
            preferred_transitions=tuple(
                _pick(d.preferred_transitions, phrases.preferred_transitions)
            ),
            preferred_conclusions=tuple(
                _pick(d.preferred_conclusions, phrases.preferred_conclusions)
            ),
            avoid_phrases=tuple(_pick(d.avoid_phrases, phrases.avoid_phrases)),
        )

    return replace(
        base,
        instructions=_pick(delta.instructions, base.instructions),
        tone_settings=tone,
        keywords=tuple(_pick(delta.keywords, base.keywords)),
        example_phrases=phrases,
    )


def create_professional_variant(base: StyleGuide) -> SummaryVariant:
    """Formal, structured variant: formality +20, enthusiasm -10."""
    tone = base.tone_settings
    return SummaryVariant(
        name=PROFESSIONAL_VARIANT_NAME,
        description="More formal tone with clear structure and bullet points",
        style_modifications=StyleGuideDelta(
            tone_settings=ToneDelta(
                formality=clamp_tone(tone.formality + 20),
                enthusiasm=clamp_tone(tone.enthusiasm - 10),
            ),
            example_phrases=ExamplePhrasesDelta(
                preferred_openings=(
                    "This document presents",
                    "The key findings include",
                    "Analysis reveals",
                    "The structured approach demonstrates",
                ),
                preferred_transitions=(
                    "Furthermore",
                    "Additionally",
                    "In conclusion",
                    "Building upon this",
                ),
                preferred_conclusions=(
                    "In summary",
                    "The analysis demonstrates",
                    "These findings indicate",
                    "To conclude",
                ),
                avoid_phrases=("Awesome", "Super cool", "Amazing", "Totally"),
            ),
        ),
        prompt_strategy="structured_formal",
    )


def create_conversational_variant(base: StyleGuide) -> SummaryVariant:
    """Casual, engaging variant: formality -20, enthusiasm +15, technicality -10."""
    tone = base.tone_settings
    return SummaryVariant(
        name=CONVERSATIONAL_VARIANT_NAME,
        description="More casual tone with engaging language and storytelling elements",
        style_modifications=StyleGuideDelta(
            tone_settings=ToneDelta(
                formality=clamp_tone(tone.formality - 20),
                enthusiasm=clamp_tone(tone.enthusiasm + 15),
                technicality=clamp_tone(tone.technicality - 10),
            ),
            example_phrases=ExamplePhrasesDelta(
                preferred_openings=(
                    "Let's dive into",
                    "Here's what we discovered",
                    "You'll find that",
                    "What's interesting is",
                ),
                preferred_transitions=("What's more", "Here's the thing", "That said", "Moving on"),
                preferred_conclusions=(
                    "Bottom line",
                    "The takeaway here",
                    "What this means for you",
                    "Here's what matters",
                ),
                avoid_phrases=("Pursuant to", "Heretofore", "Aforementioned", "Subsequently"),
            ),
        ),
        prompt_strategy="conversational_engaging",
    )
