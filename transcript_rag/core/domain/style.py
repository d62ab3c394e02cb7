"""Style guide models used to parameterize generation."""

from __future__ import annotations

from dataclasses import dataclass, field

TONE_MIN = 0
TONE_MAX = 100


def clamp_tone(value: float) -> int:
    """Clamp a tone slider value into [0, 100]."""
    return int(max(TONE_MIN, min(TONE_MAX, round(value))))


@dataclass(frozen=True)
class ToneSettings:
    """Tone sliders, each in [0, 100].

    Values outside the range are clamped on construction, so a
    ``ToneSettings`` instance always satisfies the range invariant.
    """

    formality: int = 50
    enthusiasm: int = 50
    technicality: int = 50

    def __post_init__(self) -> None:
        object.__setattr__(self, "formality", clamp_tone(self.formality))
        object.__setattr__(self, "enthusiasm", clamp_tone(self.enthusiasm))
        object.__setattr__(self, "technicality", clamp_tone(self.technicality))


@dataclass(frozen=True)
class ExamplePhrases:
    """Phrase preferences that shape the voice of generated text."""

    preferred_openings: tuple[str, ...] = ()
    preferred_transitions: tuple[str, ...] = ()
    preferred_conclusions: tuple[str, ...] = ()
    avoid_phrases: tuple[str, ...] = ()


@dataclass(frozen=True)
class StyleGuide:
    """A structured writing profile.

    Attributes:
        instructions: Free-text (markdown) writing instructions.
        tone_settings: Formality, enthusiasm and technicality sliders.
        keywords: Voice markers to emphasize.
        example_phrases: Preferred openings, transitions, conclusions and phrases to avoid.
    """

    instructions: str = ""
    tone_settings: ToneSettings = field(default_factory=ToneSettings)
    keywords: tuple[str, ...] = ()
    example_phrases: ExamplePhrases = field(default_factory=ExamplePhrases)


@dataclass(frozen=True)
class ToneDelta:
    """Per-slider overrides; ``None`` keeps the base value."""

    formality: int | None = None
    enthusiasm: int | None = None
    technicality: int | None = None


@dataclass(frozen=True)
class ExamplePhrasesDelta:
    """Per-list overrides; a present list replaces the base list wholesale."""

    preferred_openings: tuple[str, ...] | None = None
    preferred_transitions: tuple[str, ...] | None = None
    preferred_conclusions: tuple[str, ...] | None = None
    avoid_phrases: tuple[str, ...] | None = None


@dataclass(frozen=True)
class StyleGuideDelta:
    """A partial style guide applied on top of a base guide."""

    instructions: str | None = None
    tone_settings: ToneDelta | None = None
    keywords: tuple[str, ...] | None = None
    example_phrases: ExamplePhrasesDelta | None = None


@dataclass(frozen=True)
class SummaryVariant:
    """A named delta producing one side of an A/B comparison."""

    name: str
    description: str
    style_modifications: StyleGuideDelta
    prompt_strategy: str
