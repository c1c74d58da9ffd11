"""
Validation Context
===================
Typed, read-only views over the inputs the engine consumes:

- BrandContext     ← Brand Genome (visual identity, vocabulary, platform rules)
- CampaignContext  ← Campaign Blueprint compliance overrides
- ContentAsset     ← the asset under test (category + payload)

The upstream store has already schema-validated these documents, so
parsing here is lenient: any missing section becomes an empty value.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from brand_compliance.utils.helpers import as_list, dig


@dataclass(frozen=True)
class PlatformRule:
    """Per-channel constraints from `platform_rules.<platform>`."""

    hashtag_max: int | None = None
    hashtag_recommended: int | None = None


@dataclass(frozen=True)
class BrandContext:
    """The slice of a Brand Genome relevant to validation."""

    name: str = ""
    # Whether the genome declares the section at all; an empty one still checks.
    has_palette: bool = False
    has_typography: bool = False
    primary_color: str | None = None
    neutral_background: str | None = None
    secondary_colors: tuple[str, ...] = ()
    accent_colors: tuple[str, ...] = ()
    primary_font: str | None = None
    secondary_font: str | None = None
    monospace_font: str | None = None
    banned_words: tuple[str, ...] = ()
    avoid_words: tuple[str, ...] = ()
    preferred_words: tuple[str, ...] = ()
    replacements: tuple[tuple[str, str], ...] = ()
    platform_rules: Mapping[str, PlatformRule] = field(default_factory=dict)

    @property
    def allowed_colors(self) -> tuple[str, ...]:
        """Primary + neutral background + secondary + accent, in that order."""
        colors = [self.primary_color, self.neutral_background]
        colors.extend(self.secondary_colors)
        colors.extend(self.accent_colors)
        return tuple(dict.fromkeys(c for c in colors if c))

    @property
    def approved_fonts(self) -> tuple[str, ...]:
        fonts = [self.primary_font, self.secondary_font, self.monospace_font]
        return tuple(f for f in fonts if f)

    def hashtag_max(self, platform: str, default: int) -> int:
        rule = self.platform_rules.get(platform)
        if rule is None or rule.hashtag_max is None:
            return default
        return rule.hashtag_max

    @classmethod
    def from_genome(cls, genome: Mapping[str, Any] | None) -> "BrandContext":
        """Build from a Brand Genome document."""
        genome = genome or {}
        palette = dig(genome, "visual_identity", "colors", default={})
        typography = dig(genome, "visual_identity", "typography", default={})
        vocab = dig(genome, "verbal_identity", "vocabulary", default={})

        def _hexes(entries: Any) -> tuple[str, ...]:
            return tuple(c["hex"] for c in as_list(entries) if isinstance(c, Mapping) and c.get("hex"))

        replacements = tuple(
            (r["from"], r["to"])
            for r in as_list(vocab.get("replacements"))
            if isinstance(r, Mapping) and r.get("from") and r.get("to") is not None
        )

        platforms: dict[str, PlatformRule] = {}
        for platform, cfg in (genome.get("platform_rules") or {}).items():
            strategy = dig(cfg, "hashtag_strategy", default={})
            platforms[platform] = PlatformRule(
                hashtag_max=strategy.get("max"),
                hashtag_recommended=strategy.get("recommended"),
            )

        return cls(
            name=dig(genome, "identity", "name", default=""),
            has_palette=dig(genome, "visual_identity", "colors") is not None,
            has_typography=dig(genome, "visual_identity", "typography") is not None,
            primary_color=dig(palette, "primary", "hex"),
            neutral_background=dig(palette, "neutral", "background"),
            secondary_colors=_hexes(palette.get("secondary")),
            accent_colors=_hexes(palette.get("accent")),
            primary_font=dig(typography, "primary_font", "family"),
            secondary_font=dig(typography, "secondary_font", "family"),
            monospace_font=dig(typography, "monospace_font", "family"),
            banned_words=tuple(as_list(vocab.get("banned"))),
            avoid_words=tuple(as_list(vocab.get("avoid"))),
            preferred_words=tuple(as_list(vocab.get("preferred"))),
            replacements=replacements,
            platform_rules=platforms,
        )


@dataclass(frozen=True)
class CampaignContext:
    """Campaign-level compliance overrides layered on the brand."""

    campaign_id: str = ""
    disabled_rules: frozenset[str] = frozenset()
    additional_rules: tuple[str, ...] = ()

    @classmethod
    def from_blueprint(cls, blueprint: Mapping[str, Any] | None) -> "CampaignContext":
        blueprint = blueprint or {}
        overrides = blueprint.get("compliance_overrides") or {}

        def _ids(entries: Any) -> list[str]:
            ids = []
            for e in as_list(entries):
                rule_id = e.get("rule_id") if isinstance(e, Mapping) else e
                if rule_id:
                    ids.append(str(rule_id))
            return ids

        return cls(
            campaign_id=str(blueprint.get("id", "")),
            disabled_rules=frozenset(_ids(overrides.get("disabled_rules"))),
            additional_rules=tuple(_ids(overrides.get("additional_rules"))),
        )


@dataclass(frozen=True)
class ValidationContext:
    """Everything a rule may read besides the asset itself."""

    brand: BrandContext | None
    campaign: CampaignContext | None = None

    @classmethod
    def from_fixture(cls, context: Mapping[str, Any] | None) -> "ValidationContext":
        """Build from a golden fixture's `context` block."""
        context = context or {}
        brand_raw = context.get("brand_genome", context.get("brand"))
        campaign_raw = context.get("campaign_blueprint", context.get("campaign"))
        return cls(
            brand=BrandContext.from_genome(brand_raw) if brand_raw is not None else None,
            campaign=CampaignContext.from_blueprint(campaign_raw) if campaign_raw is not None else None,
        )


@dataclass(frozen=True)
class FontUse:
    family: str
    field: str


@dataclass(frozen=True)
class ContentAsset:
    """The unit under test. Only the fields its category needs are populated."""

    category: str
    colors_used: tuple[str, ...] | None = None
    fonts_used: tuple[FontUse, ...] | None = None
    text: str | None = None
    content_type: str | None = None
    character_count: int | None = None
    hashtag_count: int | None = None

    @classmethod
    def from_dict(cls, category: str, payload: Mapping[str, Any] | None) -> "ContentAsset":
        payload = payload or {}
        content = payload.get("content") or {}

        colors = payload.get("colors_used")
        fonts = payload.get("fonts_used")
        font_uses = None
        if fonts is not None:
            font_uses = []
            for idx, font in enumerate(as_list(fonts)):
                if isinstance(font, Mapping):
                    font_uses.append(FontUse(family=font.get("family"), field=f"fonts_used[{idx}].family"))
                else:
                    font_uses.append(FontUse(family=font, field=f"fonts_used[{idx}]"))
            font_uses = tuple(font_uses)

        hashtag_count = content.get("hashtag_count")
        if hashtag_count is None and content.get("hashtags") is not None:
            hashtag_count = len(as_list(content["hashtags"]))

        return cls(
            category=category,
            colors_used=tuple(as_list(colors)) if colors is not None else None,
            fonts_used=font_uses,
            text=content.get("text"),
            content_type=content.get("content_type"),
            character_count=content.get("character_count"),
            hashtag_count=hashtag_count,
        )
