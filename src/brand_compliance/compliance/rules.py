"""
Rule Catalog
=============
Named, categorized compliance predicates.

Each rule is registered against a trigger token and fires for every
asset whose category contains that token, so a compound category such
as "compliance.fca.risk_warning" still routes to the "compliance.fca"
rule. Adding a rule means registering a new (trigger, predicate) pair;
the engine itself never changes.

Rules are pure: (asset, context) → iterable of findings. Missing
optional input means "nothing to check", never an error.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from brand_compliance.compliance.context import ContentAsset, ValidationContext
from brand_compliance.compliance.findings import Finding, Suggestion, ValidationWarning, Violation

RulePredicate = Callable[[ContentAsset, ValidationContext], Iterable[Finding]]

TWITTER_CHARACTER_LIMIT = 280
DEFAULT_LINKEDIN_HASHTAG_MAX = 5
FCA_RISK_PHRASE = "Capital at risk"
FCA_PROHIBITED_CLAIMS = ("guaranteed returns", "risk-free", "risk free")


@dataclass(frozen=True)
class Rule:
    """One catalog entry."""

    name: str
    trigger: str
    check: RulePredicate
    rule_ids: tuple[str, ...] = ()
    description: str = ""

    def matches(self, category: str) -> bool:
        return self.trigger in category

    def answers_to(self, identifier: str) -> bool:
        return identifier == self.name or identifier in self.rule_ids


class RuleCatalog:
    """Ordered registry of rules. Declaration order is evaluation order."""

    def __init__(self, rules: Iterable[Rule] = ()):
        self._rules: list[Rule] = []
        for rule in rules:
            self.add(rule)

    def add(self, rule: Rule) -> Rule:
        if any(r.name == rule.name for r in self._rules):
            raise ValueError(f"Duplicate rule name: {rule.name}")
        self._rules.append(rule)
        return rule

    def register(
        self,
        trigger: str,
        name: str | None = None,
        rule_ids: Iterable[str] = (),
        description: str = "",
    ) -> Callable[[RulePredicate], RulePredicate]:
        """Decorator form of `add`."""
        if not trigger:
            raise ValueError("Rule trigger token must be non-empty")

        def decorator(fn: RulePredicate) -> RulePredicate:
            doc = (fn.__doc__ or "").strip()
            self.add(Rule(
                name=name or fn.__name__,
                trigger=trigger,
                check=fn,
                rule_ids=tuple(rule_ids),
                description=description or (doc.splitlines()[0] if doc else ""),
            ))
            return fn

        return decorator

    def matching(self, category: str) -> list[Rule]:
        """Rules whose trigger token is contained in `category`."""
        return [r for r in self._rules if r.matches(category)]

    def get(self, name: str) -> Rule | None:
        return next((r for r in self._rules if r.name == name), None)

    def copy(self) -> "RuleCatalog":
        return RuleCatalog(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


DEFAULT_CATALOG = RuleCatalog()


# ═══════════════════════════════════════════════════════
#  Visual identity
# ═══════════════════════════════════════════════════════
@DEFAULT_CATALOG.register("colors", rule_ids=["brand_color_check"])
def brand_colors(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """Every color used must belong to the brand palette."""
    if asset.colors_used is None or ctx.brand is None or not ctx.brand.has_palette:
        return
    allowed = ctx.brand.allowed_colors
    for idx, color in enumerate(asset.colors_used):
        if color not in allowed:
            yield Violation(
                rule_id="brand_color_check",
                severity="error",
                message=f"Color {color} is not in brand palette",
                field=f"colors_used[{idx}]",
                value=color,
            )


@DEFAULT_CATALOG.register("typography", rule_ids=["brand_font_check"])
def brand_fonts(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """Every font family used must be the brand's primary, secondary or monospace family."""
    if asset.fonts_used is None or ctx.brand is None or not ctx.brand.has_typography:
        return
    approved = ctx.brand.approved_fonts
    for font in asset.fonts_used:
        if font.family not in approved:
            yield Violation(
                rule_id="brand_font_check",
                severity="error",
                message=f"Font '{font.family}' is not an approved brand font",
                field=font.field,
                value=font.family,
            )


# ═══════════════════════════════════════════════════════
#  Verbal identity
# ═══════════════════════════════════════════════════════
@DEFAULT_CATALOG.register(
    "vocabulary",
    rule_ids=["banned_word_check", "avoid_word_check"],
)
def brand_vocabulary(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """Banned words block; avoid-list words warn; replacements are suggested."""
    if not asset.text or ctx.brand is None:
        return
    # Plain substring match: "class" also hits "classic".
    text = asset.text.lower()

    for word in ctx.brand.banned_words:
        if word.lower() in text:
            yield Violation(
                rule_id="banned_word_check",
                severity="error",
                message=f"Content contains banned word: {word}",
                field="content.text",
                value=word,
            )

    preferred = ", ".join(ctx.brand.preferred_words)
    for word in ctx.brand.avoid_words:
        if word.lower() in text:
            message = f"Content uses a word the brand prefers to avoid: {word}"
            if preferred:
                message += f" (preferred vocabulary: {preferred})"
            yield ValidationWarning(
                rule_id="avoid_word_check",
                message=message,
                field="content.text",
            )

    for source, target in ctx.brand.replacements:
        if source.lower() in text:
            yield Suggestion(
                type="replacement",
                message=f"Replace '{source}' with '{target}'",
                suggested_value=target,
            )


# ═══════════════════════════════════════════════════════
#  Regulatory
# ═══════════════════════════════════════════════════════
@DEFAULT_CATALOG.register(
    "compliance.fca",
    rule_ids=["fca_risk_warning_required", "fca_prohibited_claim"],
)
def fca_investment_promotion(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """FCA financial promotion rules for investment_promotion content."""
    if asset.content_type != "investment_promotion":
        return
    text = (asset.text or "").lower()

    if FCA_RISK_PHRASE.lower() not in text:
        yield Violation(
            rule_id="fca_risk_warning_required",
            severity="critical",
            message="Investment promotions require risk warning under FCA COBS 4",
            field="content",
        )

    for claim in FCA_PROHIBITED_CLAIMS:
        if claim in text:
            yield Violation(
                rule_id="fca_prohibited_claim",
                severity="critical",
                message=f"Claims of '{claim}' are prohibited under FCA rules",
                field="content.text",
                value=claim,
            )


# ═══════════════════════════════════════════════════════
#  Platform
# ═══════════════════════════════════════════════════════
@DEFAULT_CATALOG.register("platform.twitter", rule_ids=["twitter_character_limit"])
def twitter_character_limit(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """Posts must fit in 280 characters."""
    count = asset.character_count
    if count is not None and count > TWITTER_CHARACTER_LIMIT:
        yield Violation(
            rule_id="twitter_character_limit",
            severity="error",
            message=(
                f"Twitter post exceeds {TWITTER_CHARACTER_LIMIT} character limit "
                f"({count} characters)"
            ),
            field="content.text",
            value=count,
        )


@DEFAULT_CATALOG.register(
    "platform.linkedin",
    rule_ids=["linkedin_hashtag_limit", "linkedin_hashtag_recommended"],
)
def linkedin_hashtags(asset: ContentAsset, ctx: ValidationContext) -> Iterator[Finding]:
    """Hashtag count must not exceed the brand's LinkedIn maximum (default 5)."""
    count = asset.hashtag_count
    if count is None:
        return
    limit = DEFAULT_LINKEDIN_HASHTAG_MAX
    recommended = None
    if ctx.brand is not None:
        limit = ctx.brand.hashtag_max("linkedin", DEFAULT_LINKEDIN_HASHTAG_MAX)
        rule = ctx.brand.platform_rules.get("linkedin")
        recommended = rule.hashtag_recommended if rule else None

    if count > limit:
        yield Violation(
            rule_id="linkedin_hashtag_limit",
            severity="error",
            message=f"LinkedIn post has {count} hashtags, maximum is {limit}",
            field="content.hashtags",
            value=count,
        )
    elif recommended is not None and count > recommended:
        yield ValidationWarning(
            rule_id="linkedin_hashtag_recommended",
            message=f"LinkedIn post has {count} hashtags, brand recommends {recommended}",
            field="content.hashtags",
        )
