"""Tests for the rule catalog — one section per rule family."""

import pytest

from brand_compliance.compliance.engine import evaluate


def _ids(findings):
    return [f.rule_id for f in findings]


# ═══════════════════════════════════════════════════════
#  Colors
# ═══════════════════════════════════════════════════════

def test_colors_all_in_palette(context, make_asset):
    asset = make_asset("colors", colors_used=["#1A73E8", "#34A853", "#FBBC05", "#FFFFFF"])
    result = evaluate(asset, context)
    assert result.valid
    assert result.violations == []


def test_colors_one_violation_per_disallowed_color(context, make_asset):
    asset = make_asset("colors", colors_used=["#000000", "#1A73E8", "#FF00FF"])
    result = evaluate(asset, context)
    assert not result.valid
    assert _ids(result.violations) == ["brand_color_check", "brand_color_check"]
    assert [v.field for v in result.violations] == ["colors_used[0]", "colors_used[2]"]
    assert result.violations[0].severity == "error"
    assert result.violations[0].value == "#000000"
    assert "#000000" in result.violations[0].message


@pytest.mark.parametrize("color,valid", [
    ("#1A73E8", True),   # primary
    ("#FFFFFF", True),   # neutral background
    ("#34A853", True),   # secondary
    ("#FBBC05", True),   # accent
    ("#202124", False),  # neutral text color is not part of the allowed set
    ("#1a73e8", False),  # exact match only
])
def test_colors_allowed_set_is_union_of_palette(context, make_asset, color, valid):
    result = evaluate(make_asset("colors", colors_used=[color]), context)
    assert result.valid is valid


def test_colors_missing_field_is_nothing_to_check(context, make_asset):
    result = evaluate(make_asset("colors"), context)
    assert result.valid
    assert result.violations == []


def test_colors_empty_palette_flags_every_color(make_asset):
    from brand_compliance.compliance.context import ValidationContext

    ctx = ValidationContext.from_fixture({"brand_genome": {"visual_identity": {"colors": {}}}})
    result = evaluate(make_asset("colors", colors_used=["#123456", "#FFFFFF"]), ctx)
    assert [v.field for v in result.violations] == ["colors_used[0]", "colors_used[1]"]


def test_colors_no_palette_section_is_nothing_to_check(make_asset):
    from brand_compliance.compliance.context import ValidationContext

    ctx = ValidationContext.from_fixture({"brand_genome": {"identity": {"name": "Bare"}}})
    assert evaluate(make_asset("colors", colors_used=["#123456"]), ctx).valid


# ═══════════════════════════════════════════════════════
#  Typography
# ═══════════════════════════════════════════════════════

def test_fonts_approved(context, make_asset):
    asset = make_asset("typography", fonts_used=[{"family": "Inter"}, {"family": "Georgia"}])
    assert evaluate(asset, context).valid


def test_fonts_case_sensitive_and_unknown(context, make_asset):
    asset = make_asset("typography", fonts_used=[{"family": "inter"}, {"family": "Arial"}])
    result = evaluate(asset, context)
    assert _ids(result.violations) == ["brand_font_check", "brand_font_check"]
    assert result.violations[1].field == "fonts_used[1].family"
    assert "Arial" in result.violations[1].message


def test_fonts_empty_typography_flags_every_font(make_asset):
    from brand_compliance.compliance.context import ValidationContext

    ctx = ValidationContext.from_fixture({"brand_genome": {"visual_identity": {"typography": {}}}})
    result = evaluate(make_asset("typography", fonts_used=[{"family": "Comic Sans"}]), ctx)
    assert [v.rule_id for v in result.violations] == ["brand_font_check"]
    assert result.violations[0].value == "Comic Sans"


def test_fonts_plain_strings(context, make_asset):
    result = evaluate(make_asset("typography", fonts_used=["JetBrains Mono", "Helvetica"]), context)
    assert len(result.violations) == 1
    assert result.violations[0].field == "fonts_used[1]"


# ═══════════════════════════════════════════════════════
#  Vocabulary
# ═══════════════════════════════════════════════════════

def test_banned_word_case_insensitive(context, make_asset):
    result = evaluate(make_asset("vocabulary", content={"text": "A CHEAP trick"}), context)
    assert not result.valid
    assert _ids(result.violations) == ["banned_word_check"]
    assert result.violations[0].field == "content.text"


def test_banned_word_is_substring_match(context, make_asset):
    result = evaluate(make_asset("vocabulary", content={"text": "Guaranteed cheapness"}), context)
    # "guarantee" inside "Guaranteed", "cheap" inside "cheapness"
    assert _ids(result.violations) == ["banned_word_check", "banned_word_check"]


def test_avoid_words_warn_and_replacements_suggest(context, make_asset):
    asset = make_asset("vocabulary", content={"text": "Utilize the synergy."})
    result = evaluate(asset, context)
    assert result.valid
    assert _ids(result.warnings) == ["avoid_word_check"]
    assert "preferred vocabulary: invest" in result.warnings[0].message
    assert len(result.suggestions) == 1
    assert result.suggestions[0].type == "replacement"
    assert result.suggestions[0].suggested_value == "use"


def test_vocabulary_without_text(context, make_asset):
    assert evaluate(make_asset("vocabulary", content={}), context).valid


# ═══════════════════════════════════════════════════════
#  FCA
# ═══════════════════════════════════════════════════════

def _promo(text, content_type="investment_promotion"):
    return {"content_type": content_type, "text": text}


def test_fca_valid_with_risk_warning(context, make_asset):
    result = evaluate(make_asset("compliance.fca", content=_promo("Invest today. capital at RISK")), context)
    assert result.valid


def test_fca_missing_risk_warning_is_single_critical(context, make_asset):
    result = evaluate(make_asset("compliance.fca", content=_promo("Invest today.")), context)
    assert len(result.violations) == 1
    v = result.violations[0]
    assert v.rule_id == "fca_risk_warning_required"
    assert v.severity == "critical"


def test_fca_two_claims_plus_missing_warning(context, make_asset):
    text = "Guaranteed returns and risk free growth."
    result = evaluate(make_asset("compliance.fca", content=_promo(text)), context)
    assert _ids(result.violations) == [
        "fca_risk_warning_required",
        "fca_prohibited_claim",
        "fca_prohibited_claim",
    ]
    assert all(v.severity == "critical" for v in result.violations)
    assert [v.value for v in result.violations[1:]] == ["guaranteed returns", "risk free"]


def test_fca_only_applies_to_investment_promotions(context, make_asset):
    result = evaluate(make_asset("compliance.fca", content=_promo("Guaranteed returns", "blog")), context)
    assert result.valid


def test_fca_missing_text_still_requires_warning(context, make_asset):
    result = evaluate(make_asset("compliance.fca", content={"content_type": "investment_promotion"}), context)
    assert _ids(result.violations) == ["fca_risk_warning_required"]


# ═══════════════════════════════════════════════════════
#  Platforms
# ═══════════════════════════════════════════════════════

@pytest.mark.parametrize("count,valid", [(279, True), (280, True), (281, False)])
def test_twitter_character_limit(context, make_asset, count, valid):
    result = evaluate(make_asset("platform.twitter", content={"character_count": count}), context)
    assert result.valid is valid
    if not valid:
        assert _ids(result.violations) == ["twitter_character_limit"]
        assert str(count) in result.violations[0].message


def test_twitter_without_count(context, make_asset):
    assert evaluate(make_asset("platform.twitter", content={"text": "x" * 400}), context).valid


@pytest.mark.parametrize("count,valid", [(5, True), (6, False)])
def test_linkedin_default_hashtag_max(context, make_asset, count, valid):
    result = evaluate(make_asset("platform.linkedin", content={"hashtag_count": count}), context)
    assert result.valid is valid


def test_linkedin_brand_max_and_recommended(genome, make_asset):
    from brand_compliance.compliance.context import ValidationContext

    genome["platform_rules"] = {"linkedin": {"hashtag_strategy": {"max": 3, "recommended": 1}}}
    ctx = ValidationContext.from_fixture({"brand_genome": genome})

    over = evaluate(make_asset("platform.linkedin", content={"hashtag_count": 4}), ctx)
    assert _ids(over.violations) == ["linkedin_hashtag_limit"]
    assert "maximum is 3" in over.violations[0].message

    within = evaluate(make_asset("platform.linkedin", content={"hashtag_count": 2}), ctx)
    assert within.valid
    assert _ids(within.warnings) == ["linkedin_hashtag_recommended"]


def test_linkedin_counts_hashtag_list(context, make_asset):
    tags = [f"#t{i}" for i in range(6)]
    result = evaluate(make_asset("platform.linkedin", content={"hashtags": tags}), context)
    assert _ids(result.violations) == ["linkedin_hashtag_limit"]
