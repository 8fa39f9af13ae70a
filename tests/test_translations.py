"""Tests for latex_quiz.constants.translations"""

from latex_quiz.constants.translations import (
    SUPPORTED_LANGUAGES,
    TRANSLATIONS,
    get_table,
    translate,
)
from latex_quiz.core.models import Difficulty, ScoreTier


def test_english_and_japanese_are_supported():
    assert {"en", "ja"} <= set(SUPPORTED_LANGUAGES)


def test_tables_share_the_same_keys():
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["ja"])


def test_every_difficulty_and_tier_has_a_label():
    for language in SUPPORTED_LANGUAGES:
        table = get_table(language)
        for difficulty in Difficulty:
            assert difficulty.value in table
        for tier in ScoreTier:
            assert f"tier_{tier.value}" in table


def test_translate_looks_up_and_falls_back():
    assert translate("ja", "submit") == "送信"
    assert translate("fr", "submit") == "Submit"
    assert translate("en", "missing-key") == "missing-key"


def test_score_tier_thresholds():
    assert ScoreTier.for_score(10, 10) is ScoreTier.PERFECT
    assert ScoreTier.for_score(3, 4) is ScoreTier.GREAT
    assert ScoreTier.for_score(6, 10) is ScoreTier.GOOD
    assert ScoreTier.for_score(5, 10) is ScoreTier.FAIR
    assert ScoreTier.for_score(3, 10) is ScoreTier.FAIR
    assert ScoreTier.for_score(1, 4) is ScoreTier.KEEP_TRYING
    assert ScoreTier.for_score(0, 0) is ScoreTier.KEEP_TRYING
