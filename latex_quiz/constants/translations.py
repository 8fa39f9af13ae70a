"""User-facing string tables keyed by language code."""

from __future__ import annotations

DEFAULT_LANGUAGE: str = "en"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "title": "LaTeX Symbol Quiz",
        "selectDifficulty": "Select difficulty to begin:",
        "easy": "Low",
        "medium": "Mid",
        "hard": "High",
        "submit": "Submit",
        "correct": "Correct!",
        "incorrect": "Incorrect.",
        "correctAnswer": "Correct answer",
        "score": "Your score",
        "back": "Back to Start",
        "question": "Question",
        "of": "of",
        "placeholder": "Enter LaTeX command",
        "noQuestions": "No questions available",
        "tier_perfect": "Perfect!",
        "tier_great": "Great job!",
        "tier_good": "Good work!",
        "tier_fair": "Not bad!",
        "tier_keep_trying": "Keep practicing!",
    },
    "ja": {
        "title": "LaTeX記号クイズ",
        "selectDifficulty": "難易度を選んで開始：",
        "easy": "初級",
        "medium": "中級",
        "hard": "上級",
        "submit": "送信",
        "correct": "正解！",
        "incorrect": "不正解。",
        "correctAnswer": "正しい答え",
        "score": "あなたの得点",
        "back": "トップに戻る",
        "question": "第",
        "of": "問 / 全",
        "placeholder": "LaTeXコマンドを入力",
        "noQuestions": "問題がありません",
        "tier_perfect": "満点！",
        "tier_great": "すばらしい！",
        "tier_good": "よくできました！",
        "tier_fair": "まずまず！",
        "tier_keep_trying": "もう一度挑戦しよう！",
    },
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(TRANSLATIONS)


def get_table(language: str) -> dict[str, str]:
    """Return the string table for ``language``, falling back to English."""
    return TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])


def translate(language: str, key: str) -> str:
    table = get_table(language)
    if key in table:
        return table[key]
    return TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
