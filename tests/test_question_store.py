"""
Tests for latex_quiz.core.question_store

Test Coverage:
- load_questions_from_text(): parsing, normalization, order, header aliases
- Structural failures (QuestionBankParseError)
- Schema failures (QuestionBankValidationError) with no partial result
- builtin_questions(), QuestionStore helpers, get_question_store() caching
"""

from pathlib import Path

import pytest

from latex_quiz.constants.quiz_constants import BUILTIN_SOURCE
from latex_quiz.core.models import Difficulty, QuestionRecord
from latex_quiz.core.question_store import (
    QuestionBankParseError,
    QuestionBankValidationError,
    QuestionStore,
    builtin_questions,
    get_question_store,
    load_questions_from_file,
    load_questions_from_text,
)

VALID_CSV = (
    "markup,answers,difficulty\n"
    "$\\alpha$,alpha,easy\n"
    '$ \\leq $," leq , le ",medium\n'
    '"$\\frac{a}\n{b}$",frac{a}{b},hard\n'
)


def test_load_produces_one_record_per_row_in_order():
    """Each data row becomes a record, in source order."""
    records = load_questions_from_text(VALID_CSV)

    assert [r.difficulty for r in records] == [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]
    assert all(isinstance(r, QuestionRecord) for r in records)


def test_markup_delimiters_and_whitespace_are_stripped():
    records = load_questions_from_text(VALID_CSV)

    assert records[0].markup == "\\alpha"
    assert records[1].markup == "\\leq"
    # Multi-line quoted field keeps its inner newline.
    assert records[2].markup == "\\frac{a}\n{b}"


def test_answers_are_split_and_trimmed():
    records = load_questions_from_text(VALID_CSV)

    assert records[1].accepted_answers == ("leq", "le")
    for record in records:
        assert all(answer == answer.strip() for answer in record.accepted_answers)


def test_duplicate_answers_keep_first_occurrence():
    text = "markup,answers,difficulty\n$\\to$,\"to, rightarrow, to\",easy\n"

    (record,) = load_questions_from_text(text)

    assert record.accepted_answers == ("to", "rightarrow")
    assert record.primary_answer == "to"


def test_header_aliases_are_accepted():
    text = "latex,correctAnswers,level\n$\\sum$,sum,easy\n"

    (record,) = load_questions_from_text(text)

    assert record.markup == "\\sum"
    assert record.accepted_answers == ("sum",)


def test_blank_lines_are_skipped():
    text = "markup,answers,difficulty\n\n$\\pi$,pi,easy\n\n$\\mu$,mu,easy\n"

    records = load_questions_from_text(text)

    assert [r.markup for r in records] == ["\\pi", "\\mu"]


def test_unknown_difficulty_fails_whole_load():
    """A single bad difficulty rejects the batch."""
    text = (
        "markup,answers,difficulty\n"
        "$\\alpha$,alpha,easy\n"
        "$\\beta$,beta,expert\n"
    )

    with pytest.raises(QuestionBankValidationError) as excinfo:
        load_questions_from_text(text)

    errors = excinfo.value.row_errors
    assert len(errors) == 1
    assert errors[0].row_number == 2
    assert "difficulty" in errors[0].messages[0]


def test_difficulty_is_case_sensitive():
    text = "markup,answers,difficulty\n$\\alpha$,alpha,Easy\n"

    with pytest.raises(QuestionBankValidationError):
        load_questions_from_text(text)


def test_markup_without_delimiters_is_rejected():
    text = "markup,answers,difficulty\n\\alpha,alpha,easy\n"

    with pytest.raises(QuestionBankValidationError, match=r"\$\.\.\.\$"):
        load_questions_from_text(text)


def test_empty_markup_is_rejected():
    text = "markup,answers,difficulty\n$  $,alpha,easy\n"

    with pytest.raises(QuestionBankValidationError, match="must not be empty"):
        load_questions_from_text(text)


@pytest.mark.parametrize("answers", ["", " , ,"])
def test_empty_answers_are_rejected(answers):
    text = f'markup,answers,difficulty\n$\\alpha$,"{answers}",easy\n'

    with pytest.raises(QuestionBankValidationError, match="at least one accepted answer"):
        load_questions_from_text(text)


def test_validation_error_lists_every_offending_row():
    text = (
        "markup,answers,difficulty\n"
        "alpha,alpha,easy\n"
        "$\\beta$,beta,easy\n"
        "$\\gamma$,gamma,impossible\n"
    )

    with pytest.raises(QuestionBankValidationError) as excinfo:
        load_questions_from_text(text)

    assert [e.row_number for e in excinfo.value.row_errors] == [1, 3]
    assert [e.line_number for e in excinfo.value.row_errors] == [2, 4]
    assert "2 row(s)" in str(excinfo.value)


def test_unterminated_quote_is_a_parse_error():
    text = 'markup,answers,difficulty\n"$\\alpha$,alpha,easy\n'

    with pytest.raises(QuestionBankParseError):
        load_questions_from_text(text)


def test_inconsistent_field_count_is_a_parse_error():
    text = "markup,answers,difficulty\n$\\alpha$,alpha\n"

    with pytest.raises(QuestionBankParseError, match="expected 3 fields"):
        load_questions_from_text(text)


def test_missing_column_is_a_parse_error():
    text = "markup,difficulty\n$\\alpha$,easy\n"

    with pytest.raises(QuestionBankParseError, match="answers"):
        load_questions_from_text(text)


def test_empty_input_is_a_parse_error():
    with pytest.raises(QuestionBankParseError, match="header"):
        load_questions_from_text("")


def test_load_from_file_tolerates_bom(tmp_path: Path):
    path = tmp_path / "bank.csv"
    path.write_text("\ufeffmarkup,answers,difficulty\n$\\int$,int,easy\n", encoding="utf-8")

    (record,) = load_questions_from_file(path)

    assert record.markup == "\\int"


def test_packaged_question_bank_is_valid():
    store = get_question_store()

    assert len(store) > 0
    assert set(store.available_difficulties()) == set(Difficulty)
    assert store.count_by_difficulty()[Difficulty.EASY] >= 10


def test_get_question_store_is_cached():
    assert get_question_store() is get_question_store()
    assert get_question_store(BUILTIN_SOURCE) is get_question_store(BUILTIN_SOURCE)


def test_builtin_questions_follow_the_same_contract():
    records = builtin_questions()

    assert records[0].markup == "\\int"
    assert {r.difficulty for r in records} == set(Difficulty)
    leq = next(r for r in records if r.markup == "\\leq")
    assert leq.accepted_answers == ("le", "leq")


def test_builtin_hard_question_blanks_out_the_operator():
    hard = [r for r in builtin_questions() if r.difficulty is Difficulty.HARD]

    assert [r.markup for r in hard] == [r"a + \color{gray}{} + b"]
    assert hard[0].accepted_answers == ("cdot",)
    assert "\\cdot" not in hard[0].markup


def test_question_store_helpers():
    records = load_questions_from_text(VALID_CSV)
    store = QuestionStore(records)

    assert len(store) == 3
    assert list(store) == list(records)
    assert store.filter_by_difficulty(Difficulty.MEDIUM) == (records[1],)
    assert store.count_by_difficulty() == {
        Difficulty.EASY: 1,
        Difficulty.MEDIUM: 1,
        Difficulty.HARD: 1,
    }


def test_available_difficulties_skips_empty_ones():
    store = QuestionStore(load_questions_from_text("markup,answers,difficulty\n$\\pi$,pi,hard\n"))

    assert store.available_difficulties() == [Difficulty.HARD]


def test_records_are_immutable():
    (record,) = load_questions_from_text("markup,answers,difficulty\n$\\pi$,pi,hard\n")

    with pytest.raises(Exception):
        record.markup = "\\mu"
