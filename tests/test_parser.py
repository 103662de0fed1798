# tests/test_parser.py
from __future__ import annotations

import pytest

from src.exceptions import PronounParseError, StructuralConflictError
from src.pronouns import (
    CommentRecord,
    NoneRecord,
    PronounSet,
    PronounSetRecord,
    RecordKind,
    Tag,
    WildcardRecord,
    parse,
    parse_all,
    parse_one,
    validate_records,
)
from src.pronouns import parser as parser_mod

# ---------------------------------------------------------------------------
# Valid pronoun sets
# ---------------------------------------------------------------------------


def test_two_component_set():
    rec = parse("she/her")
    assert isinstance(rec, PronounSetRecord)
    assert rec.kind is RecordKind.PRONOUN_SET
    ps = rec.pronoun_set
    assert (ps.subject, ps.object) == ("she", "her")
    assert ps.possessive_determiner is None
    assert ps.possessive_pronoun is None
    assert ps.reflexive is None
    assert ps.tags == frozenset()
    assert rec.comment is None


def test_full_set_with_preferred_tag():
    ps = parse("he/him/his/his/himself;preferred").pronoun_set
    assert ps.components() == ("he", "him", "his", "his", "himself")
    assert ps.is_preferred


def test_four_components_fill_left_to_right():
    ps = parse("ze/zir/zir/zirself").pronoun_set
    assert ps.possessive_determiner == "zir"
    assert ps.possessive_pronoun == "zirself"
    assert ps.reflexive is None


def test_multiple_tags_collapse_duplicates():
    ps = parse("they/them;preferred;plural;preferred").pronoun_set
    assert ps.tags == frozenset({Tag.PREFERRED, Tag.PLURAL})
    assert ps.is_plural


def test_case_and_whitespace_insensitive():
    loud = parse("SHE / HER")
    quiet = parse("she/her")
    assert loud.pronoun_set == quiet.pronoun_set
    assert loud.raw == "SHE / HER"
    assert quiet.raw == "she/her"


def test_raw_preserved_verbatim():
    rec = parse("  SHE /    HER # Hi There ")
    assert rec.raw == "  SHE /    HER # Hi There "
    assert rec.comment == "Hi There"


def test_duplicate_semicolons_tolerated():
    rec = parse("he/him;;;preferred")
    assert rec.raw == "he/him;;;preferred"
    assert rec.pronoun_set.tags == frozenset({Tag.PREFERRED})


def test_trailing_semicolon_tolerated():
    assert parse("she/her;").pronoun_set.tags == frozenset()


def test_it_its_alias_expands():
    ps = parse("it/its").pronoun_set
    assert ps.components() == ("it", "it", "its", "its", "itself")


def test_alias_keeps_tag_suffix():
    ps = parse("IT/ITS;preferred").pronoun_set
    assert ps.reflexive == "itself"
    assert ps.is_preferred


def test_alias_table_is_data_driven(monkeypatch):
    monkeypatch.setattr(
        parser_mod,
        "CONVERSIONS",
        (("fae/faer", "fae/faer/faer/faers/faerself"), ("it/its", "it/it/its/its/itself")),
    )
    ps = parse("fae/faer;plural").pronoun_set
    assert ps.components() == ("fae", "faer", "faer", "faers", "faerself")
    assert ps.tags == frozenset({Tag.PLURAL})


def test_only_first_matching_alias_applies(monkeypatch):
    monkeypatch.setattr(
        parser_mod,
        "CONVERSIONS",
        (
            ("it/its", "it/it/its/its/itself"),
            # same key, later in the table: never reached
            ("it/its", "x/y"),
            # would match the expanded text if conversions were chained
            ("it/it/its/its/itself", "he/him"),
        ),
    )
    ps = parse("it/its;preferred").pronoun_set
    assert ps.components() == ("it", "it", "its", "its", "itself")
    assert ps.is_preferred


def test_alias_requires_whole_pronoun_part():
    # "it/its" is a prefix of these strings but not of their pronoun part
    ps = parse("it/itself").pronoun_set
    assert ps.components() == ("it", "itself")

    ps = parse("it/its/its/itself").pronoun_set
    assert ps.components() == ("it", "its", "its", "itself")
    assert ps.reflexive is None


def test_alias_with_space_before_tags():
    ps = parse("it/its ; plural").pronoun_set
    assert ps.reflexive == "itself"
    assert ps.tags == frozenset({Tag.PLURAL})


def test_parse_one_is_parse():
    assert parse_one("she/her") == parse("she/her")


# ---------------------------------------------------------------------------
# Wildcard / none / comment
# ---------------------------------------------------------------------------


def test_wildcard():
    rec = parse("*")
    assert isinstance(rec, WildcardRecord)
    assert rec.kind is RecordKind.WILDCARD
    assert not hasattr(rec, "pronoun_set")


def test_none():
    rec = parse("  !  ")
    assert isinstance(rec, NoneRecord)
    assert rec.comment is None


def test_comment_only():
    rec = parse("# This is just a comment")
    assert isinstance(rec, CommentRecord)
    assert rec.comment == "This is just a comment"


def test_comments_on_records():
    rec = parse("she/her # preferred pronouns")
    assert rec.pronoun_set.subject == "she"
    assert rec.comment == "preferred pronouns"

    rec = parse("* # accepts any")
    assert isinstance(rec, WildcardRecord)
    assert rec.comment == "accepts any"


def test_comment_split_on_first_hash():
    rec = parse("she/her # a # b")
    assert rec.comment == "a # b"


def test_empty_comment_after_hash_is_empty_string():
    rec = parse("she/her #")
    assert rec.comment == ""


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, reason",
    [
        ("", "record cannot be empty"),
        ("   ", "record cannot be empty"),
        ("#", "record cannot be empty"),
        ("#   ", "record cannot be empty"),
        ("she", "pronoun set must have at least subject and object"),
        ("she/her/", "pronoun component cannot be empty"),
        ("/her", "pronoun component cannot be empty"),
        ("she//her", "pronoun component cannot be empty"),
        ("a/b/c/d/e/f", "pronoun set has too many components, max 5"),
        (";preferred", "pronoun set cannot be empty"),
        ("she/her;fancy", "unknown tag: fancy"),
        ("she/h3r", "invalid pronoun value"),
        ("she/hér", "invalid pronoun value"),
        ("she-her/them", "invalid pronoun value"),
        ("*;preferred", "pronoun set must have at least subject and object"),
    ],
)
def test_malformed_records_rejected(raw, reason):
    with pytest.raises(PronounParseError) as excinfo:
        parse(raw)
    assert excinfo.value.reason.startswith(reason)
    assert not isinstance(excinfo.value, StructuralConflictError)


def test_error_carries_raw():
    with pytest.raises(PronounParseError) as excinfo:
        parse("SHE/HER;Bogus")
    assert excinfo.value.raw == "SHE/HER;Bogus"
    assert excinfo.value.reason == "unknown tag: bogus"


def test_none_input_rejected():
    with pytest.raises(PronounParseError):
        parse(None)  # type: ignore[arg-type]


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse("she")


# ---------------------------------------------------------------------------
# Batch validation
# ---------------------------------------------------------------------------


def test_validate_empty_is_noop():
    validate_records([])
    validate_records(None)


def test_validate_lone_none_ok():
    validate_records([parse("!")])


def test_validate_none_with_others_fails():
    with pytest.raises(StructuralConflictError) as excinfo:
        validate_records([parse("!"), parse("she/her")])
    assert "none record must be the only record" in str(excinfo.value)


def test_validate_none_with_comment_fails():
    # Comments count as records for the exclusivity rule
    with pytest.raises(StructuralConflictError):
        validate_records([parse("# hi"), parse("!")])


def test_parse_all_surfaces_parse_error_before_structure():
    with pytest.raises(PronounParseError) as excinfo:
        parse_all(["!", "she/her", "bogus"])
    assert not isinstance(excinfo.value, StructuralConflictError)


def test_parse_all_returns_records_in_order():
    recs = parse_all(["she/her", "*", "# x"])
    assert [r.kind for r in recs] == [RecordKind.PRONOUN_SET, RecordKind.WILDCARD, RecordKind.COMMENT]
    assert recs[0].pronoun_set == PronounSet("she", "her")
