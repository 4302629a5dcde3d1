import pytest

from item_groups.ingest.coded_value import CodedValue, decode_coded_value, parse_link_id, parse_question


def test_decode_splits_link_id_and_question():
    assert decode_coded_value("/1/10^Q1^") == CodedValue(link_id="/1/10", question="Q1")


def test_decode_ignores_fields_after_second_caret():
    value = decode_coded_value("/1/10/100^Smoker?^Y^extra^fields")

    assert value.link_id == "/1/10/100"
    assert value.question == "Smoker?"


def test_question_runs_to_end_without_second_caret():
    assert parse_question("/1/10^Free text") == "Free text"
    assert parse_link_id("/1/10^Free text") == "/1/10"


@pytest.mark.parametrize("raw", [None, "", "/1/10 no caret"])
def test_malformed_records_decode_to_empty_fields(raw):
    assert decode_coded_value(raw) == CodedValue(link_id="", question="")


def test_leading_caret_gives_empty_link_id():
    value = decode_coded_value("^Orphan question^")

    assert value.link_id == ""
    assert value.question == "Orphan question"


def test_empty_fields_between_carets():
    assert decode_coded_value("/1/10^^") == CodedValue(link_id="/1/10", question="")
