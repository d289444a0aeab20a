"""catpack.json 파싱과 variant 기간 판정 테스트."""

from datetime import date

import pytest

from catpack.descriptor import MonthDay, Variant, load_descriptor, parse_descriptor
from catpack.errors import NotFoundError, ParseError


def _variant(sm, sd, em, ed, path="v.png"):
    return Variant(MonthDay(sm, sd), MonthDay(em, ed), path)


def test_load_descriptor(winter_pack):
    desc = load_descriptor(winter_pack)
    assert desc.name == "Winter"
    assert desc.default == "default.png"
    assert desc.variants == [_variant(12, 1, 1, 31, "winter.png")]


def test_missing_metadata_is_not_found(tmp_path):
    with pytest.raises(NotFoundError):
        load_descriptor(tmp_path)
    # 내장 예외로도 잡힌다
    with pytest.raises(FileNotFoundError):
        load_descriptor(tmp_path)


def test_malformed_json_is_parse_error(make_pack):
    pack = make_pack(None, raw="{ not json")
    with pytest.raises(ParseError):
        load_descriptor(pack)


@pytest.mark.parametrize("data", [
    [],
    {"variants": []},
    {"default": 3},
    {"default": "d.png", "variants": {}},
    {"default": "d.png", "variants": [{"startTime": {"month": 1}, "endTime": {"month": 2, "day": 1}, "path": "a"}]},
    {"default": "d.png", "variants": [{"startTime": {"month": 13, "day": 1}, "endTime": {"month": 2, "day": 1}, "path": "a"}]},
    {"default": "d.png", "variants": [{"startTime": {"month": 1, "day": 1}, "endTime": {"month": 2, "day": 1}}]},
])
def test_bad_shapes_are_parse_errors(data):
    with pytest.raises(ParseError):
        parse_descriptor(data)


def test_variants_optional_and_dot_slash_stripped():
    desc = parse_descriptor({
        "default": "./random",
        "variants": [{"startTime": {"month": 1, "day": 1},
                      "endTime": {"month": 1, "day": 2}, "path": "./a/b.png"}],
    })
    assert desc.default == "random"
    assert desc.variants[0].path == "a/b.png"
    assert parse_descriptor({"default": "d.png"}).variants == []


def test_range_inclusive():
    v = _variant(3, 10, 3, 20)
    assert v.contains(date(2026, 3, 10))
    assert v.contains(date(2026, 3, 20))
    assert not v.contains(date(2026, 3, 9))
    assert not v.contains(date(2026, 3, 21))


def test_year_wraparound():
    v = _variant(12, 1, 1, 31)
    assert v.wraps_year
    assert v.contains(date(2026, 12, 1))
    assert v.contains(date(2026, 12, 31))
    assert v.contains(date(2026, 1, 15))
    assert v.contains(date(2027, 1, 31))
    assert not v.contains(date(2026, 2, 1))
    assert not v.contains(date(2026, 11, 30))
    assert not v.contains(date(2026, 6, 1))


def test_date_range_bumps_end_year():
    start, end = _variant(12, 1, 2, 28).date_range(2026)
    assert start == date(2026, 12, 1)
    assert end == date(2027, 2, 28)


def test_feb_29_rolls_over_in_common_years():
    v = _variant(2, 29, 2, 29)
    assert v.contains(date(2026, 3, 1))
    assert not v.contains(date(2026, 2, 28))
    assert v.contains(date(2028, 2, 29))
    assert not v.contains(date(2028, 3, 1))


def test_first_declared_match_wins():
    desc = parse_descriptor({
        "default": "d.png",
        "variants": [
            {"startTime": {"month": 12, "day": 20}, "endTime": {"month": 12, "day": 26}, "path": "xmas.png"},
            {"startTime": {"month": 12, "day": 1}, "endTime": {"month": 2, "day": 28}, "path": "winter.png"},
        ],
    })
    assert desc.match(date(2026, 12, 24)).path == "xmas.png"
    assert desc.match(date(2026, 12, 27)).path == "winter.png"
    assert desc.match(date(2026, 7, 1)) is None


def test_non_utf8_metadata_is_parse_error(tmp_path):
    (tmp_path / "catpack.json").write_bytes(b'{"default": "\xff\xfe.png"}')
    with pytest.raises(ParseError):
        load_descriptor(tmp_path)
