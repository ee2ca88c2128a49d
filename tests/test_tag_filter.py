from cityradius.search.tags import filter_by_tags_and_active, parse_tag_list

from conftest import CENTER, EAST_HALF, EAST_ONE, FAR_AWAY, NORTH_ONE


def _guids(addresses):
    return [a.guid for a in addresses]


def test_filter_ignores_active_flag_when_none(catalog):
    out = filter_by_tags_and_active(catalog, ["port"])
    assert _guids(out) == [CENTER, EAST_HALF, EAST_ONE]


def test_filter_applies_active_flag(catalog):
    assert _guids(filter_by_tags_and_active(catalog, ["port"], True)) == [CENTER, EAST_ONE]
    assert _guids(filter_by_tags_and_active(catalog, ["port"], False)) == [EAST_HALF]


def test_filter_returns_each_address_once_by_default(catalog):
    out = filter_by_tags_and_active(catalog, ["port", "market", "capital"])
    assert _guids(out) == [CENTER, EAST_HALF, EAST_ONE, NORTH_ONE, FAR_AWAY]


def test_filter_legacy_mode_repeats_address_per_matched_tag(catalog):
    out = filter_by_tags_and_active(catalog, ["port", "market"], dedupe=False)
    assert _guids(out) == [CENTER, EAST_HALF, EAST_ONE, EAST_ONE, NORTH_ONE]


def test_filter_tags_are_case_sensitive_and_unknown_tags_match_nothing(catalog):
    assert filter_by_tags_and_active(catalog, ["PORT"]) == []
    assert filter_by_tags_and_active(catalog, ["nope"]) == []
    assert filter_by_tags_and_active([], ["port"]) == []


def test_parse_tag_list_trims_and_drops_blanks():
    assert parse_tag_list(" port, market ,,") == ["port", "market"]
    assert parse_tag_list("") == []
    assert parse_tag_list(None) == []
