"""
Tests for the brace-depth field extractor against OpenWeatherMap-shaped bodies,
including truncated and malformed input.
"""
from skycast.services.extract import (
    extract_array_items,
    extract_first_array_field,
    extract_nested_number,
    extract_nested_string,
    extract_number,
    extract_object,
    extract_string,
)

CURRENT_BODY = (
    '{"coord":{"lon":-0.1257,"lat":51.5085},'
    '"weather":[{"id":803,"main":"Clouds","description":"broken clouds","icon":"04d"}],'
    '"base":"stations",'
    '"main":{"temp":14.52,"feels_like":13.9,"pressure":1012,"humidity":72},'
    '"visibility":10000,"wind":{"speed":4.63,"deg":250},'
    '"dt":1700000000,'
    '"sys":{"type":2,"id":2075535,"country":"GB","sunrise":1699945200,"sunset":1699977600},'
    '"timezone":0,"id":2643743,"name":"London","cod":200}'
)


# ---------------------------------------------------------------------------
# extract_string
# ---------------------------------------------------------------------------

def test_extract_string_top_level():
    assert extract_string(CURRENT_BODY, "name") == "London"
    assert extract_string(CURRENT_BODY, "base") == "stations"


def test_extract_string_tolerates_whitespace():
    doc = '{ "name" :   "New York" }'
    assert extract_string(doc, "name") == "New York"


def test_extract_string_missing_key_is_empty():
    assert extract_string(CURRENT_BODY, "nope") == ""


def test_extract_string_unterminated_value_is_empty():
    assert extract_string('{"name":"Lond', "name") == ""
    assert extract_string('{"name":', "name") == ""
    assert extract_string('{"name"', "name") == ""


def test_extract_string_first_occurrence_wins():
    doc = '{"name":"first","other":{"name":"second"}}'
    assert extract_string(doc, "name") == "first"


# ---------------------------------------------------------------------------
# extract_number
# ---------------------------------------------------------------------------

def test_extract_number_integer_and_float():
    assert extract_number(CURRENT_BODY, "dt") == "1700000000"
    assert extract_number(CURRENT_BODY, "visibility") == "10000"
    assert extract_number('{"temp": -3.5}', "temp") == "-3.5"


def test_extract_number_exponent():
    assert extract_number('{"v":1.5e+3}', "v") == "1.5e+3"


def test_extract_number_is_not_validated():
    assert extract_number('{"v":1.2.3}', "v") == "1.2.3"


def test_extract_number_non_numeric_value_is_none():
    assert extract_number('{"name":"London"}', "name") is None
    assert extract_number('{"v":null}', "v") is None


def test_extract_number_missing_key_is_none():
    assert extract_number(CURRENT_BODY, "rain") is None


def test_extract_number_at_end_of_document():
    assert extract_number('{"dt":', "dt") is None
    assert extract_number('{"dt":   ', "dt") is None
    assert extract_number('"dt":42', "dt") == "42"


# ---------------------------------------------------------------------------
# extract_object / nested
# ---------------------------------------------------------------------------

def test_extract_object_returns_balanced_fragment():
    assert extract_object('{"a":{"b":{"c":1}},"d":2}', "a") == '{"b":{"c":1}}'


def test_extract_nested_number():
    assert extract_nested_number(CURRENT_BODY, "main", "temp") == "14.52"
    assert extract_nested_number(CURRENT_BODY, "main", "humidity") == "72"
    assert extract_nested_number(CURRENT_BODY, "wind", "speed") == "4.63"
    assert extract_nested_number(CURRENT_BODY, "sys", "sunrise") == "1699945200"


def test_extract_nested_number_does_not_leak_outside_parent():
    doc = '{"main":{"temp":10},"humidity":55}'
    assert extract_nested_number(doc, "main", "humidity") is None


def test_extract_nested_string():
    assert extract_nested_string(CURRENT_BODY, "sys", "country") == "GB"
    assert extract_nested_string(CURRENT_BODY, "missing", "country") == ""


def test_extract_nested_missing_parent():
    assert extract_nested_number('{"wind":{"speed":1}}', "main", "temp") is None


def test_extract_nested_truncated_parent_is_not_found():
    truncated = '{"name":"London","main":{"temp":14.52,"humidity":7'
    assert extract_object(truncated, "main") is None
    assert extract_nested_number(truncated, "main", "temp") is None
    assert extract_nested_number(truncated, "main", "humidity") is None


def test_extract_nested_parent_without_object():
    assert extract_nested_number('{"main":42}', "main", "temp") is None


# ---------------------------------------------------------------------------
# extract_array_items
# ---------------------------------------------------------------------------

def test_extract_array_items_in_order():
    doc = '{"cnt":3,"list":[{"dt":1,"main":{"temp":1}},{"dt":2},{"dt":3,"weather":[{"icon":"x"}]}]}'
    items = extract_array_items(doc, "list")
    assert len(items) == 3
    assert [extract_number(i, "dt") for i in items] == ["1", "2", "3"]
    assert extract_nested_number(items[0], "main", "temp") == "1"
    assert extract_first_array_field(items[2], "weather", "icon") == "x"


def test_extract_array_items_whitespace_and_non_objects():
    doc = '{"list": [ 1, "x", {"dt":7} ,\n {"dt":8} ]}'
    items = extract_array_items(doc, "list")
    assert [extract_number(i, "dt") for i in items] == ["7", "8"]


def test_extract_array_items_empty_and_missing():
    assert extract_array_items('{"list":[]}', "list") == []
    assert extract_array_items('{"cnt":0}', "list") == []
    assert extract_array_items('{"list":', "list") == []


def test_extract_array_items_truncated_keeps_complete_members():
    doc = '{"list":[{"dt":1},{"dt":2},{"dt":3,"main":{"te'
    items = extract_array_items(doc, "list")
    assert items == ['{"dt":1}', '{"dt":2}']


def test_extract_array_items_unclosed_array():
    assert extract_array_items('{"list":[{"dt":1},', "list") == ['{"dt":1}']


# ---------------------------------------------------------------------------
# extract_first_array_field
# ---------------------------------------------------------------------------

def test_extract_first_array_field():
    assert extract_first_array_field(CURRENT_BODY, "weather", "description") == "broken clouds"
    assert extract_first_array_field(CURRENT_BODY, "weather", "icon") == "04d"


def test_extract_first_array_field_uses_first_member_only():
    doc = '{"weather":[{"main":"Rain"},{"description":"second"}]}'
    assert extract_first_array_field(doc, "weather", "description") == ""


def test_extract_first_array_field_failures():
    assert extract_first_array_field('{"name":"x"}', "weather", "icon") == ""
    assert extract_first_array_field('{"weather":"none"}', "weather", "icon") == ""
    assert extract_first_array_field('{"weather":[{"icon":"01d"', "weather", "icon") == ""
