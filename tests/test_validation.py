import pytest

from coord_converter.validation import looks_like_coordinates, parse_coordinate_string, validate_coordinates


@pytest.mark.parametrize(
    "value, expected",
    [
        ("40.7128,-74.0060", "40.7128,-74.0060"),
        ("  40.7128 , -74.0060  ", "40.7128,-74.0060"),
        ("40.7128 -74.0060", "40.7128,-74.0060"),
        ("-90,180", "-90,180"),
    ],
)
def test_parse_coordinate_string_accepts_pairs(value, expected):
    assert parse_coordinate_string(value) == expected


@pytest.mark.parametrize("value", ["91,0", "-90.5,10", "10,180.0001", "0,-181"])
def test_parse_coordinate_string_rejects_out_of_range(value):
    assert parse_coordinate_string(value) is None


@pytest.mark.parametrize("value", ["", "hello", "40.7,-74.0,12", "40.7,,-74.0", "N40.7,W74.0"])
def test_parse_coordinate_string_rejects_non_pairs(value):
    assert parse_coordinate_string(value) is None


def test_validate_coordinates_requires_comma_for_decimals():
    assert validate_coordinates("40.7128 -74.0060") is None
    assert validate_coordinates(" 40.7128 , -74.0060 ") == "40.7128,-74.0060"


def test_validate_coordinates_rejects_out_of_range():
    assert validate_coordinates("95.0,10.0") is None


def test_validate_coordinates_passes_dms_through():
    dms = "40°42'46.08\"N, 74°0'21.60\"W"
    assert validate_coordinates(f"  {dms} ") == dms
    # DMS is not range-checked here
    assert validate_coordinates("400°0'0\"n") == "400°0'0\"n"


def test_validate_coordinates_handles_empty():
    assert validate_coordinates(None) is None
    assert validate_coordinates("") is None
    assert validate_coordinates("https://example.com") is None


def test_looks_like_coordinates():
    assert looks_like_coordinates("40.7,-74.0")
    assert looks_like_coordinates("12°30'N")
    assert not looks_like_coordinates("40.7 -74.0")
    assert not looks_like_coordinates("https://waze.com/ul")
    assert not looks_like_coordinates(None)


def test_only_ascii_digits_count():
    assert parse_coordinate_string("٤٠.٧١٢٨,-٧٤.٠٠٦") is None
    assert validate_coordinates("٤٠.٧١٢٨,-٧٤.٠٠٦") is None
    assert not looks_like_coordinates("٤٠.٧١٢٨,-٧٤.٠٠٦")
