import pytest

from coord_converter.conversion import FormatError, convert, decimal_to_dms, dms_to_decimal


def test_convert_decimal_to_dms():
    assert convert("40.712800,-74.006000") == "40°42'46.08\"N, 74°0'21.60\"W"


def test_convert_dms_to_decimal():
    assert convert("40°42'46.08\"N, 74°0'21.60\"W") == "40.712800,-74.006000"


def test_convert_rejects_too_many_parts():
    with pytest.raises(FormatError):
        convert("not,a,coordinate,string")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("-33.8688,151.2093", "33°52'7.68\"S, 151°12'33.48\"E"),
        ("0,0", "0°0'0.00\"N, 0°0'0.00\"E"),
        ("-0.5,-0.5", "0°30'0.00\"S, 0°30'0.00\"W"),
    ],
)
def test_decimal_to_dms_hemispheres(value, expected):
    assert decimal_to_dms(value) == expected


def test_decimal_to_dms_accepts_spaces_around_parts():
    assert decimal_to_dms(" 40.7128 , -74.0060 ") == "40°42'46.08\"N, 74°0'21.60\"W"


@pytest.mark.parametrize("value", ["abc,-74.0", "40.7,", "40.7;-74.0", "nan,1", "40.7,inf"])
def test_decimal_to_dms_rejects_bad_input(value):
    with pytest.raises(FormatError):
        decimal_to_dms(value)


def test_dms_to_decimal_south_and_west_are_negative():
    assert dms_to_decimal("33°52'7.68\"S, 151°12'33.48\"E") == "-33.868800,151.209300"
    assert dms_to_decimal("0°30'0\"s, 0°30'0\"w") == "-0.500000,-0.500000"


def test_dms_to_decimal_tolerates_whitespace_between_fields():
    assert dms_to_decimal("40° 42' 46.08\" N, 74° 0' 21.6\" W") == "40.712800,-74.006000"


def test_dms_to_decimal_rejects_bad_axis():
    with pytest.raises(FormatError, match="Invalid DMS coordinate part"):
        dms_to_decimal("40°42'46.08\"N, seventy-four west")


def test_dms_to_decimal_requires_two_parts():
    with pytest.raises(FormatError, match="Expected 'latitude, longitude'"):
        dms_to_decimal("40°42'46.08\"N")


def test_convert_repairs_missing_comma_after_north():
    assert convert("40°42'46.08\"N 74°0'21.60\"W") == "40.712800,-74.006000"


def test_convert_repairs_missing_comma_after_south():
    assert convert("33°52'7.68\"S151°12'33.48\"E") == "-33.868800,151.209300"


def test_convert_single_axis_dms_fails():
    with pytest.raises(FormatError):
        convert("74°0'21.60\"W")


@pytest.mark.parametrize(
    "lat, lon",
    [(40.7128, -74.006), (-89.999999, 179.999999), (0.000123, -0.000456), (51.5074, -0.1278), (-90, -180)],
)
def test_decimal_round_trip_stays_close(lat, lon):
    back = dms_to_decimal(decimal_to_dms(f"{lat},{lon}"))
    lat_back, lon_back = (float(part) for part in back.split(","))
    assert lat_back == pytest.approx(lat, abs=1e-4)
    assert lon_back == pytest.approx(lon, abs=1e-4)


def test_convert_twice_returns_to_dms():
    dms = "40°42'46.08\"N, 74°0'21.60\"W"
    assert convert(convert(dms)) == dms


def test_dms_to_decimal_rejects_non_ascii_digits():
    with pytest.raises(FormatError, match="Invalid DMS coordinate part"):
        dms_to_decimal("٤٠°٤٢'٤٦\"N, 74°0'21.60\"W")
