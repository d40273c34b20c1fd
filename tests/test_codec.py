"""Tests for the typed parameter codecs."""

import pytest

from aircon_local.errors import DecodeError
from aircon_local.protocol.codec import Fan, FanDir, Humidity, Mode, Name, Power, Temperature
from aircon_local.protocol.framing import parse_response


class TestEnumeratedCodecs:
    """Tests for Power, Mode, Fan and FanDir."""

    @pytest.mark.parametrize("codec", [Power, Mode, Fan, FanDir])
    def test_every_member_round_trips(self, codec) -> None:
        """Test that decoding an encoded member yields the same member."""
        for member in codec:
            assert codec.decode(member.encode()) is member

    def test_mode_auto_variants_keep_their_codes(self) -> None:
        """Test that the three Auto codes stay distinct members."""
        assert Mode.decode("0") is Mode.AUTO
        assert Mode.decode("1") is Mode.AUTO_1
        assert Mode.decode("7") is Mode.AUTO_7
        assert {str(Mode.AUTO), str(Mode.AUTO_1), str(Mode.AUTO_7)} == {"Auto"}
        assert Mode.AUTO_7.encode() == "7"

    @pytest.mark.parametrize(
        ("codec", "raw"),
        [(Mode, "9"), (Mode, "5"), (Power, "2"), (Fan, "1"), (Fan, "a"), (FanDir, "4"), (FanDir, "")],
    )
    def test_unknown_code_is_rejected(self, codec, raw: str) -> None:
        """Test that codes outside the table raise DecodeError naming field and value."""
        with pytest.raises(DecodeError) as excinfo:
            codec.decode(raw)
        assert excinfo.value.field == codec.__name__
        assert excinfo.value.raw_value == raw

    def test_labels(self) -> None:
        """Test display labels."""
        assert str(Power.ON) == "On"
        assert str(Mode.DEHUMIDIFY) == "Dehumidify"
        assert str(Fan.SILENT) == "Silent"
        assert str(Fan.LEVEL_3) == "3"
        assert Fan.LEVEL_3.encode() == "5"
        assert str(FanDir.BOTH) == "Both"


class TestTemperature:
    """Tests for the Temperature codec."""

    def test_encode_uses_one_fractional_digit(self) -> None:
        """Test temperature formatting."""
        assert Temperature.encode(22.5) == "22.5"
        assert Temperature.encode(22) == "22.0"
        assert Temperature.encode(-3.26) == "-3.3"

    def test_decode(self) -> None:
        """Test temperature parsing."""
        assert Temperature.decode("22.5") == 22.5
        assert Temperature.decode("-4") == -4.0
        assert Temperature.decode("+5") == 5.0
        assert Temperature.decode(".5") == 0.5

    @pytest.mark.parametrize("raw", ["abc", "", "-", "22,5", "2_2.5", " 22.5\n", "22.5 ", "\u0662\u0662", "nan"])
    def test_decode_rejects_non_numeric(self, raw: str) -> None:
        """Test that non-numeric temperatures raise DecodeError."""
        with pytest.raises(DecodeError):
            Temperature.decode(raw)


class TestHumidity:
    """Tests for the Humidity codec."""

    def test_dash_means_not_available(self) -> None:
        """Test that "-" decodes to -1."""
        assert Humidity.decode("-") == -1
        assert Humidity.decode("-") == Humidity.NOT_AVAILABLE

    def test_decode_and_encode(self) -> None:
        """Test integer humidity values."""
        assert Humidity.decode("55") == 55
        assert Humidity.decode("-3") == -3
        assert Humidity.decode("+5") == 5
        assert Humidity.encode(-1) == "-1"
        assert Humidity.encode(45) == "45"

    @pytest.mark.parametrize("raw", ["abc", "45.5", "", "4_5", " 45 ", "\u0664\u0665", "--1"])
    def test_decode_rejects_non_integer(self, raw: str) -> None:
        """Test that non-integer humidity raises DecodeError."""
        with pytest.raises(DecodeError):
            Humidity.decode(raw)


class TestName:
    """Tests for the Name codec."""

    def test_decode_unescapes(self) -> None:
        """Test percent-decoding of names."""
        assert Name.decode("%4c%69%76%69%6e%67") == "Living"
        assert Name.decode("Bed%20room") == "Bed room"
        assert Name.decode("a+b") == "a+b"

    def test_encode_escapes(self) -> None:
        """Test percent-encoding of names."""
        assert Name.encode("Bed room") == "Bed%20room"
        assert Name.encode("a/b") == "a%2Fb"
        assert Name.encode("a+b=c") == "a+b=c"
        assert Name.encode("a,b;c") == "a%2Cb%3Bc"

    def test_escaped_name_survives_framing(self) -> None:
        """Test that separators in a name cannot split the response record."""
        wire = Name.encode("Bed,room;1")
        values = parse_response(f"ret=OK,name={wire},type=aircon")
        assert values["type"] == "aircon"
        assert Name.decode(values["name"]) == "Bed,room;1"

    def test_round_trip(self) -> None:
        """Test that an escaped name decodes back to itself."""
        for name in ["Living", "Küche", "100% cool", "a/b?c"]:
            assert Name.decode(Name.encode(name)) == name

    @pytest.mark.parametrize("raw", ["%zz", "abc%4", "%", "%ff"])
    def test_invalid_escape_is_rejected(self, raw: str) -> None:
        """Test that bad escapes raise DecodeError."""
        with pytest.raises(DecodeError) as excinfo:
            Name.decode(raw)
        assert excinfo.value.field == "Name"
