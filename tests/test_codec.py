import pytest

from wavefx import codec


class TestReadIntegers:
    """Tests for byte group → integer conversions."""

    def test_u16_little_endian(self) -> None:
        assert codec.read_u16(b"\x01\x02") == 0x0201

    def test_u16_big_endian(self) -> None:
        assert codec.read_u16(b"\x01\x02", "big") == 0x0102

    def test_u32_little_endian(self) -> None:
        assert codec.read_u32(b"\x44\xac\x00\x00") == 44100

    def test_u32_max_value(self) -> None:
        assert codec.read_u32(b"\xff\xff\xff\xff") == 0xFFFFFFFF

    def test_i16_negative_one(self) -> None:
        assert codec.read_i16(b"\xff\xff") == -1

    def test_i16_extremes(self) -> None:
        assert codec.read_i16(b"\x00\x80") == -32768
        assert codec.read_i16(b"\xff\x7f") == 32767

    def test_u16_same_bytes_as_unsigned(self) -> None:
        """The same bytes read as u16 and i16 differ only in sign handling."""
        assert codec.read_u16(b"\x00\x80") == 32768


class TestWriteIntegers:
    """Tests for integer → byte group conversions."""

    def test_u16_little_endian(self) -> None:
        assert codec.write_u16(16) == b"\x10\x00"

    def test_u32_little_endian(self) -> None:
        assert codec.write_u32(176400) == b"\x10\xb1\x02\x00"

    def test_i16_negative(self) -> None:
        assert codec.write_i16(-2) == b"\xfe\xff"

    def test_i16_wraps_out_of_range_values(self) -> None:
        assert codec.write_i16(32768) == codec.write_i16(-32768)

    @pytest.mark.parametrize("value", [-32768, -1, 0, 1, 12345, 32767])
    def test_i16_inverse_of_read(self, value: int) -> None:
        assert codec.read_i16(codec.write_i16(value)) == value


class TestTags:
    """Tests for big-endian ASCII chunk tags."""

    def test_riff_tag_value(self) -> None:
        assert codec.RIFF == 0x52494646

    def test_tag_constants_match_ascii(self) -> None:
        assert codec.write_u32(codec.RIFF, "big") == b"RIFF"
        assert codec.write_u32(codec.WAVE, "big") == b"WAVE"
        assert codec.write_u32(codec.FMT, "big") == b"fmt "
        assert codec.write_u32(codec.DATA, "big") == b"data"

    def test_tag_value_differs_from_little_endian_read(self) -> None:
        assert codec.tag_value(b"RIFF") != codec.read_u32(b"RIFF", "little")
