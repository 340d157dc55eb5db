"""Tests for block locator packing and serialization."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from casc_locator.locator import BlockLocator, PackedReference
from casc_locator.types import CascDecodeError, InvalidRangeError, Uint8, Uint10, Uint30, Uint32

raw_files = st.integers(min_value=0, max_value=2**8 - 1)
raw_offsets = st.integers(min_value=0, max_value=2**32 - 1)
offsets = st.integers(min_value=0, max_value=2**30 - 1)
sizes = st.integers(min_value=0, max_value=2**32 - 1)


class TestPacking:
    """Bit relocation applied when building from raw fields."""

    def test_donated_bits_move_into_file(self) -> None:
        locator = BlockLocator.create(0b00000011, 0xC0000000, 0)

        assert locator.file == 0b1111
        assert locator.offset == 0

    def test_each_donated_bit_lands_in_its_slot(self) -> None:
        # Offset bit 30 becomes file bit 0, offset bit 31 becomes file bit 1.
        assert BlockLocator.from_raw(0, 1 << 30, 0).file == 0b01
        assert BlockLocator.from_raw(0, 1 << 31, 0).file == 0b10

    def test_file_is_shifted_up(self) -> None:
        locator = BlockLocator.from_raw(0x05, 0x00000010, 7)

        assert locator.file == 0x05 << 2
        assert locator.offset == 0x10
        assert locator.size == 7

    def test_maximum_values(self) -> None:
        locator = BlockLocator.from_raw(0xFF, 0xFFFFFFFF, 0xFFFFFFFF)

        assert locator.file == Uint10.max_value()
        assert locator.offset == Uint30.max_value()
        assert locator.size == Uint32.max_value()

    def test_stored_field_types(self) -> None:
        locator = BlockLocator.from_raw(1, 2, 3)

        assert isinstance(locator.file, Uint10)
        assert isinstance(locator.offset, Uint30)
        assert isinstance(locator.size, Uint32)

    def test_create_defaults_to_packed(self) -> None:
        assert BlockLocator.create(3, 0xC0000000, 0) == BlockLocator.from_raw(3, 0xC0000000, 0)

    @given(raw_files, raw_offsets)
    def test_matches_masked_shift_formula(self, file: int, offset: int) -> None:
        locator = BlockLocator.from_raw(file, offset, 0)

        assert locator.file == (file << 2) | (offset >> 30)
        assert locator.offset == offset & 0x3FFFFFFF


class TestUnpackedConstruction:
    """Values that are already relocated are stored verbatim."""

    def test_create_unpacked_stores_verbatim(self) -> None:
        locator = BlockLocator.create(0x3FF, 0x3FFFFFFF, 10, packed=False)

        assert locator.file == 0x3FF
        assert locator.offset == 0x3FFFFFFF
        assert locator.size == 10

    def test_direct_construction_matches_unpacked(self) -> None:
        direct = BlockLocator(file=Uint10(20), offset=Uint30(16), size=Uint32(0))
        assert direct == BlockLocator.create(20, 16, 0, packed=False)
        assert direct == BlockLocator.from_raw(5, 16, 0)

    def test_direct_construction_accepts_plain_ints(self) -> None:
        locator = BlockLocator(file=20, offset=16, size=0)  # type: ignore[arg-type]
        assert locator.file == 20


class TestRangeValidation:
    """Out-of-width values are rejected instead of truncated."""

    def test_offset_at_30_bit_boundary_rejected(self) -> None:
        with pytest.raises(InvalidRangeError):
            BlockLocator.create(0, 2**30, 0, packed=False)

    def test_offset_at_30_bit_boundary_rejected_on_direct_construction(self) -> None:
        with pytest.raises(InvalidRangeError):
            BlockLocator(file=0, offset=2**30, size=0)  # type: ignore[arg-type]

    def test_stored_file_above_10_bits_rejected(self) -> None:
        with pytest.raises(InvalidRangeError):
            BlockLocator.create(1024, 0, 0, packed=False)

    @pytest.mark.parametrize(
        "file, offset, size",
        [
            (256, 0, 0),
            (-1, 0, 0),
            (0, 2**32, 0),
            (0, -1, 0),
            (0, 0, 2**32),
            (0, 0, -1),
        ],
    )
    def test_raw_values_outside_width_rejected(self, file: int, offset: int, size: int) -> None:
        with pytest.raises(InvalidRangeError):
            BlockLocator.from_raw(file, offset, size)

    def test_error_names_the_field_type(self) -> None:
        with pytest.raises(InvalidRangeError) as excinfo:
            BlockLocator.from_raw(300, 0, 0)
        assert excinfo.value.type_name == "Uint8"
        assert excinfo.value.max_value == 255

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(TypeError):
            BlockLocator.from_raw(1.0, 0, 0)  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            BlockLocator(file="1", offset=0, size=0)  # type: ignore[arg-type]


class TestSerialization:
    """The two serialized fields: the 5-byte reference and the 4-byte size."""

    def test_size_bytes(self) -> None:
        locator = BlockLocator.from_raw(0, 0, 0x01020304)
        assert locator.size_bytes() == b"\x01\x02\x03\x04"

    def test_offset_bytes(self) -> None:
        locator = BlockLocator.from_raw(0x05, 0x00000010, 12345)
        data = locator.offset_bytes()

        assert data == b"\x05\x00\x00\x00\x10"
        assert data[0] == 0x05
        assert int.from_bytes(data[1:], "big") == 0x10

    def test_offset_bytes_restores_donated_bits(self) -> None:
        locator = BlockLocator.from_raw(0x03, 0xC0000001, 0)
        assert locator.offset_bytes() == b"\x03\xc0\x00\x00\x01"

    def test_serialized_lengths(self) -> None:
        locator = BlockLocator.from_raw(0xFF, 0xFFFFFFFF, 0xFFFFFFFF)
        assert len(locator.offset_bytes()) == 5
        assert len(locator.size_bytes()) == 4

    def test_to_reference(self) -> None:
        reference = BlockLocator.from_raw(0x12, 0x80000034, 0).to_reference()

        assert reference == PackedReference(high=Uint8(0x12), low=Uint32(0x80000034))
        assert reference.encode_bytes() == b"\x12\x80\x00\x00\x34"

    def test_from_reference(self) -> None:
        reference = PackedReference(high=Uint8(0x12), low=Uint32(0x80000034))
        locator = BlockLocator.from_reference(reference, 99)

        assert locator == BlockLocator.from_raw(0x12, 0x80000034, 99)

    def test_decode(self) -> None:
        locator = BlockLocator.decode(b"\x03\xc0\x00\x00\x01", b"\x00\x00\x01\x00")

        assert locator.file == 0b1111
        assert locator.offset == 1
        assert locator.size == 256

    @pytest.mark.parametrize(
        "offset_bytes, size_bytes",
        [
            (b"\x00" * 4, b"\x00" * 4),
            (b"\x00" * 6, b"\x00" * 4),
            (b"\x00" * 5, b"\x00" * 3),
            (b"\x00" * 5, b"\x00" * 5),
        ],
    )
    def test_decode_wrong_lengths(self, offset_bytes: bytes, size_bytes: bytes) -> None:
        with pytest.raises(CascDecodeError):
            BlockLocator.decode(offset_bytes, size_bytes)

    @given(raw_files, offsets, sizes)
    def test_round_trip_through_bytes(self, file: int, offset: int, size: int) -> None:
        locator = BlockLocator.create(file, offset, size)
        data = locator.offset_bytes()

        unpacked = BlockLocator.create(data[0], int.from_bytes(data[1:], "big"), size, packed=False)
        assert unpacked.file == file
        assert unpacked.offset == offset

        assert BlockLocator.decode(data, locator.size_bytes()) == locator

    @given(raw_files, raw_offsets, sizes)
    def test_reference_bytes_are_reproduced_exactly(
        self, file: int, offset: int, size: int
    ) -> None:
        locator = BlockLocator.from_raw(file, offset, size)
        assert locator.offset_bytes() == bytes([file]) + offset.to_bytes(4, "big")
        assert locator.size_bytes() == size.to_bytes(4, "big")


class TestValueSemantics:
    def test_immutable(self) -> None:
        locator = BlockLocator.from_raw(1, 2, 3)
        with pytest.raises(ValidationError):
            locator.size = Uint32(4)  # type: ignore[misc]

    def test_equality_and_hash(self) -> None:
        a = BlockLocator.from_raw(1, 2, 3)
        b = BlockLocator.from_raw(1, 2, 3)
        assert a == b
        assert hash(a) == hash(b)
        assert a != BlockLocator.from_raw(1, 2, 4)

    def test_model_dump(self) -> None:
        locator = BlockLocator.from_raw(0x05, 0x10, 3)
        assert locator.model_dump() == {"file": 20, "offset": 16, "size": 3}
