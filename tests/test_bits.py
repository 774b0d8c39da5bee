# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor

"""Tests for the bit level helpers."""

import pytest

from crc_engine.bits import bit_string, hamming_distance, reverse_bits, reversed_int8_bits


class TestReverseBits:

    def test_known_polynomials(self):
        """Reflected forms of well known polynomials."""
        assert reverse_bits(0x8005, 16) == 0xA001
        assert reverse_bits(0x1021, 16) == 0x8408
        assert reverse_bits(0x04C11DB7, 32) == 0xEDB88320
        assert reverse_bits(0x09, 7) == 0x48

    def test_width_matters(self):
        assert reverse_bits(1, 1) == 1
        assert reverse_bits(1, 8) == 0x80
        assert reverse_bits(1, 7) == 0x40

    def test_involution(self):
        for width in (1, 5, 7, 8, 13, 64):
            for value in (0, 1, (1 << width) - 1, 0x5A5A5A5A5A5A5A5A & ((1 << width) - 1)):
                assert reverse_bits(reverse_bits(value, width), width) == value

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            reverse_bits(0x80, 7)
        with pytest.raises(ValueError):
            reverse_bits(-1, 8)

    def test_byte_table(self):
        assert len(reversed_int8_bits) == 256
        assert reversed_int8_bits[0x01] == 0x80
        assert reversed_int8_bits[0xF0] == 0x0F
        assert all(reversed_int8_bits[reversed_int8_bits[i]] == i for i in range(256))


class TestBitString:

    def test_text(self):
        """Bits of a string, MSB first."""
        assert bit_string(b'CRC') == '010000110101001001000011'

    def test_separator(self):
        assert bit_string(b'AB', ' ') == '01000001 01000010'

    def test_empty(self):
        assert bit_string(b'') == ''


class TestHammingDistance:

    def test_differing_positions(self):
        """100100 and 110110 differ in bits 4 and 1."""
        assert hamming_distance(bytes([0b100100]), bytes([0b110110])) == 2

    def test_identical(self):
        assert hamming_distance(b'Teststring', b'Teststring') == 0

    def test_all_bits(self):
        assert hamming_distance(b'\x00' * 4, b'\xff' * 4) == 32

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            hamming_distance(b'abc', b'ab')
