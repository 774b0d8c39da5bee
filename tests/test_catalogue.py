# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor

"""Tests for the builtin algorithms and variant lookup."""

import pytest

from crc_engine import (
    CATALOGUE, CRC1, CRC7, CRC16, CRC32, VARIANTS,
    ConfigurationError, UnknownVariantError, VariantSpec, get_variant,
)


class TestBuiltins:

    def test_crc7(self):
        """x^7 + x^3 + 1, unreflected."""
        assert (CRC7.width, CRC7.poly, CRC7.init, CRC7.refin, CRC7.refout, CRC7.xorout) == \
            (7, 0x09, 0x00, False, False, 0x00)

    def test_crc16(self):
        """x^16 + x^15 + x^2 + 1, reflected."""
        assert (CRC16.width, CRC16.poly, CRC16.refin, CRC16.refout) == (16, 0x8005, True, True)

    def test_crc32(self):
        assert CRC32.name == 'CRC-32/ISO-HDLC'
        assert (CRC32.init, CRC32.xorout) == (0xFFFFFFFF, 0xFFFFFFFF)

    def test_crc1(self):
        assert (CRC1.width, CRC1.poly) == (1, 0x1)

    def test_unique_names(self):
        names = [v.name for v in CATALOGUE]
        assert len(names) == len(set(names))

    def test_every_entry_has_reference_values(self):
        for v in CATALOGUE:
            assert v.check is not None and v.residue is not None, v.name


class TestGetVariant:

    @pytest.mark.parametrize('selector, expected', [
        ('CRC-16/ARC', CRC16),
        ('crc-16', CRC16),
        ('  ARC  ', CRC16),
        ('CRC-32', CRC32),
        ('pkzip', CRC32),
        ('CRC-7', CRC7),
        ('crc-7/mmc', CRC7),
        ('PARITY', CRC1),
    ])
    def test_names_and_aliases(self, selector, expected):
        assert get_variant(selector) is expected

    def test_variant_passthrough(self):
        v = VariantSpec(width=8, poly=0x07)
        assert get_variant(v) is v

    def test_custom(self):
        v = get_variant('custom: width=16 poly=0x8005 refin=true refout=true')
        assert v == VariantSpec(width=16, poly=0x8005, refin=True, refout=True)
        assert get_variant('CUSTOM:width=8 poly=0x07').poly == 0x07

    def test_invalid_custom(self):
        with pytest.raises(ConfigurationError, match='custom'):
            get_variant('custom: width=8')

    @pytest.mark.parametrize('selector', ['CRC-99', '', 'CRC-16/', None, 16])
    def test_unknown(self, selector):
        """Unknown selectors never fall back to a default algorithm."""
        with pytest.raises(UnknownVariantError) as exc_info:
            get_variant(selector)
        assert exc_info.value.selector == selector
        assert 'unknown CRC algorithm' in str(exc_info.value)

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            get_variant('CRC-99')

    def test_registry_keys_are_upper_case(self):
        assert all(k == k.upper() for k in VARIANTS)
