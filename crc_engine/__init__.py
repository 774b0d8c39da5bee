# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Arbitrary-precision CRC calculator.

One table driven engine calculates any CRC algorithm that can be described by
the parameters of the RevEng CRC catalogue (width, poly, init, refin, refout,
xorout), including those that aren't 8, 16, 32 or 64 bits wide, for example
CRC-7/MMC or CRC-82/DARC.

Example usage:
    from crc_engine import compute, format_hex, CRC16

    format_hex(compute('CRC-32', b'123456789'))  # 'cbf43926'
    compute(CRC16, b'123456789')  # 0xbb3d
"""

from .bits import reverse_bits, bit_string, hamming_distance
from .catalogue import CATALOGUE, VARIANTS, CRC1, CRC7, CRC16, CRC32, get_variant
from .engine import CrcEngine, build_table, compute, engine_for, format_hex
from .errors import CrcError, ConfigurationError, UnknownVariantError, InputFormatError
from .variant import VariantSpec

__version__ = "0.1.0"

__all__ = [
    # Bits
    "reverse_bits",
    "bit_string",
    "hamming_distance",
    # Variants
    "VariantSpec",
    "CATALOGUE",
    "VARIANTS",
    "CRC1",
    "CRC7",
    "CRC16",
    "CRC32",
    "get_variant",
    # Engine
    "CrcEngine",
    "build_table",
    "compute",
    "engine_for",
    "format_hex",
    # Errors
    "CrcError",
    "ConfigurationError",
    "UnknownVariantError",
    "InputFormatError",
]
