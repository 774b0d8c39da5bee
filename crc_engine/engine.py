# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Table driven CRC engine for arbitrary CRC algorithms.

A CrcEngine is bound to one VariantSpec. Its 256 entry lookup table is built
on first use and then shared read-only, so a single engine can be used from
several threads. The shift register is reflected (LSB-first) when the
algorithm has refin=true and unreflected (MSB-first) otherwise, this way
neither direction has to reverse the bits of the input bytes.

Registers of any width are supported, including widths below 8 (e.g. CRC-7)
and above 64 (e.g. CRC-82/DARC). Every register value is kept within `width`
bits at all times.
"""
import functools
import logging
import threading
from typing import Optional, Sequence, Tuple, Union

from .bits import reverse_bits
from .catalogue import get_variant
from .errors import ConfigurationError
from .variant import VariantSpec

logger = logging.getLogger(__name__)

CHECK_INPUT = b'123456789'


def _feed_bits(crc: int, b: int, num_bits: int, *, width: int, poly: int,
               reflected: bool) -> int:
    """ Polynomial division one bit at a time. Feeds the first `num_bits` bits
    of the byte `b` into the register: its low bits LSB-first into a reflected
    register, its high bits MSB-first into an unreflected one. The `poly`
    parameter has to be in the bit order of the register. """
    if reflected:
        for i in range(num_bits):
            top = (crc ^ (b >> i)) & 1
            crc = (crc >> 1) ^ poly if top else crc >> 1
    else:
        msb, mask = width - 1, (1 << width) - 1
        for i in range(num_bits):
            top = ((crc >> msb) ^ (b >> (7 - i))) & 1
            crc = ((crc << 1) & mask) ^ poly if top else (crc << 1) & mask
    return crc


def build_table(variant: VariantSpec) -> Tuple[int, ...]:
    """ Entry i is the register after feeding the byte i into a zeroed
    register. For width >= 8 and a reflected register this is the well known
    r = i; 8 times: r = (r >> 1) ^ poly if r & 1 else r >> 1 """
    p = dict(width=variant.width, poly=variant.polynomial,
             reflected=variant.reflected)
    table = tuple(_feed_bits(0, i, 8, **p) for i in range(256))
    logger.debug('built %s lookup table (%s register)', variant.name,
                 'reflected' if variant.reflected else 'unreflected')
    return table


class CrcEngine:
    """ Calculates the CRC of one algorithm.

    compute() is what most callers need. update() and finalize() expose the
    two halves of compute(): update() folds data into an interim remainder
    that can be fed back into update() later to continue the calculation. """

    def __init__(self, variant: VariantSpec, tableless: bool = False):
        if not isinstance(variant, VariantSpec):
            raise ConfigurationError('expected a VariantSpec, got %r' % (variant,))
        self.variant = variant
        self.tableless = tableless
        self._table = None
        self._lock = threading.Lock()

    def __repr__(self):
        return '%s(%s: %s)' % (type(self).__name__, self.variant.name,
                               self.variant.describe())

    @property
    def table(self) -> Tuple[int, ...]:
        table = self._table
        if table is None:
            with self._lock:
                if self._table is None:
                    self._table = build_table(self.variant)
                table = self._table
        return table

    @property
    def table_ready(self) -> bool:
        return self._table is not None

    def prepare(self) -> 'CrcEngine':
        """ Builds the lookup table ahead of the first calculation. """
        if not self.tableless:
            self.table
        return self

    def initial_register(self) -> int:
        return self.variant.register_init

    def update(self, crc: int, data: Sequence[int], bit_len: Optional[int] = None) -> int:
        """ Feeds data into the register value `crc` and returns the interim
        remainder. Only the first `bit_len` bits of data are processed when
        specified. Whole bytes go through the lookup table, a trailing partial
        byte is processed bit by bit. """
        v = self.variant
        total_bits = len(data) * 8
        bit_len = total_bits if bit_len is None else bit_len
        if not 0 <= bit_len <= total_bits:
            raise ValueError('bit_len=%r is out of range [0, %d]' % (bit_len, total_bits))
        if not 0 <= crc <= v.mask:
            raise ValueError('register value 0x%x does not fit in %d bits' % (crc, v.width))
        p = dict(width=v.width, poly=v.polynomial, reflected=v.reflected)
        num_bytes, bit_len = bit_len >> 3, bit_len & 7

        if self.tableless:
            for i in range(num_bytes):
                crc = _feed_bits(crc, data[i], 8, **p)
        elif v.reflected:
            t = self.table
            for i in range(num_bytes):
                crc = t[(crc ^ data[i]) & 0xff] ^ (crc >> 8)
        elif v.width >= 8:
            t, mask, shift = self.table, v.mask, v.width - 8
            for i in range(num_bytes):
                crc = t[((crc >> shift) ^ data[i]) & 0xff] ^ ((crc << 8) & mask)
        else:
            # the whole register fits in the table index
            t, shift = self.table, 8 - v.width
            for i in range(num_bytes):
                crc = t[((crc << shift) ^ data[i]) & 0xff]

        if bit_len:
            crc = _feed_bits(crc, data[num_bytes], bit_len, **p)
        return crc

    def finalize(self, crc: int, residue: bool = False) -> int:
        """ Turns a register value into the reported CRC: reflects it if the
        register direction differs from refout, then applies xorout unless
        the residue (the register before the final XOR) is requested. """
        v = self.variant
        if v.refout != v.reflected:
            crc = reverse_bits(crc, v.width)
        return crc if residue else crc ^ v.xorout

    def compute(self, data: Sequence[int], bit_len: Optional[int] = None) -> int:
        return self.finalize(self.update(self.initial_register(), data, bit_len))

    __call__ = compute

    def check(self) -> bool:
        """ Verifies the engine against the published check value of its
        algorithm (the CRC of b'123456789'). """
        if self.variant.check is None:
            raise ConfigurationError('%s has no reference check value' % self.variant.name)
        return self.compute(CHECK_INPUT) == self.variant.check

    def residue_const(self) -> int:
        """ The residue constant of the algorithm as defined by the RevEng CRC
        catalogue:

            The contents of the register after initialising, reading an
            error-free codeword and optionally reflecting the register (if
            refout=true), but not applying the final XOR. This is
            mathematically equivalent to initialising the register with the
            xorout parameter, reflecting it as described (if refout=true),
            reading as many zero bits as there are cells in the register, and
            reflecting the result (if refin=true).

        The catalogue assumes an unreflected register. Ours is reflected
        exactly when refin=true which makes the last reflection a no-op. """
        v = self.variant
        crc = v.xorout if v.refout == v.reflected else reverse_bits(v.xorout, v.width)
        return self.update(crc, bytes((v.width + 7) // 8), bit_len=v.width)

    def codeword(self, data: bytes) -> Tuple[bytes, int]:
        """ Appends the CRC of data to data in the bit and byte order of the
        algorithm. Returns the codeword and its length in bits. Feeding the
        codeword into the engine leaves the residue constant in the register
        if the codeword isn't corrupted. """
        v = self.variant
        crc = self.compute(data)
        if v.refin != v.refout:
            crc = reverse_bits(crc, v.width)
        crc_byte_size = (v.width + 7) // 8
        if not v.refin and crc_byte_size * 8 > v.width:
            crc <<= crc_byte_size * 8 - v.width  # big endian, aligned to the MSB
        endianness = 'little' if v.refin else 'big'
        return bytes(data) + crc.to_bytes(crc_byte_size, endianness), len(data) * 8 + v.width

    def verify(self, codeword: bytes, bit_len: Optional[int] = None) -> bool:
        """ True if the codeword (data followed by its CRC) is error-free. """
        if self.variant.residue is None:
            raise ConfigurationError('%s has no reference residue value' % self.variant.name)
        crc = self.update(self.initial_register(), codeword, bit_len)
        return self.finalize(crc, residue=True) == self.variant.residue


@functools.lru_cache(maxsize=None)
def _shared_engine(variant: VariantSpec) -> CrcEngine:
    logger.debug('creating engine for %s', variant.name)
    return CrcEngine(variant)


def engine_for(selector: Union[str, VariantSpec]) -> CrcEngine:
    """ Returns the process-wide engine of the selected algorithm. Its lookup
    table is built once and reused by every later call. """
    return _shared_engine(get_variant(selector))


def compute(selector: Union[str, VariantSpec], data: Sequence[int],
            bit_len: Optional[int] = None) -> int:
    """ Calculates the CRC of data with the selected algorithm, e.g.
    compute('CRC-16/ARC', b'123456789') == 0xbb3d """
    return engine_for(selector).compute(data, bit_len)


def format_hex(value: int) -> str:
    """ Lowercase hex without the 0x prefix or zero padding. """
    if value < 0:
        raise ValueError('a CRC value can not be negative: %r' % value)
    return '{:x}'.format(value)
