# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
""" Bit level helpers shared by the CRC engine and the command line tool. """


def reverse_bits(value: int, width: int) -> int:
    """ Returns `value` with the order of its lowest `width` bits reversed. """
    if not 0 <= value < (1 << width):
        raise ValueError('value 0x%x does not fit in %d bits' % (value, width))
    return int('{v:0{w}b}'.format(v=value, w=width)[::-1], 2)


reversed_int8_bits = tuple(reverse_bits(i, 8) for i in range(256))


def bit_string(data: bytes, sep: str = '') -> str:
    """ Renders the bits of `data` MSB-first, e.g. b'CRC' -> '010000110101...'.
    The optional separator is inserted between bytes. """
    return sep.join('{:08b}'.format(b) for b in data)


def hamming_distance(a: bytes, b: bytes) -> int:
    """ The number of bit positions in which two equally long inputs differ:
    the popcount of a XOR b. """
    if len(a) != len(b):
        raise ValueError('inputs differ in length: %d != %d' % (len(a), len(b)))
    return sum(bin(x ^ y).count('1') for x, y in zip(a, b))
