# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Command line CRC calculator.

    $ echo -n 123456789 | crc-engine -qc CRC-16/ARC
    bb3d
    $ crc-engine -c "custom: width=16 poly=0x8005 refin=true refout=true" -t 123456789
    $ crc-engine --list
"""
import argparse
import io
import logging
import re
import sys

from .bits import bit_string
from .catalogue import CATALOGUE, get_variant
from .engine import CHECK_INPUT, engine_for, format_hex
from .errors import ConfigurationError, CrcError, InputFormatError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(rb'\s+')
_DIGITS = {
    # input format: (digit pattern, digits per byte, name of a partial byte)
    'hex': (re.compile(rb'^[0-9a-fA-F]*$'), 2, 'nibble'),
    '01': (re.compile(rb'^[01]*$'), 8, 'bits'),
}
INPUT_FORMATS = ('binary', 'hex', 'lsb_hex', '01', 'lsb_01')
MAX_CHUNK_SIZE = 128 * 1024


def _input_iterator_digits(infile, digits, lsb_input, refin, max_chunk_size=16*1024):
    """ Decodes a stream of hex or '0'/'1' digits. Yields (bytes, num_bits).
    With lsb_input the digits of each byte are listed least significant first.

    The CRC register consumes the trailing bits of a partial byte from the LSB
    end when refin=true and from the MSB end otherwise. If that doesn't match
    the order of the input stream (lsb_input != refin) then only completed
    bytes can be consumed and the partial ones are kept in leftover. """
    pattern, digits_per_byte, partial_name = _DIGITS[digits]
    bits_per_digit = 8 // digits_per_byte
    leftover = b''
    while 1:
        chunk = infile.read(max_chunk_size)
        if not chunk:
            break
        chunk = _WHITESPACE.sub(b'', chunk)
        if not pattern.match(chunk):
            raise InputFormatError('invalid input character - allowed characters: '
                                   '%s, whitespace' % ('hex digits' if digits == 'hex'
                                                        else "'0', '1'"))
        chunk = leftover + chunk
        leftover = b''
        partial = len(chunk) % digits_per_byte
        if partial and lsb_input != refin:
            leftover, chunk = chunk[-partial:], chunk[:-partial]
            if not chunk:
                continue
            partial = 0
        num_bits = len(chunk) * bits_per_digit
        if partial:
            chunk += b'0' * (digits_per_byte - partial)  # padding
        byte_digits = [chunk[i:i+digits_per_byte] for i in range(0, len(chunk), digits_per_byte)]
        if lsb_input:
            byte_digits = [d[::-1] for d in byte_digits]
        yield bytes(int(d, 16 if digits == 'hex' else 2) for d in byte_digits), num_bits

    if leftover:
        raise InputFormatError('unconsumed %s significant %s at the end of input '
                               'stream: %s' % ('least' if lsb_input else 'most',
                                               partial_name, leftover.decode('ascii')))


def input_iterator(infile, input_format: str, refin: bool):
    """ This generator yields tuples of the form (bytes, num_bits). """
    if input_format != 'binary':
        lsb_input = input_format.startswith('lsb_')
        digits = input_format[4:] if lsb_input else input_format
        yield from _input_iterator_digits(infile, digits, lsb_input, refin)
        return
    while 1:
        chunk = infile.read(MAX_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk, len(chunk)*8


def _format_value(value: int, fmt: str, width: int) -> str:
    if fmt == '0xhex':
        return '0x{:0{w}x}'.format(value, w=(width+3)//4)
    if fmt == 'decimal':
        return str(value)
    return format_hex(value)


def _calc_crc(args, infile):
    variant = get_variant(args.crc)
    engine = engine_for(variant)
    if not args.quiet:
        print('{} {}'.format(variant.name, variant.describe()))

    if args.residue_const:
        v = engine.residue_const()
        prefix = '' if args.quiet else 'residue constant: '
        print(prefix + _format_value(v, args.format, variant.width))
        return

    if args.continue_from is None:
        crc = engine.initial_register()
    elif 0 <= args.continue_from <= variant.mask:
        crc = args.continue_from
    else:
        raise ConfigurationError('--continue-from value 0x%x does not fit in %d bits'
                                 % (args.continue_from, variant.width))

    bits_processed = 0
    for chunk, num_bits in input_iterator(infile, args.input_format, variant.refin):
        if args.bits:
            print(bit_string(chunk))
        crc = engine.update(crc, chunk, num_bits)
        bits_processed += num_bits
    logger.debug('processed %d bits', bits_processed)

    if args.interim_remainder:
        v, label = crc, 'interim remainder: '
    elif args.residue:
        v, label = engine.finalize(crc, residue=True), 'residue: '
    else:
        v, label = engine.finalize(crc), 'crc: '
    if not args.quiet:
        print('number of bits processed: %s [%s byte(s) +%s bit(s)]'
              % (bits_processed, bits_processed // 8, bits_processed & 7))
        print(label + _format_value(v, args.format, variant.width))
    else:
        print(_format_value(v, args.format, variant.width))


def _test_variant(variant) -> bool:
    engine = engine_for(variant)
    crc_1 = engine.compute(CHECK_INPUT)

    # the same CRC calculated by feeding in the data in smaller chunks
    # including zero-sized chunks
    crc_2 = engine.initial_register()
    for chunk in (b'', b'1', b'234', b'', b'56', b'789'):
        crc_2 = engine.update(crc_2, chunk)
    crc_2 = engine.finalize(crc_2)

    residue = engine.residue_const()
    codeword, bit_len = engine.codeword(b'hope it works...')
    w = variant.hex_digits
    print('{:25s} {}'.format(variant.name, variant.describe()))
    print('{:25s} expected:    check={:0{w}x} residue={:0{w}x}\n'
          '{:25s} test_output: check={:0{w}x} residue={:0{w}x}'.format(
              '', variant.check, variant.residue, '', crc_1, residue, w=w))
    if variant.aliases:
        print('{:25s} aliases:     {}'.format('', ', '.join(variant.aliases)))

    if crc_1 != crc_2:
        print('Chunked CRC calculation failed.')
        return False
    if crc_1 != variant.check:
        print('CRC doesn\'t match the reference "check" value.')
        return False
    if residue != variant.residue:
        print('The residue value does not match the reference constant.')
        return False
    if not engine.verify(codeword, bit_len):
        print('The codeword check failed.')
        return False
    return True


def _test_and_list_catalogue_entries(catalogue) -> bool:
    passed, failed = [], []
    for variant in catalogue:
        (passed if _test_variant(variant) else failed).append(variant.name)
    if failed:
        print('Failed CRCs: ' + ', '.join(failed))
    print('Number of failed CRC algorithms: %s' % len(failed))
    print('Number of CRC algorithms that passed the test: %s' % len(passed))
    return not failed


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='crc-engine', description='Parametric CRC calculator.')
    auto_int = lambda s: int(s, 0)
    p.add_argument('-l', '--list', action='store_true', help=
                   'list and test all builtin CRC algorithms')
    p.add_argument('-c', '--crc', help='the name of the CRC algorithm or'
                   ' "CUSTOM: width=X poly=Y ..."')
    p.add_argument('--residue-const', action='store_true', help=
                   'calculate the residue constant for the specified CRC '
                   'algorithm (this requires no input data)')
    p.add_argument('--residue', action='store_true', help=
                   'output the residue instead of the final CRC '
                   '(skip the xorout step)')
    p.add_argument('-r', '--interim-remainder', action='store_true', help=
                   'output an interim remainder instead of the final CRC')
    p.add_argument('-k', '--continue-from', type=auto_int, help='continue CRC '
                   'calculation from the specified interim remainder')
    p.add_argument('-i', '--input-format', choices=INPUT_FORMATS,
                   default='binary', help='input data format')
    p.add_argument('-t', '--text', help='use this text as input instead of a file')
    p.add_argument('-f', '--format', choices=['hex', '0xhex', 'decimal'],
                   default='hex', help='output format of the crc, residue, '
                   'residue constant or interim remainder')
    p.add_argument('--bits', action='store_true', help=
                   'print the bits of the binary input')
    p.add_argument('-q', '--quiet', action='store_true', help=
                   'output only the result of the calculation')
    p.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    p.add_argument('infile', nargs='?', default='-', help=
                   'name of the input file, default: stdin')
    return p


def main(argv=None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    if sum((args.interim_remainder, args.residue_const, args.residue)) > 1:
        p.error('you can use at most one of the following parameters: '
                '--interim-remainder, --residue-const, --residue')
    if args.bits and args.input_format != 'binary':
        p.error('--bits requires binary input')

    if args.list:
        return 0 if _test_and_list_catalogue_entries(CATALOGUE) else 1
    if not args.crc:
        p.print_help()
        return 2

    owned = args.text is not None or args.infile != '-'
    try:
        if args.text is not None:
            infile = io.BytesIO(args.text.encode('utf-8'))
        elif args.infile == '-':
            infile = sys.stdin.buffer  # we want to read binary data not strings
        else:
            infile = open(args.infile, 'rb')
    except OSError as ex:
        print('error: %s' % ex, file=sys.stderr)
        return 1
    try:
        _calc_crc(args, infile)
    except CrcError as ex:
        print('error: %s' % ex, file=sys.stderr)
        return 1
    finally:
        if owned:
            infile.close()
    return 0
