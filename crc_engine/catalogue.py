# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Built-in CRC algorithms and the name/alias registry.

Adding an algorithm only takes a new line in the catalogue below, the engine
itself is algorithm agnostic.
"""
from typing import Union

from .errors import ConfigurationError, UnknownVariantError
from .variant import VariantSpec

_CATALOGUE_FILE = '''
# The lines follow the format used in the online CRC catalogue of the CRC RevEng
# tool: https://reveng.sourceforge.io/crc-catalogue/all.htm
# The `reveng` commandline tool can output similar lines with its -D parameter.
# The optional "alias" parameters are based on the online catalogue.
#
# Precise description of the CRC algorithm parameters:
# https://reveng.sourceforge.io/crc-catalogue/all.htm#crc.legend.params

# x+1: the CRC is the even parity bit of the input
width=1 poly=0x1 init=0x0 refin=false refout=false xorout=0x0 check=0x1 residue=0x0 name="CRC-1/PARITY" alias="CRC-1,PARITY"
width=3 poly=0x3 init=0x0 refin=false refout=false xorout=0x7 check=0x4 residue=0x2 name="CRC-3/GSM"
width=4 poly=0x3 init=0x0 refin=true refout=true xorout=0x0 check=0x7 residue=0x0 name="CRC-4/G-704" alias="CRC-4/ITU"
width=5 poly=0x05 init=0x1f refin=true refout=true xorout=0x1f check=0x19 residue=0x06 name="CRC-5/USB"
width=6 poly=0x03 init=0x00 refin=true refout=true xorout=0x00 check=0x06 residue=0x00 name="CRC-6/G-704" alias="CRC-6/ITU"
width=7 poly=0x09 init=0x00 refin=false refout=false xorout=0x00 check=0x75 residue=0x00 name="CRC-7/MMC" alias="CRC-7"
width=7 poly=0x4f init=0x7f refin=true refout=true xorout=0x00 check=0x53 residue=0x00 name="CRC-7/ROHC"
width=7 poly=0x45 init=0x00 refin=false refout=false xorout=0x00 check=0x61 residue=0x00 name="CRC-7/UMTS"
width=8 poly=0x31 init=0x00 refin=true refout=true xorout=0x00 check=0xa1 residue=0x00 name="CRC-8/MAXIM-DOW" alias="CRC-8/MAXIM,DOW-CRC"
width=8 poly=0x07 init=0xff refin=true refout=true xorout=0x00 check=0xd0 residue=0x00 name="CRC-8/ROHC"
width=8 poly=0x1d init=0xff refin=false refout=false xorout=0xff check=0x4b residue=0xc4 name="CRC-8/SAE-J1850"
width=8 poly=0x07 init=0x00 refin=false refout=false xorout=0x00 check=0xf4 residue=0x00 name="CRC-8/SMBUS" alias="CRC-8"
width=10 poly=0x233 init=0x000 refin=false refout=false xorout=0x000 check=0x199 residue=0x000 name="CRC-10/ATM" alias="CRC-10,CRC-10/I-610"
width=12 poly=0x80f init=0x000 refin=false refout=true xorout=0x000 check=0xdaf residue=0x000 name="CRC-12/UMTS" alias="CRC-12/3GPP"
width=15 poly=0x4599 init=0x0000 refin=false refout=false xorout=0x0000 check=0x059e residue=0x0000 name="CRC-15/CAN" alias="CRC-15"
width=16 poly=0x8005 init=0x0000 refin=true refout=true xorout=0x0000 check=0xbb3d residue=0x0000 name="CRC-16/ARC" alias="ARC,CRC-16,CRC-16/LHA,CRC-IBM"
width=16 poly=0x1021 init=0xffff refin=false refout=false xorout=0x0000 check=0x29b1 residue=0x0000 name="CRC-16/IBM-3740" alias="CRC-16/AUTOSAR,CRC-16/CCITT-FALSE"
width=16 poly=0x1021 init=0xffff refin=true refout=true xorout=0xffff check=0x906e residue=0xf0b8 name="CRC-16/IBM-SDLC" alias="CRC-16/ISO-HDLC,CRC-16/X-25,X-25"
width=16 poly=0x1021 init=0x0000 refin=true refout=true xorout=0x0000 check=0x2189 residue=0x0000 name="CRC-16/KERMIT" alias="CRC-16/CCITT,CRC-16/CCITT-TRUE,CRC-CCITT,KERMIT"
width=16 poly=0x8005 init=0xffff refin=true refout=true xorout=0x0000 check=0x4b37 residue=0x0000 name="CRC-16/MODBUS" alias="MODBUS"
width=16 poly=0x8005 init=0xffff refin=true refout=true xorout=0xffff check=0xb4c8 residue=0xb001 name="CRC-16/USB"
width=16 poly=0x1021 init=0x0000 refin=false refout=false xorout=0x0000 check=0x31c3 residue=0x0000 name="CRC-16/XMODEM" alias="CRC-16/ACORN,CRC-16/LTE,XMODEM,ZMODEM"
width=24 poly=0x864cfb init=0xb704ce refin=false refout=false xorout=0x000000 check=0x21cf02 residue=0x000000 name="CRC-24/OPENPGP" alias="CRC-24"
width=32 poly=0x04c11db7 init=0xffffffff refin=false refout=false xorout=0xffffffff check=0xfc891918 residue=0xc704dd7b name="CRC-32/BZIP2" alias="CRC-32/AAL5,CRC-32/DECT-B,B-CRC-32"
width=32 poly=0x04c11db7 init=0x00000000 refin=false refout=false xorout=0xffffffff check=0x765e7680 residue=0xc704dd7b name="CRC-32/CKSUM" alias="CKSUM,CRC-32/POSIX"
width=32 poly=0x1edc6f41 init=0xffffffff refin=true refout=true xorout=0xffffffff check=0xe3069283 residue=0xb798b438 name="CRC-32/ISCSI" alias="CRC-32/CASTAGNOLI,CRC-32C"
width=32 poly=0x04c11db7 init=0xffffffff refin=true refout=true xorout=0xffffffff check=0xcbf43926 residue=0xdebb20e3 name="CRC-32/ISO-HDLC" alias="CRC-32,CRC-32/ADCCP,CRC-32/V-42,CRC-32/XZ,PKZIP"
width=32 poly=0x04c11db7 init=0xffffffff refin=false refout=false xorout=0x00000000 check=0x0376e6e7 residue=0x00000000 name="CRC-32/MPEG-2"
width=64 poly=0x42f0e1eba9ea3693 init=0x0000000000000000 refin=false refout=false xorout=0x0000000000000000 check=0x6c40df5f0b497347 residue=0x0000000000000000 name="CRC-64/ECMA-182" alias="CRC-64"
width=64 poly=0x42f0e1eba9ea3693 init=0xffffffffffffffff refin=true refout=true xorout=0xffffffffffffffff check=0x995dc9bbdf1939fa residue=0x49958c9abd7d353f name="CRC-64/XZ" alias="CRC-64/GO-ECMA"
width=82 poly=0x0308c0111011401440411 init=0x000000000000000000000 refin=true refout=true xorout=0x000000000000000000000 check=0x09ea83f625023801fd612 residue=0x000000000000000000000 name="CRC-82/DARC"
'''

CUSTOM_PREFIX = 'custom:'


def parse_catalogue(contents: str) -> [VariantSpec]:
    lines = (x.strip() for x in contents.splitlines())
    return [VariantSpec.parse(x) for x in lines if x and not x.startswith('#')]


CATALOGUE = parse_catalogue(_CATALOGUE_FILE)
VARIANTS = {v.name.upper(): v for v in CATALOGUE}
for _v in CATALOGUE:
    for _alias in _v.aliases:
        VARIANTS[_alias.upper()] = _v

CRC1 = VARIANTS['CRC-1/PARITY']
CRC7 = VARIANTS['CRC-7/MMC']
CRC16 = VARIANTS['CRC-16/ARC']
CRC32 = VARIANTS['CRC-32/ISO-HDLC']


def get_variant(selector: Union[str, VariantSpec]) -> VariantSpec:
    """ Resolves a VariantSpec, a catalogue name/alias (case insensitive) or a
    "custom: width=X poly=Y ..." parameter line. Never falls back to a default
    algorithm: anything unresolvable raises UnknownVariantError. """
    if isinstance(selector, VariantSpec):
        return selector
    if not isinstance(selector, str):
        raise UnknownVariantError(selector)
    name = selector.strip()
    if name.lower().startswith(CUSTOM_PREFIX):
        try:
            return VariantSpec.parse(name[len(CUSTOM_PREFIX):].strip())
        except ConfigurationError as ex:
            raise ConfigurationError('invalid "custom:" CRC parameters: %s' % ex) from ex
    try:
        return VARIANTS[name.upper()]
    except KeyError:
        raise UnknownVariantError(selector) from None
