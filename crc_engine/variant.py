# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor
"""
Declarative description of a CRC algorithm.

The parameters follow the model of the RevEng CRC catalogue
(https://reveng.sourceforge.io/crc-catalogue/all.htm) which in turn comes from
"A PAINLESS GUIDE TO CRC ERROR DETECTION ALGORITHMS" by Ross N. Williams.
The init and poly values of the catalogue assume an unreflected (MSB-first)
CRC shift register. The engine shifts LSB-first when refin is true so the
register-direction forms of these values are exposed as derived properties.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .bits import reverse_bits
from .errors import ConfigurationError

_PARAM_NAMES = frozenset(('width', 'poly', 'init', 'refin', 'refout', 'xorout',
                          'check', 'residue', 'name', 'alias'))


@dataclass(frozen=True)
class VariantSpec:
    width: int
    poly: int
    init: int = 0
    refin: bool = False
    refout: bool = False
    xorout: int = 0
    name: str = 'CUSTOM'
    aliases: Tuple[str, ...] = field(default=(), compare=False)
    check: Optional[int] = field(default=None, compare=False)
    residue: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if type(self.width) is not int or self.width <= 0:
            raise ConfigurationError('%s: width must be a positive integer, '
                                     'got %r' % (self.name, self.width))
        for param in ('poly', 'init', 'xorout', 'check', 'residue'):
            v = getattr(self, param)
            if v is None and param in ('check', 'residue'):
                continue
            if type(v) is not int:
                raise ConfigurationError('%s: %s must be an integer, got %r'
                                         % (self.name, param, v))
            if not 0 <= v <= self.mask:
                raise ConfigurationError('%s: %s=0x%x does not fit in %d bits'
                                         % (self.name, param, v, self.width))
        for param in ('refin', 'refout'):
            if not isinstance(getattr(self, param), bool):
                raise ConfigurationError('%s: %s must be a bool'
                                         % (self.name, param))
        if not isinstance(self.aliases, tuple):
            object.__setattr__(self, 'aliases', tuple(self.aliases))

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @property
    def reflected(self) -> bool:
        """ True if the engine uses a reflected (LSB-first) shift register. """
        return self.refin

    @property
    def polynomial(self) -> int:
        """ The polynomial in the bit order of the engine's shift register. """
        return reverse_bits(self.poly, self.width) if self.refin else self.poly

    @property
    def register_init(self) -> int:
        return reverse_bits(self.init, self.width) if self.refin else self.init

    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

    def describe(self) -> str:
        return ('width={} poly=0x{:0{w}x} init=0x{:0{w}x} refin={} refout={} '
                'xorout=0x{:0{w}x}'.format(
                    self.width, self.poly, self.init, str(self.refin).lower(),
                    str(self.refout).lower(), self.xorout, w=self.hex_digits))

    @classmethod
    def parse(cls, line: str) -> 'VariantSpec':
        """ Parses a line in the format of the RevEng catalogue, e.g.:
        width=16 poly=0x8005 init=0x0000 refin=true refout=true xorout=0x0000
        check=0xbb3d residue=0x0000 name="CRC-16/ARC" alias="ARC,CRC-16" """
        m = {}
        for item in line.split():
            key, sep, value = item.partition('=')
            if not sep:
                raise ConfigurationError('malformed parameter: %r' % item)
            m[key] = value
        if 'width' not in m or 'poly' not in m:
            raise ConfigurationError('the required "width" or "poly" field is missing')
        invalid = set(m) - _PARAM_NAMES
        if invalid:
            raise ConfigurationError('invalid parameters: ' + ', '.join(sorted(invalid)))

        def unquote(s):
            return s[1:-1] if len(s) >= 2 and s.startswith('"') and s.endswith('"') else s

        def to_int(key, default=None):
            if key not in m:
                return default
            try:
                return int(m[key], 0)
            except ValueError:
                raise ConfigurationError('invalid %s value: %r' % (key, m[key])) from None

        def to_bool(key):
            s = m.get(key, 'false').lower()
            if s not in ('true', 'false'):
                raise ConfigurationError('invalid %s value: %r' % (key, m[key]))
            return s == 'true'

        return cls(
            width=to_int('width'),
            poly=to_int('poly'),
            init=to_int('init', 0),
            refin=to_bool('refin'),
            refout=to_bool('refout'),
            xorout=to_int('xorout', 0),
            name=unquote(m.get('name', 'CUSTOM')),
            aliases=tuple(s for s in unquote(m.get('alias', '')).split(',') if s),
            check=to_int('check'),
            residue=to_int('residue'),
        )
