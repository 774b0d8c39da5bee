# SPDX-License-Identifier: MIT-0
# SPDX-FileCopyrightText:  2023 Istvan Pasztor


class CrcError(Exception):
    """ Base class of the errors raised by this package. """


class ConfigurationError(CrcError, ValueError):
    """ The parameters of a CRC variant are invalid. """


class UnknownVariantError(CrcError, KeyError):
    """ No CRC variant matches the requested name or alias. """

    def __init__(self, selector):
        super().__init__(selector)
        self.selector = selector

    def __str__(self):
        return 'unknown CRC algorithm: %r' % (self.selector,)


class InputFormatError(CrcError, ValueError):
    """ Text input (hex digits or '0'/'1' digits) could not be decoded. """
