# Copyright 2025 The ccedit developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Preset interchange formats.

Every Flipper format carries the same byte stream: (address, value) pairs
for each register present in the bank in ascending address order, a
``00 00`` terminator, then the eight PA table bytes.
"""

import collections
import logging
import re

import lark

from ccedit import errors
from ccedit.patable import PA_TABLE_SIZE
from ccedit.registers import CATALOG

LOG = logging.getLogger(__name__)

FLIPPER_MODULE = 'CC1101'
SUB_PRESET = 'FuriHalSubGhzPresetCustom'
TERMINATOR = (0x00, 0x00)

LANG = r"""
start: LABEL? BYTE*
LABEL.2: /custom_preset_data\s*:/i
BYTE: /[0-9a-f]+/i
%import common.WS
%ignore WS
"""

_PARSER = lark.Lark(LANG, parser='lalr')
_HEADER = re.compile(r'^\s*[A-Za-z_][\w ]*:')
_DATA_LABEL = re.compile(r'^\s*custom_preset_data\s*:', re.IGNORECASE)
_NAME_LABEL = re.compile(r'^\s*custom_preset_name\s*:\s*(.*)$',
                         re.IGNORECASE)


class ByteStream(lark.Transformer):
    """Turn the parse tree of a data line into a list of byte values"""

    def BYTE(self, token):
        value = int(token, 16)
        if value > 0xFF:
            raise errors.InvalidDataError('Token %r is not a byte' % (
                str(token),))
        return value

    def start(self, items):
        return [x for x in items if isinstance(x, int)]


def _check_byte(addr, value):
    if not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise errors.InvalidValueError(
            'Register 0x%02X value %r is not a byte' % (addr, value))
    return value


def _present(bank, catalog):
    """Return the (address, value) pairs of @bank that can be exported"""
    return [(addr, _check_byte(addr, bank[addr]))
            for addr in range(catalog.max_address + 1)
            if addr in bank]


def _pa_bytes(pa_table):
    if len(pa_table) != PA_TABLE_SIZE:
        raise errors.InvalidValueError('PA table must have %i entries, not %i'
                                       % (PA_TABLE_SIZE, len(pa_table)))
    return [_check_byte(i, v) for i, v in enumerate(pa_table)]


def preset_stream(bank, pa_table, catalog=CATALOG):
    """Return the canonical preset byte stream as a list of ints"""
    stream = []
    for addr, value in _present(bank, catalog):
        stream.extend((addr, value))
    stream.extend(TERMINATOR)
    stream.extend(_pa_bytes(pa_table))
    return stream


def flipper_preset_data(bank, pa_table, catalog=CATALOG):
    """Return the Custom_preset_data payload (hex tokens)"""
    return ' '.join('%02X' % b for b in preset_stream(bank, pa_table,
                                                      catalog))


def encode_flipper_setting(name, bank, pa_table, catalog=CATALOG):
    """Return a preset block for the Flipper setting_user file"""
    return '\n'.join([
        'Custom_preset_name: %s' % name,
        'Custom_preset_module: %s' % FLIPPER_MODULE,
        'Custom_preset_data: %s' % flipper_preset_data(bank, pa_table,
                                                       catalog),
    ])


def encode_flipper_sub(bank, pa_table, catalog=CATALOG):
    """Return the preset header lines of a Flipper .sub capture file"""
    return '\n'.join([
        'Preset: %s' % SUB_PRESET,
        'Custom_preset_module: %s' % FLIPPER_MODULE,
        'Custom_preset_data: %s' % flipper_preset_data(bank, pa_table,
                                                       catalog),
    ])


def c_identifier(name):
    return re.sub(r'[^a-zA-Z0-9_]', '_', name)


def encode_c_array(name, bank, pa_table, catalog=CATALOG):
    """Return C source declaring register and PA table arrays"""
    ident = c_identifier(name)
    lines = ['// CC1101 Register Configuration: %s' % name,
             '// Generated by ccedit',
             '',
             'static const uint8_t %s_registers[] = {' % ident]
    for addr, value in _present(bank, catalog):
        if addr not in catalog:
            continue
        lines.append('    0x%02X,  // 0x%02X %s' % (value, addr,
                                                    catalog.get(addr).name))
    lines.extend(['};',
                  '',
                  'static const uint8_t %s_pa_table[] = {' % ident,
                  '    ' + ', '.join('0x%02X' % b
                                     for b in _pa_bytes(pa_table)),
                  '};',
                  ''])
    return '\n'.join(lines)


def encode_raw_hex(bank, catalog=CATALOG):
    """Return just the register values, space separated"""
    return ' '.join('%02X' % value for _addr, value in _present(bank,
                                                                catalog))


EXPORT_FORMATS = collections.OrderedDict([
    ('flipper_setting', encode_flipper_setting),
    ('flipper_sub', lambda name, bank, pa_table, catalog=CATALOG:
        encode_flipper_sub(bank, pa_table, catalog)),
    ('c_array', encode_c_array),
    ('raw_hex', lambda name, bank, pa_table, catalog=CATALOG:
        encode_raw_hex(bank, catalog)),
])


def export(fmt, name, bank, pa_table, catalog=CATALOG):
    """Encode @bank and @pa_table in the export format named @fmt"""
    try:
        encoder = EXPORT_FORMATS[fmt]
    except KeyError:
        raise errors.InvalidValueError('Unknown export format %r' % fmt)
    return encoder(name, bank, pa_table, catalog)


def _data_text(text):
    """Pick the preset data out of a bare line, labelled line, or block"""
    lines = [line for line in text.splitlines() if line.strip()]
    for line in lines:
        if _DATA_LABEL.match(line):
            return line
    return ' '.join(line for line in lines if not _HEADER.match(line))


def parse_bytes(text):
    """Parse whitespace separated hex tokens (optionally labelled)"""
    try:
        return ByteStream().transform(_PARSER.parse(text))
    except lark.exceptions.VisitError as e:
        if isinstance(e.orig_exc, errors.InvalidDataError):
            raise e.orig_exc
        raise errors.InvalidDataError(str(e.orig_exc))
    except lark.exceptions.LarkError as e:
        raise errors.InvalidDataError('Invalid preset data: %s' % (
            str(e).splitlines()[0]))


def split_stream(values, catalog=CATALOG):
    """Split a preset byte stream into (registers, pa_table)

    Register pairs are consumed until the first 00 00 pair, which is always
    taken as the terminator.  The eight bytes after it are the PA table.
    """
    registers = {}
    pos = 0
    while True:
        if pos + 2 > len(values):
            if pos < len(values):
                raise errors.InvalidDataError(
                    'Dangling byte 0x%02X without a value' % values[pos])
            raise errors.InvalidDataError('No 00 00 terminator found')
        addr, value = values[pos], values[pos + 1]
        pos += 2
        if (addr, value) == TERMINATOR:
            break
        if addr <= catalog.max_address:
            registers[addr] = value
        else:
            LOG.debug('Dropping value 0x%02X for unknown address 0x%02X',
                      value, addr)

    pa_table = list(values[pos:pos + PA_TABLE_SIZE])
    if len(pa_table) < PA_TABLE_SIZE:
        raise errors.InvalidDataError(
            'Expected %i PA table bytes after the terminator, found %i' % (
                PA_TABLE_SIZE, len(pa_table)))
    extra = len(values) - pos - PA_TABLE_SIZE
    if extra:
        LOG.debug('Ignoring %i bytes after the PA table', extra)
    return registers, pa_table


def decode_flipper_block(text, catalog=CATALOG):
    """Decode Flipper preset data into (registers, pa_table)"""
    values = parse_bytes(_data_text(text))
    registers, pa_table = split_stream(values, catalog)
    LOG.info('Decoded Flipper preset with %i registers', len(registers))
    return registers, pa_table


def decode_setting_user(text, catalog=CATALOG):
    """Decode every preset in a Flipper setting_user file

    Returns a list of (name, registers, pa_table).
    """
    presets = []
    name = None
    for line in text.splitlines():
        m = _NAME_LABEL.match(line)
        if m:
            name = m.group(1).strip()
        elif _DATA_LABEL.match(line):
            if name is None:
                raise errors.InvalidDataError(
                    'Custom_preset_data without Custom_preset_name')
            registers, pa_table = split_stream(parse_bytes(line), catalog)
            presets.append((name, registers, pa_table))
            name = None
    return presets


def decode_raw_hex(text, catalog=CATALOG):
    """Decode positional register values starting at address 0

    Tokens that are not hex bytes are skipped but still use up an address.
    """
    tokens = text.split()
    registers = {}
    for addr in range(min(len(tokens), catalog.max_address + 1)):
        try:
            value = int(tokens[addr], 16)
        except ValueError:
            LOG.debug('Skipping non-hex token %r at address 0x%02X',
                      tokens[addr], addr)
            continue
        if 0 <= value <= 0xFF:
            registers[addr] = value
        else:
            LOG.debug('Skipping out of range token %r at address 0x%02X',
                      tokens[addr], addr)
    if not registers:
        raise errors.InvalidDataError('No register values found')
    return registers


def _has_stream_shape(values):
    for pos in range(0, len(values) - 1, 2):
        if (values[pos], values[pos + 1]) == TERMINATOR:
            return len(values) - pos - 2 >= PA_TABLE_SIZE
    return False


def looks_like_flipper(text):
    """Guess whether @text is Flipper preset data rather than raw hex

    Labelled data always is.  Unlabelled text must be a whole preset
    stream: register pairs, a 00 00 pair on a pair boundary, then a full
    PA table.
    """
    if re.search(r'custom_preset_data', text, re.IGNORECASE):
        return True
    try:
        values = parse_bytes(_data_text(text))
    except errors.InvalidDataError:
        return False
    return _has_stream_shape(values)
