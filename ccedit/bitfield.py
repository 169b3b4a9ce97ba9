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

from ccedit import errors


def extract_field(value, bits):
    """Return the field held in @bits of the register byte @value

    Multi-bit fields are taken as the contiguous run from min(bits) to
    max(bits); the catalog refuses non-contiguous fields.
    """
    if len(bits) == 1:
        return (value >> bits[0]) & 1
    low = min(bits)
    high = max(bits)
    mask = (1 << (high - low + 1)) - 1
    return (value >> low) & mask


def insert_field(value, bits, field_value):
    """Return @value with the field in @bits replaced by @field_value"""
    low = min(bits)
    width = max(bits) - low + 1
    limit = (1 << width) - 1
    if not 0 <= field_value <= limit:
        raise errors.InvalidValueError(
            'Value %r does not fit in %i bit(s)' % (field_value, width))
    mask = limit << low
    return (value & ~mask & 0xFF) | (field_value << low)


def valid_bits(regdef):
    """Return the set of bit indices covered by a field of @regdef"""
    result = set()
    for field in regdef.fields:
        result.update(field.bits)
    return result


def is_reserved(regdef, bit):
    return bit not in valid_bits(regdef)


def field_name_for_bit(regdef, bit):
    """Return the name of the first field containing @bit, or None"""
    for field in regdef.fields:
        if bit in field.bits:
            return field.name
    return None


def describe_field(field, value):
    """Return the option label for @value, or the number as text"""
    label = field.label(value)
    if label is None:
        return str(value)
    return '%s (%i)' % (label, value)
