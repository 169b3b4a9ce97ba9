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


def hexprint(data, addrfmt=None, block_size=8):
    """Return a hexdump-like encoding of @data"""
    if addrfmt is None:
        addrfmt = '%(addr)02X'

    out = ""

    blocks = len(data) // block_size
    if len(data) % block_size:
        blocks += 1

    for block in range(0, blocks):
        addr = block * block_size
        try:
            out += addrfmt % {'addr': addr}
        except (OverflowError, ValueError, TypeError, KeyError):
            out += "%02X" % addr
        out += ': '

        for j in range(0, block_size):
            try:
                out += "%02X " % data[(block * block_size) + j]
            except IndexError:
                out += "   "

        out += "  "

        for j in range(0, block_size):
            try:
                char = data[(block * block_size) + j]
            except IndexError:
                char = ord('.')

            if char > 0x20 and char < 0x7E:
                out += "%s" % chr(char)
            else:
                out += "."

        out += "\n"

    return out


def parse_int(text):
    """Parse a decimal or 0x-prefixed hex integer from the command line"""
    return int(text, 0)


def get_dict_rev(thedict, value):
    """Return the first matching key for a given @value in @dict"""
    for k, v in thedict.items():
        if v == value:
            return k
    raise KeyError(value)
