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

"""Stock Flipper Zero sub-GHz presets.

Each preset bundles the physical parameters it was designed for together
with the precomputed register values that realize them.  Loading a preset
merges its registers into a bank; registers it does not mention keep their
current value.
"""

import collections

from ccedit import errors
from ccedit.registers import (
    IOCFG0, FIFOTHR, PKTCTRL0, FSCTRL1, MDMCFG4, MDMCFG3, MDMCFG2, MDMCFG1,
    MDMCFG0, DEVIATN, MCSM0, FOCCFG, AGCCTRL2, AGCCTRL1, AGCCTRL0, WORCTRL,
    FREND1, FREND0, MOD_2FSK, MOD_ASK)

Preset = collections.namedtuple('Preset', [
    'name', 'frequency', 'modulation', 'data_rate', 'bandwidth',
    'deviation', 'preamble', 'sync_mode', 'registers', 'pa_table'])

_OOK_PA = (0x00, 0xC0, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00)
_FSK_PA = (0xC0, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00)


def _async_serial(regs):
    """Registers shared by every asynchronous serial preset plus @regs"""
    base = {
        IOCFG0: 0x0D,       # GDO0 = async serial data
        PKTCTRL0: 0x32,     # async serial, infinite length
        FSCTRL1: 0x06,
        MDMCFG0: 0x00,
        MCSM0: 0x18,
        WORCTRL: 0xFB,
    }
    base.update(regs)
    return base


_AM270 = _async_serial({
    FIFOTHR: 0x47, MDMCFG4: 0x67, MDMCFG3: 0x32, MDMCFG2: 0x30,
    MDMCFG1: 0x00, FOCCFG: 0x18, AGCCTRL2: 0x03, AGCCTRL1: 0x00,
    AGCCTRL0: 0x40, FREND1: 0xB6, FREND0: 0x11})

_AM650 = _async_serial({
    FIFOTHR: 0x07, MDMCFG4: 0x17, MDMCFG3: 0x32, MDMCFG2: 0x30,
    MDMCFG1: 0x00, FOCCFG: 0x18, AGCCTRL2: 0x07, AGCCTRL1: 0x00,
    AGCCTRL0: 0x91, FREND1: 0xB6, FREND0: 0x11})

_FM238 = _async_serial({
    FIFOTHR: 0x47, MDMCFG4: 0x67, MDMCFG3: 0x83, MDMCFG2: 0x04,
    MDMCFG1: 0x02, DEVIATN: 0x04, FOCCFG: 0x16, AGCCTRL2: 0x07,
    AGCCTRL1: 0x00, AGCCTRL0: 0x91, FREND1: 0x56, FREND0: 0x10})

_FM476 = dict(_FM238)
_FM476[DEVIATN] = 0x47

PRESETS = collections.OrderedDict((p.name, p) for p in [
    Preset('AM270', 433.92, MOD_ASK, 3.79, 270, 0, 2, 0, _AM270, _OOK_PA),
    Preset('AM650', 433.92, MOD_ASK, 3.79, 650, 0, 2, 0, _AM650, _OOK_PA),
    Preset('FM238', 433.92, MOD_2FSK, 4.80, 270, 2.38, 4, 0, _FM238,
           _FSK_PA),
    Preset('FM476', 433.92, MOD_2FSK, 4.80, 270, 47.6, 4, 0, _FM476,
           _FSK_PA),
])


def get_preset(name):
    """Return the preset called @name"""
    try:
        return PRESETS[name]
    except KeyError:
        raise errors.InvalidValueError('Unknown preset %r (choose from %s)' % (
            name, ', '.join(PRESETS)))
