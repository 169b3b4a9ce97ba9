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

"""Conversions between physical RF units and CC1101 register encodings.

These functions assume their inputs are already inside the documented
ranges; callers validate with :func:`check_range` first.
"""

import collections
import logging
import math

from ccedit import errors
from ccedit.registers import XOSC_FREQ

LOG = logging.getLogger(__name__)

FREQUENCY_RANGE = (300.0, 928.0)      # MHz
DATA_RATE_RANGE = (0.6, 500.0)        # kbps
DEVIATION_RANGE = (1.5, 380.0)        # kHz

Bandwidth = collections.namedtuple('Bandwidth', ['khz', 'e', 'm'])

#: Receiver channel filter bandwidths selectable with CHANBW_E/CHANBW_M
BANDWIDTHS = [
    Bandwidth(812, 0, 0), Bandwidth(650, 0, 1), Bandwidth(541, 0, 2),
    Bandwidth(464, 0, 3), Bandwidth(406, 1, 0), Bandwidth(325, 1, 1),
    Bandwidth(270, 1, 2), Bandwidth(232, 1, 3), Bandwidth(203, 2, 0),
    Bandwidth(162, 2, 1), Bandwidth(135, 2, 2), Bandwidth(116, 2, 3),
    Bandwidth(102, 3, 0), Bandwidth(81, 3, 1), Bandwidth(68, 3, 2),
    Bandwidth(58, 3, 3),
]
DEFAULT_BANDWIDTH = BANDWIDTHS[6]


def _round(value):
    """Round half away from zero for the non-negative values used here"""
    return int(math.floor(value + 0.5))


def to_hex(value, width=2):
    """Format @value as zero-padded upper-case hex"""
    return '%0*X' % (width, value)


def check_range(label, value, bounds):
    """Raise InvalidValueError unless @value lies within @bounds"""
    lo, hi = bounds
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise errors.InvalidValueError('%s must be a number, not %r' % (
            label, value))
    if math.isnan(value) or not lo <= value <= hi:
        raise errors.InvalidValueError('%s %s is outside %s-%s' % (
            label, value, lo, hi))
    return value


def frequency_to_registers(freq_mhz):
    """Return (FREQ2, FREQ1, FREQ0) for a carrier frequency in MHz

    FREQ = f_carrier * 2^16 / f_XOSC, a 22-bit word.
    """
    freq = _round(freq_mhz * 1000000 * 65536 / XOSC_FREQ)
    return (freq >> 16) & 0x3F, (freq >> 8) & 0xFF, freq & 0xFF


def registers_to_frequency(freq2, freq1, freq0):
    """Return the carrier frequency in MHz encoded by FREQ2..FREQ0"""
    freq = ((freq2 & 0x3F) << 16) | (freq1 << 8) | freq0
    return (freq * XOSC_FREQ) / (65536 * 1000000)


def drate_to_kbps(drate_e, drate_m):
    """R_DATA = ((256 + DRATE_M) * 2^DRATE_E / 2^28) * f_XOSC"""
    rate = ((256 + drate_m) * 2 ** drate_e / 2 ** 28) * XOSC_FREQ
    return rate / 1000


def data_rate_to_registers(data_rate_kbps):
    """Return the (DRATE_E, DRATE_M) pair closest to @data_rate_kbps"""
    data_rate = data_rate_kbps * 1000
    best_e, best_m = 0, 0
    best_error = math.inf

    for e in range(16):
        m = _round((data_rate * 2 ** 28) / (XOSC_FREQ * 2 ** e) - 256)
        if not 0 <= m < 256:
            continue
        error = abs(drate_to_kbps(e, m) * 1000 - data_rate)
        if error < best_error:
            best_error = error
            best_e, best_m = e, m

    LOG.debug('Data rate %s kbps -> DRATE_E=%i DRATE_M=%i (error %.3f bps)',
              data_rate_kbps, best_e, best_m, best_error)
    return best_e, best_m


def registers_to_data_rate(mdmcfg4, mdmcfg3):
    """Return the data rate in kbps encoded by MDMCFG4/MDMCFG3"""
    return drate_to_kbps(mdmcfg4 & 0x0F, mdmcfg3)


def bandwidth_to_registers(bw_khz):
    """Return (CHANBW_E, CHANBW_M) for one of the BANDWIDTHS values

    Values not in the table select DEFAULT_BANDWIDTH.
    """
    for entry in BANDWIDTHS:
        if entry.khz == bw_khz:
            return entry.e, entry.m
    LOG.debug('Bandwidth %s kHz is not selectable; using %i kHz',
              bw_khz, DEFAULT_BANDWIDTH.khz)
    return DEFAULT_BANDWIDTH.e, DEFAULT_BANDWIDTH.m


def chanbw_to_hz(chanbw_e, chanbw_m):
    """BW = f_XOSC / (8 * (4 + CHANBW_M) * 2^CHANBW_E)"""
    return XOSC_FREQ / (8 * (4 + chanbw_m) * 2 ** chanbw_e)


def chanbw_to_khz(chanbw_e, chanbw_m):
    """Return the nominal bandwidth in kHz for CHANBW_E/CHANBW_M

    Every (E, M) combination has a BANDWIDTHS entry, so the table label is
    returned rather than the rounded formula value (which differs by 1 kHz
    for a few entries, e.g. 812.5 kHz is listed as 812).
    """
    for entry in BANDWIDTHS:
        if (entry.e, entry.m) == (chanbw_e, chanbw_m):
            return entry.khz
    return _round(chanbw_to_hz(chanbw_e, chanbw_m) / 1000)


def registers_to_bandwidth(mdmcfg4):
    """Return the channel filter bandwidth in kHz encoded by MDMCFG4"""
    return chanbw_to_khz((mdmcfg4 >> 6) & 0x03, (mdmcfg4 >> 4) & 0x03)


def _deviation_hz(dev_e, dev_m):
    return (XOSC_FREQ / 2 ** 17) * (8 + dev_m) * 2 ** dev_e


def deviation_to_register(dev_khz):
    """Return the DEVIATN byte whose deviation is closest to @dev_khz"""
    deviation = dev_khz * 1000
    best_e, best_m = 0, 0
    best_error = math.inf

    for e in range(8):
        for m in range(8):
            error = abs(_deviation_hz(e, m) - deviation)
            if error < best_error:
                best_error = error
                best_e, best_m = e, m

    return (best_e << 4) | best_m


def register_to_deviation(deviatn):
    """Return the deviation in kHz encoded by the DEVIATN byte"""
    return _deviation_hz((deviatn >> 4) & 0x07, deviatn & 0x07) / 1000


def modulation_from_register(mdmcfg2):
    """Return the MOD_FORMAT code held in MDMCFG2"""
    return (mdmcfg2 >> 4) & 0x07
