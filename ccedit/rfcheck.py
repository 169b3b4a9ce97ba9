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

"""Advisory consistency checks for a set of RF parameters.

Nothing here blocks a value; the result lists findings by severity and is
only "invalid" when an ERROR finding is present.
"""

import collections
import logging

from ccedit.registers import MOD_ASK, MOD_4FSK

LOG = logging.getLogger(__name__)

INFO = 'info'
WARNING = 'warning'
ERROR = 'error'

FIELD_BANDWIDTH = 'bandwidth'
FIELD_DEVIATION = 'deviation'
FIELD_DATA_RATE = 'data_rate'
FIELD_GENERAL = 'general'

RfWarning = collections.namedtuple('RfWarning',
                                   ['severity', 'message', 'field'])


class RfValidation:
    def __init__(self, modulation_index, suggested_bandwidth, warnings):
        self.modulation_index = modulation_index
        self.suggested_bandwidth = suggested_bandwidth
        self.warnings = list(warnings)

    @property
    def is_valid(self):
        return not self.errors()

    def errors(self):
        return [w for w in self.warnings if w.severity == ERROR]

    def __repr__(self):
        return '<RfValidation h=%.2f bw=%.0f valid=%s warnings=%i>' % (
            self.modulation_index, self.suggested_bandwidth, self.is_valid,
            len(self.warnings))


def modulation_index(deviation_khz, data_rate_kbps):
    """h = 2 * deviation / data rate"""
    if data_rate_kbps <= 0:
        return 0
    return (2 * deviation_khz) / data_rate_kbps


def suggested_bandwidth(deviation_khz, data_rate_kbps, four_level=False):
    """Carson's rule occupied bandwidth in kHz

    Four-level FSK puts its outer tones at +/-3 deviations.
    """
    if four_level:
        deviation_khz = 3 * deviation_khz
    return 2 * (deviation_khz + data_rate_kbps / 2)


def _validate_ask(bandwidth_khz, data_rate_kbps):
    warnings = []
    suggested = data_rate_kbps * 2
    if bandwidth_khz < suggested:
        warnings.append(RfWarning(
            WARNING,
            'Bandwidth may be too narrow for %s kbps ASK. '
            'Suggested: %.0f kHz' % (data_rate_kbps, suggested),
            FIELD_BANDWIDTH))
    return RfValidation(0, suggested, warnings)


def validate_rf_parameters(bandwidth_khz, deviation_khz, data_rate_kbps,
                           modulation):
    """Check bandwidth, deviation and data rate for self-consistency

    @modulation is the MOD_FORMAT code; deviation is ignored for ASK/OOK.
    """
    if modulation == MOD_ASK:
        return _validate_ask(bandwidth_khz, data_rate_kbps)

    warnings = []
    four_level = modulation == MOD_4FSK
    index = modulation_index(deviation_khz, data_rate_kbps)

    if index < 0.3:
        warnings.append(RfWarning(
            WARNING,
            'Modulation index (%.2f) is very low. Signal may be hard to '
            'detect. Consider increasing deviation.' % index,
            FIELD_DEVIATION))
    elif index < 0.5:
        warnings.append(RfWarning(
            INFO, 'Modulation index: %.2f (low but usable)' % index,
            FIELD_GENERAL))
    elif index > 2:
        warnings.append(RfWarning(
            INFO, 'Modulation index: %.2f (wideband FM)' % index,
            FIELD_GENERAL))

    if four_level:
        min_bandwidth = 6 * deviation_khz
        if bandwidth_khz < min_bandwidth:
            warnings.append(RfWarning(
                ERROR,
                '4-FSK: Bandwidth (%s kHz) is less than 6× deviation '
                '(%.0f kHz). Outer tones will be clipped!' % (
                    bandwidth_khz, min_bandwidth),
                FIELD_BANDWIDTH))
    else:
        min_bandwidth = 2 * deviation_khz
        if bandwidth_khz < min_bandwidth:
            warnings.append(RfWarning(
                ERROR,
                'Bandwidth (%s kHz) is less than 2× deviation (%.0f kHz). '
                'Sidebands will be clipped!' % (bandwidth_khz,
                                                min_bandwidth),
                FIELD_BANDWIDTH))

    suggested = suggested_bandwidth(deviation_khz, data_rate_kbps,
                                    four_level)
    if bandwidth_khz < suggested * 0.8:
        if four_level:
            msg = '4-FSK bandwidth may be too narrow. Suggested: ~%.0f kHz'
        else:
            msg = ('Bandwidth may be too narrow. '
                   'Carson\'s rule suggests ~%.0f kHz')
        warnings.append(RfWarning(WARNING, msg % suggested,
                                  FIELD_BANDWIDTH))
    elif bandwidth_khz > suggested * 3:
        warnings.append(RfWarning(
            INFO, 'Bandwidth is wider than needed. May pick up more noise.',
            FIELD_BANDWIDTH))

    if four_level and index < 0.8:
        warnings.append(RfWarning(
            WARNING,
            '4-FSK typically needs modulation index >= 0.8 for reliable '
            'detection. Current: %.2f' % index,
            FIELD_DEVIATION))

    result = RfValidation(index, suggested, warnings)
    LOG.debug('Validated bw=%s dev=%s rate=%s mod=%s: %r', bandwidth_khz,
              deviation_khz, data_rate_kbps, modulation, result)
    return result
