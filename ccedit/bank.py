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

import collections
import logging

from ccedit import bitfield
from ccedit import calc
from ccedit import errors
from ccedit import export
from ccedit import patable
from ccedit import presets
from ccedit import rfcheck
from ccedit.registers import (CATALOG, MODULATION_FORMATS, MOD_ASK, FREQ2,
                              FREQ1, FREQ0, MDMCFG4, MDMCFG3, MDMCFG2,
                              DEVIATN, FREND0)

LOG = logging.getLogger(__name__)

RfDerivedView = collections.namedtuple('RfDerivedView', [
    'frequency', 'modulation', 'data_rate', 'bandwidth', 'deviation',
    'validation'])


class RegisterBank:
    """The register values and PA table being edited

    Every mutation either completes or raises without touching state, then
    calls each listener with the bank.
    """

    def __init__(self, catalog=CATALOG, tx_power=patable.DEFAULT_POWER):
        self._catalog = catalog
        self._listeners = []
        self._initial_power = tx_power
        self._registers = catalog.defaults()
        self._pa_table = list(patable.DEFAULT_PA_TABLE)
        self._tx_power = tx_power

    @property
    def catalog(self):
        return self._catalog

    @property
    def pa_table(self):
        return list(self._pa_table)

    @property
    def tx_power(self):
        return self._tx_power

    def add_listener(self, callback):
        self._listeners.append(callback)

    def remove_listener(self, callback):
        self._listeners.remove(callback)

    def _changed(self, what):
        LOG.debug('Bank changed: %s', what)
        for callback in list(self._listeners):
            callback(self)

    def get(self, addr):
        """Return the value of register @addr

        Registers not present in the bank read as their catalog default.
        """
        try:
            return self._registers[addr]
        except KeyError:
            return self._catalog.get(addr).default

    def snapshot(self):
        return dict(self._registers)

    def items(self):
        return sorted(self._registers.items())

    def __contains__(self, addr):
        return addr in self._registers

    def __getitem__(self, addr):
        return self._registers[addr]

    @property
    def frequency(self):
        return calc.registers_to_frequency(self.get(FREQ2), self.get(FREQ1),
                                           self.get(FREQ0))

    @property
    def modulation(self):
        return calc.modulation_from_register(self.get(MDMCFG2))

    @property
    def derived(self):
        mdmcfg4 = self.get(MDMCFG4)
        modulation = self.modulation
        data_rate = calc.registers_to_data_rate(mdmcfg4, self.get(MDMCFG3))
        bandwidth = calc.registers_to_bandwidth(mdmcfg4)
        deviation = calc.register_to_deviation(self.get(DEVIATN))
        return RfDerivedView(
            self.frequency, modulation, data_rate, bandwidth, deviation,
            rfcheck.validate_rf_parameters(bandwidth, deviation, data_rate,
                                           modulation))

    def _check_address(self, addr):
        if addr not in self._catalog:
            raise errors.InvalidValueError(
                'Register address %r not in range 0x00-0x%02X' % (
                    addr, self._catalog.max_address))
        return self._catalog.get(addr)

    @staticmethod
    def _check_byte(value):
        if not isinstance(value, int) or not 0 <= value <= 0xFF:
            raise errors.InvalidValueError(
                'Register value %r not in range 0-255' % (value,))
        return value

    def _with_field(self, addr, name, value):
        field = self._catalog.get(addr).field(name)
        return bitfield.insert_field(self.get(addr), field.bits, value)

    def _refresh_pa_table(self, freq_mhz, modulation):
        self._pa_table = patable.get_pa_table(freq_mhz, self._tx_power,
                                              modulation == MOD_ASK)

    def set_register(self, addr, value):
        self._check_address(addr)
        self._registers[addr] = self._check_byte(value)
        self._changed('register 0x%02X=0x%02X' % (addr, value))

    def toggle_bit(self, addr, bit):
        regdef = self._check_address(addr)
        if bitfield.is_reserved(regdef, bit):
            raise errors.InvalidValueError('Bit %r of %s is reserved' % (
                bit, regdef.name))
        self._registers[addr] = self.get(addr) ^ (1 << bit)
        self._changed('%s bit %i' % (regdef.name, bit))

    def set_field(self, addr, name, value):
        regdef = self._check_address(addr)
        try:
            field = regdef.field(name)
        except KeyError:
            raise errors.InvalidValueError('%s has no field %s' % (
                regdef.name, name))
        self._registers[addr] = bitfield.insert_field(self.get(addr),
                                                      field.bits, value)
        self._changed('%s.%s=%i' % (regdef.name, name, value))

    def set_frequency(self, freq_mhz):
        freq_mhz = calc.check_range('Frequency', freq_mhz,
                                    calc.FREQUENCY_RANGE)
        freq2, freq1, freq0 = calc.frequency_to_registers(freq_mhz)
        self._registers.update({FREQ2: freq2, FREQ1: freq1, FREQ0: freq0})
        self._refresh_pa_table(freq_mhz, self.modulation)
        self._changed('frequency %.3f MHz' % freq_mhz)

    def set_modulation(self, modulation):
        if modulation not in MODULATION_FORMATS:
            raise errors.InvalidValueError('Unknown modulation format %r' % (
                modulation,))
        is_ask = modulation == MOD_ASK
        self._registers[MDMCFG2] = self._with_field(MDMCFG2, 'MOD_FORMAT',
                                                    modulation)
        self._registers[FREND0] = self._with_field(FREND0, 'PA_POWER',
                                                   1 if is_ask else 0)
        self._refresh_pa_table(self.frequency, modulation)
        self._changed('modulation %s' % MODULATION_FORMATS[modulation].name)

    def set_data_rate(self, rate_kbps):
        rate_kbps = calc.check_range('Data rate', rate_kbps,
                                     calc.DATA_RATE_RANGE)
        drate_e, drate_m = calc.data_rate_to_registers(rate_kbps)
        self._registers[MDMCFG4] = (self.get(MDMCFG4) & 0xF0) | drate_e
        self._registers[MDMCFG3] = drate_m
        self._changed('data rate %.2f kbps' % rate_kbps)

    def set_bandwidth(self, bw_khz):
        if bw_khz not in [bw.khz for bw in calc.BANDWIDTHS]:
            LOG.warning('%r kHz is not a channel filter bandwidth; using %i',
                        bw_khz, calc.DEFAULT_BANDWIDTH.khz)
        chanbw_e, chanbw_m = calc.bandwidth_to_registers(bw_khz)
        self._registers[MDMCFG4] = ((self.get(MDMCFG4) & 0x0F) |
                                    (chanbw_e << 6) | (chanbw_m << 4))
        self._changed('bandwidth %s kHz' % bw_khz)

    def set_deviation(self, dev_khz):
        dev_khz = calc.check_range('Deviation', dev_khz,
                                   calc.DEVIATION_RANGE)
        self._registers[DEVIATN] = calc.deviation_to_register(dev_khz)
        self._changed('deviation %.2f kHz' % dev_khz)

    def set_tx_power(self, power_dbm):
        try:
            power_dbm = int(power_dbm)
        except (TypeError, ValueError):
            raise errors.InvalidValueError('TX power %r is not a number' % (
                power_dbm,))
        self._tx_power = power_dbm
        self._refresh_pa_table(self.frequency, self.modulation)
        self._changed('tx power %+i dBm' % power_dbm)

    def set_pa_table_byte(self, index, value):
        if not 0 <= index < patable.PA_TABLE_SIZE:
            raise errors.InvalidValueError('PA table index %r out of range' % (
                index,))
        self._pa_table[index] = patable.check_pa_byte(value)
        self._changed('PA[%i]=0x%02X' % (index, value))

    def set_pa_table(self, values):
        self._pa_table = patable.normalize_pa_table(values, self._pa_table)
        self._changed('PA table')

    def load_preset(self, name):
        preset = presets.get_preset(name)
        self._registers.update(preset.registers)
        self._pa_table = list(preset.pa_table)
        LOG.info('Loaded preset %s', name)
        self._changed('preset %s' % name)

    def import_text(self, text):
        """Import Flipper preset data or raw hex register values

        Nothing changes if the text does not decode.  Returns the number of
        registers imported.
        """
        if export.looks_like_flipper(text):
            registers, pa_table = export.decode_flipper_block(text,
                                                              self._catalog)
        else:
            registers = export.decode_raw_hex(text, self._catalog)
            pa_table = None
        self._registers.update(registers)
        if pa_table is not None:
            self._pa_table = list(pa_table)
        LOG.info('Imported %i registers', len(registers))
        self._changed('import')
        return len(registers)

    def reset(self):
        self._registers = self._catalog.defaults()
        self._pa_table = list(patable.DEFAULT_PA_TABLE)
        self._tx_power = self._initial_power
        self._changed('reset')
