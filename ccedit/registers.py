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

"""Static CC1101 register catalog.

The catalog is an immutable value built once at import time.  Components
that need register metadata take a ``catalog`` argument defaulting to
:data:`CATALOG`.
"""

import collections
import logging

from ccedit import errors

LOG = logging.getLogger(__name__)

#: Crystal oscillator frequency in Hz
XOSC_FREQ = 26000000

MAX_ADDRESS = 0x2E
NUM_REGISTERS = MAX_ADDRESS + 1

(IOCFG2, IOCFG1, IOCFG0, FIFOTHR, SYNC1, SYNC0, PKTLEN, PKTCTRL1,
 PKTCTRL0, ADDR, CHANNR, FSCTRL1, FSCTRL0, FREQ2, FREQ1, FREQ0,
 MDMCFG4, MDMCFG3, MDMCFG2, MDMCFG1, MDMCFG0, DEVIATN, MCSM2, MCSM1,
 MCSM0, FOCCFG, BSCFG, AGCCTRL2, AGCCTRL1, AGCCTRL0, WOREVT1, WOREVT0,
 WORCTRL, FREND1, FREND0, FSCAL3, FSCAL2, FSCAL1, FSCAL0, RCCTRL1,
 RCCTRL0, FSTEST, PTEST, AGCTEST, TEST2, TEST1, TEST0) = range(NUM_REGISTERS)

MOD_2FSK = 0
MOD_GFSK = 1
MOD_ASK = 3
MOD_4FSK = 4
MOD_MSK = 7

ModulationFormat = collections.namedtuple('ModulationFormat',
                                          ['name', 'description'])

MODULATION_FORMATS = collections.OrderedDict([
    (MOD_2FSK, ModulationFormat('2-FSK', 'Binary frequency shift keying')),
    (MOD_GFSK, ModulationFormat('GFSK', 'Gaussian shaped 2-FSK')),
    (MOD_ASK, ModulationFormat('ASK/OOK', 'Amplitude shift / on-off keying')),
    (MOD_4FSK, ModulationFormat('4-FSK', 'Four level frequency shift keying')),
    (MOD_MSK, ModulationFormat('MSK', 'Minimum shift keying')),
])


class FieldDefinition:
    """A named run of bits within one register"""

    __slots__ = ('_name', '_bits', '_description', '_options')

    def __init__(self, name, bits, description, options=None):
        bits = tuple(bits)
        if not bits:
            raise errors.CatalogError('Field %s has no bits' % name)
        self._name = name
        self._bits = bits
        self._description = description
        self._options = dict(options or {})

    name = property(lambda self: self._name)
    bits = property(lambda self: self._bits)
    description = property(lambda self: self._description)

    @property
    def options(self):
        return dict(self._options)

    @property
    def low_bit(self):
        return min(self._bits)

    @property
    def high_bit(self):
        return max(self._bits)

    @property
    def width(self):
        return self.high_bit - self.low_bit + 1

    @property
    def mask(self):
        """The in-register mask covering this field"""
        return ((1 << self.width) - 1) << self.low_bit

    @property
    def contiguous(self):
        return len(set(self._bits)) == self.width

    def label(self, value):
        return self._options.get(value)

    def __repr__(self):
        return '<Field %s bits=%s>' % (self._name, self._bits)


class RegisterDefinition:
    """One addressable configuration register"""

    __slots__ = ('_address', '_name', '_description', '_default', '_fields')

    def __init__(self, address, name, description, default, fields):
        self._address = address
        self._name = name
        self._description = description
        self._default = default
        self._fields = tuple(fields)

    address = property(lambda self: self._address)
    name = property(lambda self: self._name)
    description = property(lambda self: self._description)
    default = property(lambda self: self._default)
    fields = property(lambda self: self._fields)

    def field(self, name):
        for field in self._fields:
            if field.name == name:
                return field
        raise KeyError('Register %s has no field %s' % (self._name, name))

    def __repr__(self):
        return '<Register 0x%02X %s>' % (self._address, self._name)


def _check_register(regdef):
    if not 0 <= regdef.address <= MAX_ADDRESS:
        raise errors.CatalogError('Register %s address 0x%02X out of range' % (
            regdef.name, regdef.address))
    if not 0 <= regdef.default <= 0xFF:
        raise errors.CatalogError('Register %s default %r is not a byte' % (
            regdef.name, regdef.default))
    used = {}
    for field in regdef.fields:
        for bit in field.bits:
            if not 0 <= bit <= 7:
                raise errors.CatalogError(
                    '%s.%s uses bit %r outside 0-7' % (regdef.name,
                                                       field.name, bit))
            if bit in used:
                raise errors.CatalogError(
                    '%s.%s overlaps %s at bit %i' % (regdef.name, field.name,
                                                     used[bit], bit))
            used[bit] = field.name
        if not field.contiguous:
            raise errors.CatalogError(
                '%s.%s is not a contiguous bit range' % (regdef.name,
                                                         field.name))


class Catalog:
    """Immutable set of register definitions plus navigation groups"""

    def __init__(self, definitions, groups=None):
        regs = collections.OrderedDict()
        for regdef in sorted(definitions, key=lambda r: r.address):
            _check_register(regdef)
            if regdef.address in regs:
                raise errors.CatalogError('Duplicate register address 0x%02X'
                                          % regdef.address)
            regs[regdef.address] = regdef
        self._registers = regs
        self._by_name = {r.name: r for r in regs.values()}
        self._groups = collections.OrderedDict()
        for name, addresses in (groups or {}).items():
            for addr in addresses:
                if addr not in regs:
                    raise errors.CatalogError(
                        'Group %s refers to unknown register 0x%02X' % (
                            name, addr))
            self._groups[name] = tuple(addresses)
        LOG.debug('Catalog built with %i registers in %i groups',
                  len(regs), len(self._groups))

    def get(self, address):
        return self._registers[address]

    def by_name(self, name):
        return self._by_name[name]

    def addresses(self):
        return list(self._registers.keys())

    def defaults(self):
        return {addr: r.default for addr, r in self._registers.items()}

    @property
    def groups(self):
        return collections.OrderedDict(self._groups)

    @property
    def max_address(self):
        return max(self._registers)

    def __contains__(self, address):
        return address in self._registers

    def __iter__(self):
        return iter(self._registers.values())

    def __len__(self):
        return len(self._registers)


def bits(high, low=None):
    """Return the bit indices from @high down to @low inclusive"""
    if low is None:
        low = high
    return tuple(range(high, low - 1, -1))


F = FieldDefinition

GDO_OPTIONS = {
    0x00: 'RX FIFO threshold',
    0x01: 'RX FIFO threshold or end of packet',
    0x02: 'TX FIFO threshold',
    0x03: 'TX FIFO full',
    0x06: 'Sync word sent/received',
    0x07: 'Packet received with CRC OK',
    0x0B: 'Serial clock',
    0x0C: 'Serial synchronous data output',
    0x0D: 'Serial data output (asynchronous)',
    0x0E: 'Carrier sense',
    0x29: 'CHIP_RDYn',
    0x2E: 'High impedance (3-state)',
    0x2F: 'HW to 0',
    0x3F: 'CLK_XOSC/192',
}

OFF_MODES = {0: 'IDLE', 1: 'FSTXON', 2: 'TX', 3: 'RX'}

_REGISTERS = [
    RegisterDefinition(IOCFG2, 'IOCFG2',
                       'GDO2 output pin configuration',
                       0x29, [
        F('GDO2_INV', bits(6), 'Invert output (active low)'),
        F('GDO2_CFG', bits(5, 0), 'GDO2 signal selection', GDO_OPTIONS),
    ]),
    RegisterDefinition(IOCFG1, 'IOCFG1',
                       'GDO1 output pin configuration',
                       0x2E, [
        F('GDO_DS', bits(7), 'Drive strength on the GDO pins',
          {0: 'Low', 1: 'High'}),
        F('GDO1_INV', bits(6), 'Invert output (active low)'),
        F('GDO1_CFG', bits(5, 0), 'GDO1 signal selection', GDO_OPTIONS),
    ]),
    RegisterDefinition(IOCFG0, 'IOCFG0',
                       'GDO0 output pin configuration',
                       0x3F, [
        F('TEMP_SENSOR_ENABLE', bits(7), 'Enable analog temperature sensor'),
        F('GDO0_INV', bits(6), 'Invert output (active low)'),
        F('GDO0_CFG', bits(5, 0), 'GDO0 signal selection', GDO_OPTIONS),
    ]),
    RegisterDefinition(FIFOTHR, 'FIFOTHR',
                       'RX FIFO and TX FIFO thresholds',
                       0x07, [
        F('ADC_RETENTION', bits(6), 'Retain ADC settings in SLEEP'),
        F('CLOSE_IN_RX', bits(5, 4), 'RX attenuation for close-in reception',
          {0: '0 dB', 1: '6 dB', 2: '12 dB', 3: '18 dB'}),
        F('FIFO_THR', bits(3, 0), 'FIFO threshold level'),
    ]),
    RegisterDefinition(SYNC1, 'SYNC1',
                       'Sync word, high byte',
                       0xD3, [
        F('SYNC_MSB', bits(7, 0), '8 MSB of 16-bit sync word'),
    ]),
    RegisterDefinition(SYNC0, 'SYNC0',
                       'Sync word, low byte',
                       0x91, [
        F('SYNC_LSB', bits(7, 0), '8 LSB of 16-bit sync word'),
    ]),
    RegisterDefinition(PKTLEN, 'PKTLEN',
                       'Packet length',
                       0xFF, [
        F('PACKET_LENGTH', bits(7, 0),
          'Packet length in fixed mode, maximum length in variable mode'),
    ]),
    RegisterDefinition(PKTCTRL1, 'PKTCTRL1',
                       'Packet automation control',
                       0x04, [
        F('PQT', bits(7, 5), 'Preamble quality estimator threshold'),
        F('CRC_AUTOFLUSH', bits(3), 'Flush RX FIFO on CRC failure'),
        F('APPEND_STATUS', bits(2), 'Append RSSI/LQI status bytes'),
        F('ADR_CHK', bits(1, 0), 'Address check configuration',
          {0: 'No address check', 1: 'Address check, no broadcast',
           2: 'Address check, 0x00 broadcast',
           3: 'Address check, 0x00 and 0xFF broadcast'}),
    ]),
    RegisterDefinition(PKTCTRL0, 'PKTCTRL0',
                       'Packet automation control',
                       0x45, [
        F('WHITE_DATA', bits(6), 'Data whitening'),
        F('PKT_FORMAT', bits(5, 4), 'Format of RX and TX data',
          {0: 'Normal (FIFO)', 1: 'Synchronous serial',
           2: 'Random TX', 3: 'Asynchronous serial'}),
        F('CRC_EN', bits(2), 'CRC calculation'),
        F('LENGTH_CONFIG', bits(1, 0), 'Packet length configuration',
          {0: 'Fixed', 1: 'Variable', 2: 'Infinite', 3: 'Reserved'}),
    ]),
    RegisterDefinition(ADDR, 'ADDR',
                       'Device address',
                       0x00, [
        F('DEVICE_ADDR', bits(7, 0), 'Address used for packet filtration'),
    ]),
    RegisterDefinition(CHANNR, 'CHANNR',
                       'Channel number',
                       0x00, [
        F('CHAN', bits(7, 0), 'Channel number added to base frequency'),
    ]),
    RegisterDefinition(FSCTRL1, 'FSCTRL1',
                       'Frequency synthesizer control',
                       0x0F, [
        F('FREQ_IF', bits(4, 0), 'Intermediate frequency for RX'),
    ]),
    RegisterDefinition(FSCTRL0, 'FSCTRL0',
                       'Frequency synthesizer control',
                       0x00, [
        F('FREQOFF', bits(7, 0), 'Frequency offset (two\'s complement)'),
    ]),
    RegisterDefinition(FREQ2, 'FREQ2',
                       'Frequency control word, high byte',
                       0x10, [
        F('FREQ_HI', bits(5, 0), 'FREQ[21:16]'),
    ]),
    RegisterDefinition(FREQ1, 'FREQ1',
                       'Frequency control word, middle byte',
                       0xB0, [
        F('FREQ_MID', bits(7, 0), 'FREQ[15:8]'),
    ]),
    RegisterDefinition(FREQ0, 'FREQ0',
                       'Frequency control word, low byte',
                       0x71, [
        F('FREQ_LO', bits(7, 0), 'FREQ[7:0]'),
    ]),
    RegisterDefinition(MDMCFG4, 'MDMCFG4',
                       'Modem configuration',
                       0xCA, [
        F('CHANBW_E', bits(7, 6), 'Channel bandwidth exponent'),
        F('CHANBW_M', bits(5, 4), 'Channel bandwidth mantissa'),
        F('DRATE_E', bits(3, 0), 'Data rate exponent'),
    ]),
    RegisterDefinition(MDMCFG3, 'MDMCFG3',
                       'Modem configuration',
                       0x83, [
        F('DRATE_M', bits(7, 0), 'Data rate mantissa'),
    ]),
    RegisterDefinition(MDMCFG2, 'MDMCFG2',
                       'Modem configuration',
                       0x02, [
        F('DEM_DCFILT_OFF', bits(7), 'Disable digital DC blocking filter'),
        F('MOD_FORMAT', bits(6, 4), 'Modulation format',
          {k: v.name for k, v in MODULATION_FORMATS.items()}),
        F('MANCHESTER_EN', bits(3), 'Manchester encoding'),
        F('SYNC_MODE', bits(2, 0), 'Sync word qualifier mode',
          {0: 'No preamble/sync', 1: '15/16 sync bits', 2: '16/16 sync bits',
           3: '30/32 sync bits', 4: 'Carrier sense, no sync',
           5: '15/16 + carrier sense', 6: '16/16 + carrier sense',
           7: '30/32 + carrier sense'}),
    ]),
    RegisterDefinition(MDMCFG1, 'MDMCFG1',
                       'Modem configuration',
                       0x22, [
        F('FEC_EN', bits(7), 'Forward error correction'),
        F('NUM_PREAMBLE', bits(6, 4), 'Minimum preamble bytes',
          {0: '2', 1: '3', 2: '4', 3: '6', 4: '8', 5: '12', 6: '16',
           7: '24'}),
        F('CHANSPC_E', bits(1, 0), 'Channel spacing exponent'),
    ]),
    RegisterDefinition(MDMCFG0, 'MDMCFG0',
                       'Modem configuration',
                       0xF8, [
        F('CHANSPC_M', bits(7, 0), 'Channel spacing mantissa'),
    ]),
    RegisterDefinition(DEVIATN, 'DEVIATN',
                       'Modem deviation setting',
                       0x35, [
        F('DEVIATION_E', bits(6, 4), 'Deviation exponent'),
        F('DEVIATION_M', bits(2, 0), 'Deviation mantissa'),
    ]),
    RegisterDefinition(MCSM2, 'MCSM2',
                       'Main radio control state machine',
                       0x07, [
        F('RX_TIME_RSSI', bits(4), 'RX termination based on RSSI'),
        F('RX_TIME_QUAL', bits(3), 'RX timeout qualifier'),
        F('RX_TIME', bits(2, 0), 'RX timeout for WOR'),
    ]),
    RegisterDefinition(MCSM1, 'MCSM1',
                       'Main radio control state machine',
                       0x30, [
        F('CCA_MODE', bits(5, 4), 'Clear channel indication',
          {0: 'Always', 1: 'RSSI below threshold',
           2: 'Unless receiving a packet', 3: 'RSSI and not receiving'}),
        F('RXOFF_MODE', bits(3, 2), 'State after a packet is received',
          OFF_MODES),
        F('TXOFF_MODE', bits(1, 0), 'State after a packet is sent',
          OFF_MODES),
    ]),
    RegisterDefinition(MCSM0, 'MCSM0',
                       'Main radio control state machine',
                       0x04, [
        F('FS_AUTOCAL', bits(5, 4), 'Automatic calibration',
          {0: 'Never', 1: 'IDLE to RX/TX', 2: 'RX/TX to IDLE',
           3: 'Every 4th RX/TX to IDLE'}),
        F('PO_TIMEOUT', bits(3, 2), 'Power-on timeout',
          {0: '2.3-2.4 us', 1: '37-39 us', 2: '149-155 us', 3: '597-620 us'}),
        F('PIN_CTRL_EN', bits(1), 'Radio control by pins'),
        F('XOSC_FORCE_ON', bits(0), 'Keep crystal on in SLEEP'),
    ]),
    RegisterDefinition(FOCCFG, 'FOCCFG',
                       'Frequency offset compensation',
                       0x36, [
        F('FOC_BS_CS_GATE', bits(5),
          'Freeze compensation until carrier sense'),
        F('FOC_PRE_K', bits(4, 3), 'Loop gain before sync word'),
        F('FOC_POST_K', bits(2), 'Loop gain after sync word'),
        F('FOC_LIMIT', bits(1, 0), 'Saturation point for compensation'),
    ]),
    RegisterDefinition(BSCFG, 'BSCFG',
                       'Bit synchronization configuration',
                       0x6C, [
        F('BS_PRE_KI', bits(7, 6), 'Integral gain before sync word'),
        F('BS_PRE_KP', bits(5, 4), 'Proportional gain before sync word'),
        F('BS_POST_KI', bits(3), 'Integral gain after sync word'),
        F('BS_POST_KP', bits(2), 'Proportional gain after sync word'),
        F('BS_LIMIT', bits(1, 0), 'Data rate offset saturation'),
    ]),
    RegisterDefinition(AGCCTRL2, 'AGCCTRL2',
                       'AGC control',
                       0x03, [
        F('MAX_DVGA_GAIN', bits(7, 6), 'Reduce maximum DVGA gain'),
        F('MAX_LNA_GAIN', bits(5, 3), 'Reduce maximum LNA gain'),
        F('MAGN_TARGET', bits(2, 0), 'Target channel filter amplitude',
          {0: '24 dB', 1: '27 dB', 2: '30 dB', 3: '33 dB', 4: '36 dB',
           5: '38 dB', 6: '40 dB', 7: '42 dB'}),
    ]),
    RegisterDefinition(AGCCTRL1, 'AGCCTRL1',
                       'AGC control',
                       0x40, [
        F('AGC_LNA_PRIORITY', bits(6), 'LNA gain reduction strategy'),
        F('CARRIER_SENSE_REL_THR', bits(5, 4), 'Relative carrier sense'),
        F('CARRIER_SENSE_ABS_THR', bits(3, 0), 'Absolute carrier sense'),
    ]),
    RegisterDefinition(AGCCTRL0, 'AGCCTRL0',
                       'AGC control',
                       0x91, [
        F('HYST_LEVEL', bits(7, 6), 'Hysteresis level'),
        F('WAIT_TIME', bits(5, 4), 'Samples to wait after gain change',
          {0: '8', 1: '16', 2: '24', 3: '32'}),
        F('AGC_FREEZE', bits(3, 2), 'AGC gain freeze'),
        F('FILTER_LENGTH', bits(1, 0), 'Averaging length / OOK decision'),
    ]),
    RegisterDefinition(WOREVT1, 'WOREVT1',
                       'Event0 timeout, high byte',
                       0x87, [
        F('EVENT0_HI', bits(7, 0), 'EVENT0[15:8]'),
    ]),
    RegisterDefinition(WOREVT0, 'WOREVT0',
                       'Event0 timeout, low byte',
                       0x6B, [
        F('EVENT0_LO', bits(7, 0), 'EVENT0[7:0]'),
    ]),
    RegisterDefinition(WORCTRL, 'WORCTRL',
                       'Wake on radio control',
                       0xF8, [
        F('RC_PD', bits(7), 'Power down RC oscillator'),
        F('EVENT1', bits(6, 4), 'Event1 timeout'),
        F('RC_CAL', bits(3), 'RC oscillator calibration'),
        F('WOR_RES', bits(1, 0), 'Event0 resolution'),
    ]),
    RegisterDefinition(FREND1, 'FREND1',
                       'Front end RX configuration',
                       0x56, [
        F('LNA_CURRENT', bits(7, 6), 'LNA front-end current'),
        F('LNA2MIX_CURRENT', bits(5, 4), 'LNA to mixer current'),
        F('LODIV_BUF_CURRENT_RX', bits(3, 2), 'RX LO buffer current'),
        F('MIX_CURRENT', bits(1, 0), 'Mixer current'),
    ]),
    RegisterDefinition(FREND0, 'FREND0',
                       'Front end TX configuration',
                       0x10, [
        F('LODIV_BUF_CURRENT_TX', bits(5, 4), 'TX LO buffer current'),
        F('PA_POWER', bits(2, 0), 'PA table index used for output power'),
    ]),
    RegisterDefinition(FSCAL3, 'FSCAL3',
                       'Frequency synthesizer calibration',
                       0xA9, [
        F('FSCAL3_HI', bits(7, 6), 'Charge pump calibration, upper bits'),
        F('CHP_CURR_CAL_EN', bits(5, 4), 'Charge pump current calibration'),
        F('FSCAL3_LO', bits(3, 0), 'Charge pump calibration result'),
    ]),
    RegisterDefinition(FSCAL2, 'FSCAL2',
                       'Frequency synthesizer calibration',
                       0x0A, [
        F('VCO_CORE_H_EN', bits(5), 'Choose high VCO'),
        F('FSCAL2', bits(4, 0), 'VCO current calibration result'),
    ]),
    RegisterDefinition(FSCAL1, 'FSCAL1',
                       'Frequency synthesizer calibration',
                       0x20, [
        F('FSCAL1', bits(5, 0), 'Capacitor array setting'),
    ]),
    RegisterDefinition(FSCAL0, 'FSCAL0',
                       'Frequency synthesizer calibration',
                       0x0D, [
        F('FSCAL0', bits(6, 0), 'Calibration control'),
    ]),
    RegisterDefinition(RCCTRL1, 'RCCTRL1',
                       'RC oscillator configuration',
                       0x41, [
        F('RCCTRL1', bits(6, 0), 'RC oscillator configuration'),
    ]),
    RegisterDefinition(RCCTRL0, 'RCCTRL0',
                       'RC oscillator configuration',
                       0x00, [
        F('RCCTRL0', bits(6, 0), 'RC oscillator configuration'),
    ]),
    RegisterDefinition(FSTEST, 'FSTEST',
                       'Frequency synthesizer calibration control',
                       0x59, [
        F('FSTEST', bits(7, 0), 'For test only'),
    ]),
    RegisterDefinition(PTEST, 'PTEST',
                       'Production test',
                       0x7F, [
        F('PTEST', bits(7, 0), '0xBF enables the temperature sensor in IDLE'),
    ]),
    RegisterDefinition(AGCTEST, 'AGCTEST',
                       'AGC test',
                       0x3F, [
        F('AGCTEST', bits(7, 0), 'For test only'),
    ]),
    RegisterDefinition(TEST2, 'TEST2',
                       'Various test settings',
                       0x88, [
        F('TEST2', bits(7, 0), 'Set from SmartRF Studio'),
    ]),
    RegisterDefinition(TEST1, 'TEST1',
                       'Various test settings',
                       0x31, [
        F('TEST1', bits(7, 0), 'Set from SmartRF Studio'),
    ]),
    RegisterDefinition(TEST0, 'TEST0',
                       'Various test settings',
                       0x0B, [
        F('TEST0_HI', bits(7, 2), 'Set from SmartRF Studio'),
        F('VCO_SEL_CAL_EN', bits(1), 'Enable VCO selection calibration'),
        F('TEST0_LO', bits(0), 'Set from SmartRF Studio'),
    ]),
]

REGISTER_GROUPS = collections.OrderedDict([
    ('GPIO & FIFO', [IOCFG2, IOCFG1, IOCFG0, FIFOTHR]),
    ('Sync & Packet', [SYNC1, SYNC0, PKTLEN, PKTCTRL1, PKTCTRL0, ADDR,
                       CHANNR]),
    ('Frequency', [FSCTRL1, FSCTRL0, FREQ2, FREQ1, FREQ0]),
    ('Modem', [MDMCFG4, MDMCFG3, MDMCFG2, MDMCFG1, MDMCFG0, DEVIATN]),
    ('State Machine', [MCSM2, MCSM1, MCSM0]),
    ('AGC & Offset', [FOCCFG, BSCFG, AGCCTRL2, AGCCTRL1, AGCCTRL0]),
    ('Wake on Radio', [WOREVT1, WOREVT0, WORCTRL]),
    ('Front End', [FREND1, FREND0]),
    ('Calibration', [FSCAL3, FSCAL2, FSCAL1, FSCAL0, RCCTRL1, RCCTRL0]),
    ('Test', [FSTEST, PTEST, AGCTEST, TEST2, TEST1, TEST0]),
])

CATALOG = Catalog(_REGISTERS, REGISTER_GROUPS)
