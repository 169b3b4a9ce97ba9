import ddt

from ccedit import calc
from ccedit import errors
from tests.unit import base


@ddt.ddt
class TestFrequency(base.BaseTest):
    def test_default_frequency(self):
        self.assertEqual((0x10, 0xB0, 0x71),
                         calc.frequency_to_registers(433.92))
        self.assertAlmostEqual(433.92,
                               calc.registers_to_frequency(0x10, 0xB0, 0x71),
                               places=3)

    def test_within_one_quantum(self):
        quantum = calc.XOSC_FREQ / 2 ** 16 / 1000000
        freq = 300.0
        while freq <= 928.0:
            result = calc.registers_to_frequency(
                *calc.frequency_to_registers(freq))
            self.assertLessEqual(abs(result - freq), quantum, freq)
            freq += 3.137

    def test_freq2_is_six_bits(self):
        freq2, freq1, freq0 = calc.frequency_to_registers(928.0)
        self.assertLessEqual(freq2, 0x3F)
        self.assertEqual(
            calc.registers_to_frequency(freq2, freq1, freq0),
            calc.registers_to_frequency(freq2 | 0xC0, freq1, freq0))


@ddt.ddt
class TestDataRate(base.BaseTest):
    @ddt.data((38.38, (10, 0x83)), (4.8, (7, 0x83)))
    @ddt.unpack
    def test_known(self, rate, expected):
        self.assertEqual(expected, calc.data_rate_to_registers(rate))

    def test_decode(self):
        self.assertAlmostEqual(38.383,
                               calc.registers_to_data_rate(0xCA, 0x83),
                               places=3)
        self.assertAlmostEqual(4.798,
                               calc.registers_to_data_rate(0x67, 0x83),
                               places=3)

    @ddt.data(0.6, 1.2, 2.4, 3.79, 9.6, 38.4, 76.8, 100, 250, 433.3, 500)
    def test_minimal_error(self, rate):
        e, m = calc.data_rate_to_registers(rate)
        chosen = abs(calc.drate_to_kbps(e, m) - rate)
        best = min(abs(calc.drate_to_kbps(ee, mm) - rate)
                   for ee in range(16) for mm in range(256))
        self.assertAlmostEqual(best, chosen, places=9)

    def test_fields_in_range(self):
        for rate in (0.6, 500.0):
            e, m = calc.data_rate_to_registers(rate)
            self.assertTrue(0 <= e <= 15)
            self.assertTrue(0 <= m <= 255)


@ddt.ddt
class TestBandwidth(base.BaseTest):
    def test_table_round_trip(self):
        for entry in calc.BANDWIDTHS:
            e, m = calc.bandwidth_to_registers(entry.khz)
            self.assertEqual((entry.e, entry.m), (e, m))
            self.assertEqual(entry.khz,
                             calc.registers_to_bandwidth((e << 6) | (m << 4)))

    def test_sixteen_entries(self):
        self.assertEqual(16, len(calc.BANDWIDTHS))
        self.assertEqual(16, len({(b.e, b.m) for b in calc.BANDWIDTHS}))

    def test_unknown_uses_default(self):
        self.assertEqual((1, 2), calc.bandwidth_to_registers(300))
        self.assertEqual(270, calc.DEFAULT_BANDWIDTH.khz)

    def test_default_register(self):
        self.assertEqual(102, calc.registers_to_bandwidth(0xCA))

    @ddt.data((0, 0, 812500.0), (3, 3, 58035.71428571428))
    @ddt.unpack
    def test_formula(self, e, m, hz):
        self.assertAlmostEqual(hz, calc.chanbw_to_hz(e, m), places=3)


class TestDeviation(base.BaseTest):
    def test_default(self):
        self.assertEqual(0x35, calc.deviation_to_register(20.63))
        self.assertAlmostEqual(20.63, calc.register_to_deviation(0x35),
                               places=2)

    def test_minimal_error(self):
        dev = 1.5
        while dev <= 380:
            byte = calc.deviation_to_register(dev)
            chosen = abs(calc.register_to_deviation(byte) - dev)
            best = min(abs(calc.register_to_deviation((e << 4) | m) - dev)
                       for e in range(8) for m in range(8))
            self.assertAlmostEqual(best, chosen, places=9)
            dev += 4.7

    def test_packing(self):
        byte = calc.deviation_to_register(380)
        self.assertEqual(0x77, byte)


@ddt.ddt
class TestHelpers(base.BaseTest):
    @ddt.data(299.9, 928.1, 'abc', None)
    def test_range_rejected(self, value):
        self.assertRaises(errors.InvalidValueError, calc.check_range,
                          'Frequency', value, calc.FREQUENCY_RANGE)

    def test_range_accepted(self):
        self.assertEqual(300.0, calc.check_range('Frequency', '300',
                                                 calc.FREQUENCY_RANGE))

    def test_to_hex(self):
        self.assertEqual('0A', calc.to_hex(10))
        self.assertEqual('10B071', calc.to_hex(0x10B071, 6))

    def test_modulation(self):
        self.assertEqual(3, calc.modulation_from_register(0x30))
        self.assertEqual(0, calc.modulation_from_register(0x02))
