from ccedit import rfcheck
from tests.unit import base


class TestRfCheck(base.BaseTest):
    def _fields(self, result, severity):
        return [w.field for w in result.warnings if w.severity == severity]

    def test_two_level_too_narrow(self):
        result = rfcheck.validate_rf_parameters(50, 50, 10, 0)
        self.assertFalse(result.is_valid)
        self.assertEqual(['bandwidth'], [w.field for w in result.errors()])
        self.assertIn('2×', result.errors()[0].message)

    def test_four_level_too_narrow(self):
        result = rfcheck.validate_rf_parameters(200, 50, 100, 4)
        self.assertFalse(result.is_valid)
        self.assertIn('6×', result.errors()[0].message)
        self.assertEqual(400, result.suggested_bandwidth)

    def test_ask_ignores_deviation(self):
        for dev in (0, 50, 1000):
            result = rfcheck.validate_rf_parameters(200, dev, 100, 3)
            self.assertEqual(0, result.modulation_index)
            self.assertTrue(result.is_valid)
            self.assertEqual(200, result.suggested_bandwidth)
            self.assertEqual([], result.warnings)

    def test_ask_too_narrow(self):
        result = rfcheck.validate_rf_parameters(10, 0, 10, 3)
        self.assertTrue(result.is_valid)
        self.assertEqual(['bandwidth'], self._fields(result, rfcheck.WARNING))

    def test_low_index(self):
        result = rfcheck.validate_rf_parameters(100, 1, 10, 0)
        self.assertAlmostEqual(0.2, result.modulation_index)
        self.assertEqual(['deviation'], self._fields(result, rfcheck.WARNING))
        self.assertEqual(['bandwidth'], self._fields(result, rfcheck.INFO))

    def test_low_but_usable_index(self):
        result = rfcheck.validate_rf_parameters(100, 2, 10, 0)
        self.assertIn('general', self._fields(result, rfcheck.INFO))

    def test_wideband_index(self):
        result = rfcheck.validate_rf_parameters(120, 30, 10, 0)
        self.assertIn('wideband',
                      ' '.join(w.message for w in result.warnings))

    def test_four_level_low_index(self):
        result = rfcheck.validate_rf_parameters(300, 3, 10, 4)
        self.assertTrue(result.is_valid)
        self.assertEqual(['deviation'], self._fields(result, rfcheck.WARNING))

    def test_default_registers_clean(self):
        result = rfcheck.validate_rf_parameters(102, 20.63, 38.38, 0)
        self.assertTrue(result.is_valid)
        self.assertEqual([], result.warnings)

    def test_zero_rate(self):
        self.assertEqual(0, rfcheck.modulation_index(10, 0))

    def test_suggested_bandwidth(self):
        self.assertEqual(110, rfcheck.suggested_bandwidth(50, 10))
        self.assertEqual(310, rfcheck.suggested_bandwidth(50, 10, True))
