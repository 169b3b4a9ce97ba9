import collections
from unittest import mock

import ddt

from ccedit import errors
from ccedit import patable
from tests.unit import base


@ddt.ddt
class TestPaTable(base.BaseTest):
    @ddt.data((300, '315MHz'), (349.99, '315MHz'), (350, '433MHz'),
              (433.92, '433MHz'), (499.9, '433MHz'), (500, '868MHz'),
              (899.9, '868MHz'), (900, '915MHz'), (928, '915MHz'))
    @ddt.unpack
    def test_get_band(self, freq, band):
        self.assertEqual(band, patable.get_band(freq))

    def test_fsk_layout(self):
        table = patable.get_pa_table(433.92, 10, False)
        self.assertEqual([0xC0, 0, 0, 0, 0, 0, 0, 0], table)

    def test_ask_layout(self):
        table = patable.get_pa_table(433.92, 10, True)
        self.assertEqual([0, 0xC0, 0, 0, 0, 0, 0, 0], table)

    def test_nearest_power(self):
        self.assertEqual(7, patable.closest_power(
            patable.PA_TABLES['433MHz'], 8))
        self.assertEqual(0x81, patable.get_pa_table(868, 3)[0])
        self.assertEqual(0x12, patable.get_pa_table(315, -40)[0])
        self.assertEqual(0xC0, patable.get_pa_table(915, 20)[0])

    def test_tie_keeps_first(self):
        table = collections.OrderedDict([(0, 0x01), (10, 0x02)])
        self.assertEqual(0, patable.closest_power(table, 5))

    def test_empty_band_falls_back(self):
        with mock.patch.dict(patable.PA_TABLES,
                             {'433MHz': collections.OrderedDict()}):
            table = patable.get_pa_table(433.92, 5)
        self.assertEqual(patable.DEFAULT_PA_VALUE, table[0])

    def test_normalize_pads_from_prior(self):
        self.assertEqual([1, 2, 0, 0, 0, 0, 0, 0],
                         patable.normalize_pa_table([1, 2]))
        self.assertEqual([1, 2, 9, 9, 9, 9, 9, 9],
                         patable.normalize_pa_table([1, 2], [9] * 8))

    def test_normalize_truncates(self):
        self.assertEqual(list(range(8)),
                         patable.normalize_pa_table(list(range(10))))

    @ddt.data(256, -1, 'x', None)
    def test_bad_byte(self, value):
        self.assertRaises(errors.InvalidValueError,
                          patable.normalize_pa_table, [value])
