from ccedit import util
from tests.unit import base


class TestUtils(base.BaseTest):
    def test_hexprint_short(self):
        expected = ('00: 00 00 00 00 00 00 00 00   ........\n'
                    '08: 00                        ........\n')
        self.assertEqual(expected, util.hexprint(b'\x00' * 9))

    def test_hexprint_even(self):
        expected = '00: 00 00 00 00 00 00 00 00   ........\n'
        self.assertEqual(expected, util.hexprint(b'\x00' * 8))

    def test_hexprint_printable(self):
        expected = '00: 41 42 7E 2E 00 00 00 00   AB......\n'
        self.assertEqual(expected, util.hexprint(b'AB~.\x00\x00\x00\x00'))

    def test_hexprint_block_size(self):
        out = util.hexprint(bytes(range(32)), block_size=16)
        self.assertEqual(['00', '10'],
                         [line.split(':')[0] for line in out.splitlines()])

    def test_hexprint_addrfmt(self):
        out = util.hexprint(b'\x01', addrfmt='0x%(addr)04x')
        self.assertTrue(out.startswith('0x0000: 01 '))

    def test_parse_int(self):
        self.assertEqual(16, util.parse_int('0x10'))
        self.assertEqual(16, util.parse_int('16'))
        self.assertRaises(ValueError, util.parse_int, 'x')

    def test_get_dict_rev(self):
        self.assertEqual(3, util.get_dict_rev({1: 'a', 3: 'b'}, 'b'))
        self.assertRaises(KeyError, util.get_dict_rev, {1: 'a'}, 'z')
