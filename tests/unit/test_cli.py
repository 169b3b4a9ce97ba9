import os
import shutil
import sys
import tempfile
from unittest import mock

from ccedit import bridge
from ccedit import config
from ccedit import device
from ccedit.cli import main
from tests.unit import base


class TestCLI(base.BaseTest):
    def setUp(self):
        super().setUp()
        self.stdout_lines = []
        self.tempdir = tempfile.mkdtemp()
        self.use(mock.patch('sys.exit'))
        self.use(mock.patch.object(main, 'print', new=self.fake_print))
        self.use(mock.patch.object(
            config, '_CONFIG',
            config.CceditConfig(os.path.join(self.tempdir, 'conf'))))

    def tearDown(self):
        super().tearDown()
        shutil.rmtree(self.tempdir)

    def fake_print(self, *a):
        for i in a:
            self.stdout_lines.append(str(i))

    @property
    def stdout(self):
        return '\n'.join(self.stdout_lines)

    def assertExit(self, code):
        sys.exit.assert_called_once_with(code)

    def test_list_presets(self):
        main.main(args=['--list-presets'])
        self.assertIn('AM270', self.stdout)
        self.assertIn('FM476', self.stdout)
        self.assertExit(0)

    def test_list_registers(self):
        main.main(args=['--list-registers'])
        self.assertIn('GPIO & FIFO:', self.stdout)
        self.assertIn('0x0D FREQ2    0x10', self.stdout)
        self.assertExit(0)

    def test_preset_export(self):
        main.main(args=['--preset', 'FM238', '--export', 'flipper_setting',
                        '--name', 'Test'])
        self.assertIn('Custom_preset_name: Test', self.stdout)
        self.assertIn('Custom_preset_module: CC1101', self.stdout)
        self.assertIn(' 15 04 ', self.stdout)
        self.assertExit(0)

    def test_default_export_name(self):
        main.main(args=['--export', 'c_array'])
        self.assertIn('Custom_registers[]', self.stdout)

    def test_show(self):
        main.main(args=['--freq', '315', '--modulation', 'ask/ook',
                        '--show'])
        self.assertIn('Frequency:  315.0', self.stdout)
        self.assertIn('Modulation: ASK/OOK', self.stdout)
        self.assertIn('PA table:   00 C2 00', self.stdout)
        self.assertExit(0)

    def test_physical_setters(self):
        main.main(args=['--data-rate', '4.8', '--bandwidth', '270',
                        '--deviation', '47.6', '--power', '0',
                        '--modulation', '0', '--show'])
        self.assertIn('Data rate:  4.80 kbps', self.stdout)
        self.assertIn('Bandwidth:  270 kHz', self.stdout)
        self.assertIn('Deviation:  47.61 kHz', self.stdout)
        self.assertIn('PA table:   60 00', self.stdout)
        self.assertExit(0)

    def test_out_of_range(self):
        main.main(args=['--freq', '1000', '--show'])
        self.assertEqual('', self.stdout)
        self.assertExit(1)

    def test_bad_modulation(self):
        main.main(args=['--modulation', 'FM', '--show'])
        self.assertExit(1)

    def test_set_reg_and_dump(self):
        main.main(args=['--set-reg', '0x06=0x3D', '--set-reg', '0=1',
                        '--dump'])
        self.assertIn('00: 01 2E 3F 07 D3 91 3D 04', self.stdout)
        self.assertExit(0)

    def test_import_and_output(self):
        infile = os.path.join(self.tempdir, 'in.txt')
        outfile = os.path.join(self.tempdir, 'out.h')
        with open(infile, 'w') as f:
            f.write('Custom_preset_data: 06 3D 00 00 00 C0 00 00 00 00 00 00')
        main.main(args=['--import', infile, '--export', 'c_array',
                        '--name', 'imp', '-o', outfile])
        with open(outfile) as f:
            text = f.read()
        self.assertIn('    0x3D,  // 0x06 PKTLEN', text)
        self.assertIn('0x00, 0xC0, 0x00', text)
        self.assertExit(0)

    def test_import_failure(self):
        infile = os.path.join(self.tempdir, 'in.txt')
        with open(infile, 'w') as f:
            f.write('Custom_preset_data: 06 3D')
        main.main(args=['--import', infile, '--export', 'raw_hex'])
        self.assertEqual('', self.stdout)
        self.assertExit(1)

    def test_missing_import_file(self):
        main.main(args=['--import', os.path.join(self.tempdir, 'nope')])
        self.assertExit(1)

    def test_loopback_bridge(self):
        main.main(args=['--port', 'loopback', '--set-reg', '0x0D=0x0C',
                        '--ping', '--push', '--read-reg', '0x0D'])
        self.assertIn('Ping OK', self.stdout)
        self.assertIn('Sent 47 registers', self.stdout)
        self.assertIn('0x0D = 0x0C', self.stdout)
        self.assertExit(0)

    def test_read_reg_out_of_range(self):
        main.main(args=['--port', 'loopback', '--read-reg', '0x40'])
        self.assertNotIn('0x40 =', self.stdout)
        self.assertExit(1)

    def test_bridge_without_port(self):
        main.main(args=['--ping'])
        self.assertExit(1)

    @mock.patch('ccedit.device.serve')
    @mock.patch('serial.Serial')
    def test_serve(self, mock_serial, mock_serve):
        main.main(args=['--serve', '--port', '/dev/ttyUSB0'])
        mock_serial.assert_called_once_with(port='/dev/ttyUSB0',
                                            baudrate=115200, timeout=1.0)
        self.assertTrue(mock_serve.called)
        mock_serial.return_value.close.assert_called_once_with()
        self.assertExit(0)

    def test_serve_loopback_rejected(self):
        main.main(args=['--serve', '--port', 'loopback'])
        self.assertExit(1)

    def test_autosync(self):
        memdev = device.MemoryDevice()
        self.use(mock.patch.object(device, 'MemoryDevice',
                                   return_value=memdev))
        main.main(args=['--port', 'loopback', '--autosync',
                        '--set-reg', '0x06=0x3D', '--freq', '315'])
        self.assertIn('Auto-synced 1 times', self.stdout)
        self.assertEqual(0x3D, memdev.registers[0x06])
        self.assertEqual(0x0C, memdev.registers[0x0D])
        self.assertExit(0)

    def test_autosync_from_config(self):
        config._CONFIG.set('autosync', 'True', 'bridge')
        config._CONFIG.set('debounce', '0.01', 'bridge')
        with mock.patch('ccedit.bridge.AutoSync',
                        wraps=bridge.AutoSync) as mock_sync:
            main.main(args=['--port', 'loopback', '--set-reg', '0x06=0x3D'])
        self.assertEqual(0.01, mock_sync.call_args[1]['delay'])
        self.assertIn('Auto-synced', self.stdout)
        self.assertExit(0)

    def test_no_autosync(self):
        config._CONFIG.set('autosync', 'True', 'bridge')
        main.main(args=['--port', 'loopback', '--no-autosync',
                        '--set-reg', '0x06=0x3D'])
        self.assertNotIn('Auto-synced', self.stdout)
        self.assertExit(0)

    def test_autosync_push_fails(self):
        memdev = device.MemoryDevice()
        memdev.fail_writes = True
        self.use(mock.patch.object(device, 'MemoryDevice',
                                   return_value=memdev))
        main.main(args=['--port', 'loopback', '--autosync',
                        '--set-reg', '0x06=0x3D'])
        self.assertNotIn('Auto-synced', self.stdout)
        self.assertExit(1)
