import os
import shutil
import tempfile
from unittest import mock

from ccedit import config
from ccedit import platform
from tests.unit import base


class TestConfig(base.BaseTest):
    def setUp(self):
        super().setUp()
        self.tempdir = tempfile.mkdtemp()
        self.confdir = os.path.join(self.tempdir, 'conf')

    def tearDown(self):
        super().tearDown()
        shutil.rmtree(self.tempdir)

    def test_defaults(self):
        conf = config.ConfigProxy(config.CceditConfig(self.confdir), 'bridge')
        self.assertEqual(115200, conf.get_int('baudrate'))
        self.assertEqual(1.0, conf.get_float('timeout'))
        self.assertFalse(conf.get_bool('autosync'))
        self.assertEqual(0.5, conf.get_float('debounce'))
        self.assertEqual('', conf.get('port'))
        self.assertFalse(conf.is_defined('port'))
        self.assertEqual('Custom', conf.get('preset_name', 'defaults'))
        self.assertEqual('x', conf.get('nothing', default='x'))

    def test_save_and_reload(self):
        cfg = config.CceditConfig(self.confdir)
        conf = config.ConfigProxy(cfg, 'bridge')
        conf.set('port', '/dev/ttyACM0')
        conf.set_bool('autosync', True)
        conf.set('power_dbm', 5, 'defaults')
        cfg.save()
        self.assertTrue(os.path.exists(
            os.path.join(self.confdir, 'ccedit.config')))

        conf = config.ConfigProxy(config.CceditConfig(self.confdir),
                                  'bridge')
        self.assertEqual('/dev/ttyACM0', conf.get('port'))
        self.assertTrue(conf.get_bool('autosync'))
        self.assertEqual(5, conf.get_int('power_dbm', 'defaults'))

    def test_bad_values_use_default(self):
        cfg = config.CceditConfig(self.confdir)
        conf = config.ConfigProxy(cfg, 'bridge')
        conf.set('baudrate', 'fast')
        conf.set('timeout', 'never')
        self.assertEqual(9600, conf.get_int('baudrate', default=9600))
        self.assertEqual(2.0, conf.get_float('timeout', default=2.0))

    def test_remove_option(self):
        cfg = config.CceditConfig(self.confdir)
        cfg.set('port', 'COM3', 'bridge')
        self.assertTrue(cfg.is_defined('port', 'bridge'))
        cfg.remove_option('bridge', 'port')
        self.assertFalse(cfg.is_defined('port', 'bridge'))
        self.assertEqual('', cfg.get('port', 'bridge'))

    def test_module_get_uses_platform_dir(self):
        with mock.patch.object(config, '_CONFIG', None), \
                mock.patch.object(platform, 'PLATFORM',
                                  platform.UnixPlatform(self.confdir)):
            proxy = config.get('defaults')
            self.assertEqual(10, proxy.get_int('power_dbm'))
            self.assertIs(config._CONFIG, config.get()._config)


class TestPlatform(base.BaseTest):
    def test_unix_default(self):
        with mock.patch('pathlib.Path.home', return_value='/home/user'):
            plat = platform.UnixPlatform(None)
        self.assertEqual(os.path.join('/home/user', '.ccedit'),
                         plat.config_dir())

    def test_config_file(self):
        plat = platform.UnixPlatform('/tmp/cc')
        self.assertEqual(os.path.join('/tmp/cc', 'foo.conf'),
                         plat.config_file('f/oo.conf'))

    def test_win32_filter(self):
        with mock.patch.dict(os.environ, {'APPDATA': 'C:\\Users\\x'}):
            plat = platform.Win32Platform()
        self.assertTrue(plat.config_dir().endswith('ccedit'))
        self.assertEqual('abc.txt', plat.filter_filename('a<b>c?.txt'))

    def test_env_override(self):
        with mock.patch.object(platform, 'PLATFORM', None), \
                mock.patch.dict(os.environ, {'CCEDIT_CONFIG_DIR': '/tmp/o'}):
            self.assertEqual('/tmp/o', platform.get_platform().config_dir())
