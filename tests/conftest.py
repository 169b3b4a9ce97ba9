import os
import shutil
import tempfile

_CONFIG_DIR = None


def pytest_configure(config):
    # Keep tests away from the user's real ~/.ccedit
    global _CONFIG_DIR
    _CONFIG_DIR = tempfile.mkdtemp(prefix='ccedit-test-')
    os.environ['CCEDIT_CONFIG_DIR'] = _CONFIG_DIR


def pytest_unconfigure(config):
    if _CONFIG_DIR:
        shutil.rmtree(_CONFIG_DIR, ignore_errors=True)
