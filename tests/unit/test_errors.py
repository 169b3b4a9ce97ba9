from ccedit import errors
from tests.unit import base


class TestErrors(base.BaseTest):
    def test_protocol_error_code(self):
        exc = errors.ProtocolError(3, 'Invalid address')
        self.assertIs(errors.ErrorCode.INVALID_ADDRESS, exc.code)
        self.assertEqual('Invalid address', str(exc))

    def test_bridge_errors(self):
        self.assertTrue(issubclass(errors.NotConnectedError,
                                   errors.BridgeError))
        self.assertEqual('Not connected', str(errors.NotConnectedError()))
        exc = errors.BridgeCommandError(5, 'Write failed')
        self.assertEqual('Device error 5: Write failed', str(exc))
        self.assertEqual(5, exc.code)

    def test_codes(self):
        self.assertEqual([1, 2, 3, 4, 5],
                         [int(c) for c in errors.ErrorCode])
