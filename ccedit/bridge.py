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

"""Host side of the bridge: push register state to a connected device.

One exchange is in flight at a time.  A command on a disconnected bridge
fails immediately, and any transport failure drops the connection so that
later commands fail fast instead of hanging.
"""

import enum
import logging
import threading

import serial

from ccedit import errors
from ccedit import protocol
from ccedit import util
from ccedit.device import LineReader

LOG = logging.getLogger(__name__)
TRACE = logging.getLogger('ccedit.trace.bridge')

DEFAULT_BAUDRATE = 115200
DEFAULT_TIMEOUT = 1.0
DEFAULT_DEBOUNCE = 0.5


class State(enum.Enum):
    DISCONNECTED = 'disconnected'
    CONNECTING = 'connecting'
    CONNECTED = 'connected'


class SerialTransport:
    """A bridge device on a serial port"""

    def __init__(self, port, baudrate=DEFAULT_BAUDRATE,
                 timeout=DEFAULT_TIMEOUT):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial = None

    def open_port(self):
        self._serial = serial.Serial(port=self.port, baudrate=self.baudrate,
                                     timeout=self.timeout)
        LOG.debug('Opened %s at %i baud', self.port, self.baudrate)

    def close_port(self):
        if self._serial is not None:
            self._serial.close()
            self._serial = None

    def read(self, size):
        if self._serial is None:
            raise errors.NotConnectedError('Port %s is not open' % self.port)
        data = self._serial.read(size)
        if data:
            TRACE.debug('R:\n%s', util.hexprint(data, block_size=16))
        return data

    def write(self, data):
        if self._serial is None:
            raise errors.NotConnectedError('Port %s is not open' % self.port)
        TRACE.debug('W:\n%s', util.hexprint(data, block_size=16))
        self._serial.write(data)

    def __str__(self):
        return self.port


class LoopbackTransport:
    """An in-process device answering through a CommandDispatcher"""

    def __init__(self, dispatcher):
        self.dispatcher = dispatcher
        self.is_open = False
        self._reader = LineReader()
        self._pending = bytearray()

    def open_port(self):
        self.is_open = True
        self._pending.clear()

    def close_port(self):
        self.is_open = False

    def _check_open(self):
        if not self.is_open:
            raise errors.NotConnectedError('Loopback is not open')

    def write(self, data):
        self._check_open()
        for line in self._reader.feed(data):
            response = self.dispatcher.handle_line(line).encode()
            TRACE.debug('%s -> %s', line, response)
            self._pending.extend(response)

    def read(self, size):
        self._check_open()
        data = bytes(self._pending[:size])
        del self._pending[:size]
        return data

    def __str__(self):
        return 'loopback'


class Bridge:
    def __init__(self, transport):
        self.transport = transport
        self.state = State.DISCONNECTED
        self.connection_error = None
        self._listeners = []
        self._lock = threading.Lock()

    @property
    def connected(self):
        return self.state == State.CONNECTED

    def add_state_listener(self, callback):
        self._listeners.append(callback)

    def _set_state(self, state):
        if state == self.state:
            return
        LOG.info('Bridge %s: %s -> %s', self.transport, self.state.value,
                 state.value)
        self.state = state
        for callback in list(self._listeners):
            callback(state)

    def connect(self):
        self.connection_error = None
        self._set_state(State.CONNECTING)
        try:
            self.transport.open_port()
        except (OSError, errors.BridgeError) as e:
            LOG.error('Failed to open %s: %s', self.transport, e)
            self.connection_error = str(e)
            self._set_state(State.DISCONNECTED)
            raise errors.BridgeError('Failed to connect: %s' % e)
        self._set_state(State.CONNECTED)

    def disconnect(self):
        try:
            self.transport.close_port()
        except OSError as e:
            LOG.warning('Error closing %s: %s', self.transport, e)
        self._set_state(State.DISCONNECTED)

    def _read_line(self):
        reader = LineReader()
        while True:
            data = self.transport.read(1)
            if not data:
                raise errors.BridgeError('Timed out waiting for response')
            lines = reader.feed(data)
            if lines:
                return lines[0]

    def send_command(self, cmd):
        """Send @cmd and return the device's (non-error) Response"""
        if not self.connected:
            raise errors.NotConnectedError()

        with self._lock:
            try:
                self.transport.write(cmd.encode())
                line = self._read_line()
            except (OSError, errors.BridgeError) as e:
                LOG.error('Bridge I/O failed during %s: %s', cmd.name, e)
                self.connection_error = str(e)
                self.disconnect()
                raise errors.BridgeError(str(e))

        try:
            response = protocol.parse_response(line)
        except errors.ProtocolError as e:
            raise errors.BridgeError('Invalid response %r: %s' % (line,
                                                                  e.msg))
        if isinstance(response, protocol.Error):
            raise errors.BridgeCommandError(int(response.code), response.msg)
        return response

    def write_register(self, addr, value):
        return self.send_command(protocol.WriteRegister(addr, value))

    def send_registers(self, registers, pa_table=None):
        LOG.info('Sending %i registers', len(registers))
        return self.send_command(protocol.WriteBulk(registers, pa_table))

    def read_register(self, addr):
        response = self.send_command(protocol.ReadRegister(addr))
        if not isinstance(response, protocol.Data):
            raise errors.BridgeError('Expected data response, got %r' % (
                response,))
        return response.value

    def ping(self):
        """Return True if the device acknowledged a ping"""
        if not self.connected:
            return False
        try:
            response = self.send_command(protocol.Ping())
        except errors.BridgeError as e:
            LOG.warning('Ping failed: %s', e)
            return False
        return isinstance(response, protocol.Ack)


class AutoSync:
    """Push the whole bank to the bridge shortly after it stops changing

    Each change restarts the delay, so a burst of edits becomes one push.
    """

    def __init__(self, bridge, bank, delay=DEFAULT_DEBOUNCE):
        self.bridge = bridge
        self.bank = bank
        self.delay = delay
        self.enabled = False
        self.last_error = None
        self.pushes = 0
        self._timer = None
        self._lock = threading.Lock()
        self._push_lock = threading.Lock()

    def enable(self):
        if not self.enabled:
            self.bank.add_listener(self._bank_changed)
            self.enabled = True

    def disable(self):
        if self.enabled:
            self.bank.remove_listener(self._bank_changed)
            self.enabled = False
        self._cancel()

    @property
    def pending(self):
        with self._lock:
            return self._timer is not None

    def _cancel(self):
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _bank_changed(self, bank):
        if not self.bridge.connected:
            return
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self):
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        self._push()

    def _push(self):
        with self._push_lock:
            try:
                self.bridge.send_registers(self.bank.snapshot(),
                                           self.bank.pa_table)
                self.last_error = None
                self.pushes += 1
            except errors.BridgeError as e:
                LOG.warning('Auto-sync push failed: %s', e)
                self.last_error = e

    def flush(self):
        """Push now if a push is waiting; return True if one was sent"""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is None:
            # Let a push already started by the timer finish first
            with self._push_lock:
                return False
        timer.cancel()
        self._push()
        return True
