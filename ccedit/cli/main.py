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

import argparse
import logging
import sys

import serial

from ccedit import logger
from ccedit import bank as bank_mod
from ccedit import bridge as bridge_mod
from ccedit import config, device, errors, export, patable, presets, util
from ccedit.registers import CATALOG, MODULATION_FORMATS

LOG = logging.getLogger("ccedit")
LOOPBACK = 'loopback'


class SetRegisterAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        try:
            addr, value = values.split('=', 1)
            pair = (util.parse_int(addr), util.parse_int(value))
        except ValueError:
            raise argparse.ArgumentError(
                self, "Expected ADDR=VALUE, got %r" % values)
        items = list(getattr(namespace, self.dest, None) or [])
        items.append(pair)
        setattr(namespace, self.dest, items)


def parse_modulation(text):
    names = {code: fmt.name.lower() for code, fmt in
             MODULATION_FORMATS.items()}
    try:
        return util.get_dict_rev(names, text.lower())
    except KeyError:
        pass
    try:
        code = util.parse_int(text)
    except ValueError:
        code = None
    if code not in MODULATION_FORMATS:
        raise errors.InvalidValueError(
            "Unknown modulation %r (choose from %s)" % (
                text, ", ".join(f.name for f in MODULATION_FORMATS.values())))
    return code


def list_presets():
    for preset in presets.PRESETS.values():
        print("%-6s %8.2f MHz %-8s %6.2f kbps  BW %3i kHz  dev %5.2f kHz" % (
            preset.name, preset.frequency,
            MODULATION_FORMATS[preset.modulation].name, preset.data_rate,
            preset.bandwidth, preset.deviation))


def list_registers(regbank):
    for group, addresses in CATALOG.groups.items():
        print("%s:" % group)
        for addr in addresses:
            regdef = CATALOG.get(addr)
            print("  0x%02X %-8s 0x%02X  %s" % (
                addr, regdef.name, regbank.get(addr), regdef.description))


def show(regbank):
    view = regbank.derived
    print("Frequency:  %.4f MHz" % view.frequency)
    fmt = MODULATION_FORMATS.get(view.modulation)
    print("Modulation: %s" % (fmt.name if fmt else
                              "reserved (%i)" % view.modulation))
    print("Data rate:  %.2f kbps" % view.data_rate)
    print("Bandwidth:  %i kHz" % view.bandwidth)
    print("Deviation:  %.2f kHz" % view.deviation)
    print("PA table:   %s" % " ".join("%02X" % b for b in regbank.pa_table))
    result = view.validation
    print("Modulation index: %.2f, suggested bandwidth %.0f kHz" % (
        result.modulation_index, result.suggested_bandwidth))
    for warning in result.warnings:
        print("[%s] %s: %s" % (warning.severity, warning.field,
                               warning.message))
    if not result.is_valid:
        LOG.warning("RF parameters are inconsistent")


def dump(regbank):
    data = bytes(regbank.get(addr) for addr in CATALOG.addresses())
    print("Registers:\n%s" % util.hexprint(data))
    print("PA table:\n%s" % util.hexprint(bytes(regbank.pa_table)))


def apply_edits(regbank, options):
    if options.preset:
        regbank.load_preset(options.preset)

    if options.import_file:
        with open(options.import_file, encoding='utf-8') as f:
            count = regbank.import_text(f.read())
        LOG.info("Imported %i registers from %s", count,
                 options.import_file)

    for addr, value in options.set_reg or []:
        regbank.set_register(addr, value)

    if options.freq is not None:
        regbank.set_frequency(options.freq)
    if options.modulation is not None:
        regbank.set_modulation(parse_modulation(options.modulation))
    if options.data_rate is not None:
        regbank.set_data_rate(options.data_rate)
    if options.bandwidth is not None:
        regbank.set_bandwidth(options.bandwidth)
    if options.deviation is not None:
        regbank.set_deviation(options.deviation)
    if options.power is not None:
        regbank.set_tx_power(options.power)


def do_export(regbank, options, defaults):
    name = options.name or defaults.get("preset_name")
    text = export.export(options.export, name, regbank.snapshot(),
                         regbank.pa_table)
    if options.output:
        with open(options.output, "w", encoding='utf-8') as f:
            f.write(text + "\n")
        LOG.info("Wrote %s export to %s", options.export, options.output)
    else:
        print(text)


def make_bridge(options, conf):
    if options.port == LOOPBACK:
        transport = bridge_mod.LoopbackTransport(
            device.CommandDispatcher(device.MemoryDevice()))
    else:
        transport = bridge_mod.SerialTransport(
            options.port, baudrate=options.baud,
            timeout=conf.get_float("timeout",
                                   default=bridge_mod.DEFAULT_TIMEOUT))
    return bridge_mod.Bridge(transport)


def do_bridge(regbank, options, conf):
    if not options.port:
        raise errors.BridgeError("No bridge port given (use --port)")
    bridge = make_bridge(options, conf)
    bridge.connect()
    try:
        if options.ping:
            if not bridge.ping():
                raise errors.BridgeError("No reply to ping")
            print("Ping OK")
        if options.push:
            bridge.send_registers(regbank.snapshot(), regbank.pa_table)
            print("Sent %i registers" % len(regbank.snapshot()))
        if options.read_reg is not None:
            value = bridge.read_register(options.read_reg)
            print("0x%02X = 0x%02X" % (options.read_reg, value))
    finally:
        bridge.disconnect()


def do_serve(options, conf):
    if not options.port or options.port == LOOPBACK:
        raise errors.BridgeError("--serve needs a serial port")
    dispatcher = device.CommandDispatcher(device.MemoryDevice())
    port = serial.Serial(port=options.port, baudrate=options.baud,
                         timeout=conf.get_float(
                             "timeout", default=bridge_mod.DEFAULT_TIMEOUT))
    try:
        device.serve(port, dispatcher)
    except KeyboardInterrupt:
        LOG.info("Stopped after %i commands", dispatcher.commands_processed)
    finally:
        port.close()


def sync_edits(regbank, options, conf):
    """Apply the edits while pushing every change to the bridge"""
    bridge = make_bridge(options, conf)
    bridge.connect()
    sync = bridge_mod.AutoSync(
        bridge, regbank,
        delay=conf.get_float("debounce", default=bridge_mod.DEFAULT_DEBOUNCE))
    sync.enable()
    try:
        apply_edits(regbank, options)
        sync.flush()
        if sync.last_error is not None:
            raise errors.BridgeError("Auto-sync failed: %s" % sync.last_error)
        print("Auto-synced %i times" % sync.pushes)
    finally:
        sync.disable()
        bridge.disconnect()


def run(regbank, options, conf, defaults):
    if options.autosync and options.port:
        sync_edits(regbank, options, conf)
    else:
        apply_edits(regbank, options)

    if options.list_registers:
        list_registers(regbank)
    if options.show:
        show(regbank)
    if options.dump:
        dump(regbank)
    if options.export:
        do_export(regbank, options, defaults)
    if options.ping or options.push or options.read_reg is not None:
        do_bridge(regbank, options, conf)


def main(args=None):
    conf = config.get("bridge")
    defaults = config.get("defaults")

    parser = argparse.ArgumentParser(
        description="Edit, convert and push CC1101 register configurations")
    logger.add_version_argument(parser)

    parser.add_argument("--list-presets", action="store_true",
                        help="List the built-in presets")
    parser.add_argument("--list-registers", action="store_true",
                        help="List registers by group with current values")

    editarg = parser.add_argument_group("Editing Options")
    editarg.add_argument("--preset", help="Start from a built-in preset")
    editarg.add_argument("--import", dest="import_file", metavar="FILE",
                         help="Import Flipper preset data or raw hex")
    editarg.add_argument("--set-reg", action=SetRegisterAction,
                         metavar="ADDR=VALUE",
                         help="Set a register (may be repeated)")
    editarg.add_argument("--freq", type=float, metavar="MHZ",
                         help="Carrier frequency in MHz")
    editarg.add_argument("--modulation",
                         help="Modulation format (%s)" % ", ".join(
                             f.name for f in MODULATION_FORMATS.values()))
    editarg.add_argument("--data-rate", type=float, metavar="KBPS",
                         help="Data rate in kbps")
    editarg.add_argument("--bandwidth", type=int, metavar="KHZ",
                         help="Channel filter bandwidth in kHz")
    editarg.add_argument("--deviation", type=float, metavar="KHZ",
                         help="FSK deviation in kHz")
    editarg.add_argument("--power", type=int, metavar="DBM",
                         help="Transmit power in dBm")

    outarg = parser.add_argument_group("Output Options")
    outarg.add_argument("--show", action="store_true",
                        help="Show derived RF parameters and warnings")
    outarg.add_argument("--dump", action="store_true",
                        help="Hex dump the registers and PA table")
    outarg.add_argument("--export", choices=list(export.EXPORT_FORMATS),
                        help="Export the configuration")
    outarg.add_argument("--name", help="Preset name for exports")
    outarg.add_argument("-o", "--output", help="Write the export to a file")

    bridgearg = parser.add_argument_group("Bridge Options")
    bridgearg.add_argument("--port", default=conf.get("port") or None,
                           help="Bridge serial port ('%s' for a "
                           "simulated device)" % LOOPBACK)
    bridgearg.add_argument("--baud", type=int,
                           default=conf.get_int(
                               "baudrate",
                               default=bridge_mod.DEFAULT_BAUDRATE),
                           help="Serial baud rate")
    bridgearg.add_argument("--ping", action="store_true",
                           help="Check the bridge is responding")
    bridgearg.add_argument("--push", action="store_true",
                           help="Send all registers and the PA table")
    bridgearg.add_argument("--read-reg", type=util.parse_int,
                           metavar="ADDR", help="Read a register back")
    bridgearg.add_argument("--autosync", action=argparse.BooleanOptionalAction,
                           default=conf.get_bool("autosync"),
                           help="Push each edit to the bridge as it is made")
    bridgearg.add_argument("--serve", action="store_true",
                           help="Act as a simulated bridge device on --port")
    logger.add_arguments(parser)

    options = parser.parse_args(args)
    logger.handle_options(options)

    try:
        if options.list_presets:
            list_presets()
        elif options.serve:
            do_serve(options, conf)
        else:
            regbank = bank_mod.RegisterBank(
                tx_power=defaults.get_int("power_dbm",
                                          default=patable.DEFAULT_POWER))
            run(regbank, options, conf, defaults)
    except (errors.InvalidValueError, errors.InvalidDataError,
            errors.ProtocolError, errors.BridgeError, OSError) as e:
        LOG.error("%s", e)
        sys.exit(1)
    else:
        sys.exit(0)
