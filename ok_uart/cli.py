#!/usr/bin/env python3

"""CLI tool to send to or monitor a serial port"""

import argparse
import logging
import ok_logging_setup
import pydantic
import re

import ok_uart

ok_logging_setup.skip_traceback_for(ok_uart.SerialException)
ok_logging_setup.skip_traceback_for(ok_uart.InvalidHexInput)


def main():
    args = parse_args()
    level = "debug" if args.verbose else "info"
    ok_logging_setup.install({"OK_LOGGING_LEVEL": level})
    try:
        dispatch(args)
    except KeyboardInterrupt:
        ok_logging_setup.exit("🛑 Interrupted")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Talk to a serial port.")
    parser.add_argument(
        "--port",
        "-p",
        default=ok_uart.SessionConfig.model_fields["port"].default,
        help="serial device (default: %(default)s)",
    )
    parser.add_argument(
        "--baud",
        "-b",
        type=int,
        default=ok_uart.SessionConfig.model_fields["baud"].default,
        help="baud rate (default: %(default)s)",
    )
    parser.add_argument(
        "--hex",
        "-x",
        action="store_true",
        help="send and show data as hex bytes",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="print debug logs"
    )

    subparsers = parser.add_subparsers(title="actions", dest="command")
    subparsers.required = True
    send_parser = subparsers.add_parser("send", help="Send one message")
    send_parser.add_argument("message", help="text (or hex with --hex)")
    subparsers.add_parser("monitor", help="Print incoming data until ^C")
    list_parser = subparsers.add_parser("list", help="List known serial ports")
    list_parser.add_argument(
        "--long", "-l", action="store_true", help="print port properties"
    )
    return parser.parse_args(argv)


def dispatch(args: argparse.Namespace) -> None:
    if args.command == "list":
        found = ok_uart.scan_serial_ports()
        if not found:
            ok_logging_setup.exit("❌ No serial ports found")
        num = len(found)
        logging.info("🔌 %d serial port%s found", num, "" if num == 1 else "s")
        for port in found:
            if args.long:
                print(format_detail(port), end="\n\n")
            else:
                print(port.name)
        return

    if args.command == "send":
        action = ok_uart.SendAction(message=args.message)
    else:
        action = ok_uart.MonitorAction()

    try:
        config = ok_uart.SessionConfig(
            port=args.port, baud=args.baud, hex=args.hex, action=action
        )
    except pydantic.ValidationError as ex:
        problems = "; ".join(
            f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in ex.errors()
        )
        ok_logging_setup.exit(f"❌ Bad settings: {problems}")

    logging.info("⚙️ Port: %s", config.port)
    logging.info("⚙️ Baud: %d", config.baud)
    mode = "hex" if config.hex else "text"
    logging.info("⚙️ Action: %s (%s)", config.action.kind, mode)
    if isinstance(config.action, ok_uart.MonitorAction):
        logging.info("👂 Monitoring %s (^C to stop)", config.port)
    ok_uart.run_session(config)


def format_detail(port: ok_uart.SerialPort) -> str:
    return f"Port: {port.name}" + "".join(
        f"\n  {k}={format_value(v)}" for k, v in port.attr.items()
    )


def format_value(v: str) -> str:
    return repr(v) if re.search(r"""[\s!"'*=?\\]""", v) else v


if __name__ == "__main__":
    main()
