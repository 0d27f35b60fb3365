"""
Serial (UART) terminal tools: send one message or monitor a port,
as text or hex, on top of PySerial.
"""

from beartype.claw import beartype_this_package as _beartype_me

# ruff: noqa: E402
_beartype_me()

from ok_uart._config import (
    MonitorAction,
    SendAction,
    SessionConfig,
)

from ok_uart._exceptions import (
    InvalidHexInput,
    PortNotFound,
    SerialException,
    SerialFlushFailure,
    SerialIoException,
    SerialOpenBusy,
    SerialOpenException,
    SerialReadFailure,
    SerialScanException,
    SerialWriteFailure,
)

from ok_uart._hexcodec import decode_hex, encode_hex
from ok_uart._port import PortHandle, connect, open_port
from ok_uart._scanning import SerialPort, port_exists, scan_serial_ports
from ok_uart._session import monitor, run_session, send

__all__ = [n for n in dir() if not n.startswith("_")]
