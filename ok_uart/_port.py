import collections.abc
import contextlib
import errno
import logging
import os
import serial
import typing

from ok_uart import _exceptions
from ok_uart import _scanning

log = logging.getLogger("ok_uart.port")

READ_TIMEOUT = 0.1


@typing.runtime_checkable
class PortHandle(typing.Protocol):
    """Byte stream with bounded-timeout reads (pyserial.Serial fits)"""

    @property
    def in_waiting(self) -> int: ...

    def read(self, size: int = 1) -> bytes: ...

    def write(self, data: bytes) -> int | None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


def open_port(identifier: str, baud: int) -> PortHandle:
    """Opens 'identifier' as 8N1 at 'baud' with a short read timeout"""

    log.debug("Opening %s (%d baud)", identifier, baud)
    try:
        return serial.Serial(
            port=identifier,
            baudrate=baud,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=READ_TIMEOUT,
            exclusive=True if os.name == "posix" else None,
        )
    except OSError as ex:
        if ex.errno in (errno.EBUSY, errno.EAGAIN):
            message = f"Serial port busy ({errno.errorcode[ex.errno]})"
            raise _exceptions.SerialOpenBusy(message, identifier) from ex
        elif ex.errno in (errno.EACCES, errno.EPERM):
            message = "Serial port open error (permission denied)"
            raise _exceptions.SerialOpenException(message, identifier) from ex
        else:
            message = "Serial port open error"
            raise _exceptions.SerialOpenException(message, identifier) from ex
    except ValueError as ex:
        message = f"Serial port settings rejected ({ex})"
        raise _exceptions.SerialOpenException(message, identifier) from ex


@contextlib.contextmanager
def connect(
    identifier: str, baud: int
) -> collections.abc.Iterator[PortHandle]:
    """Checks that 'identifier' exists, then opens it for the 'with' block"""

    if not _scanning.port_exists(identifier):
        try:
            available = [p.name for p in _scanning.scan_serial_ports()]
        except _exceptions.SerialScanException:
            available = []
        raise _exceptions.PortNotFound(identifier, available)

    handle = open_port(identifier, baud)
    log.info("🔌 Opened %s (%d baud)", identifier, baud)
    try:
        yield handle
    finally:
        handle.close()
        log.debug("Closed %s", identifier)
