import collections.abc
import logging
import threading
import typing

from ok_uart import _config
from ok_uart import _exceptions
from ok_uart import _hexcodec
from ok_uart import _port

log = logging.getLogger("ok_uart.session")
data_log = logging.getLogger(log.name + ".data")

READ_SIZE = 256


def send(handle: _port.PortHandle, message: str, hex_mode: bool = False):
    """Writes 'message' (text, or hex digits if 'hex_mode') and flushes"""

    port = getattr(handle, "port", None)
    if hex_mode:
        try:
            payload = _hexcodec.decode_hex(message)
        except _exceptions.InvalidHexInput as ex:
            msg = f"Failed while sending message: {ex}"
            raise _exceptions.InvalidHexInput(msg, ex.fragment) from ex
    else:
        payload = message.encode("utf-8")

    try:
        written = handle.write(payload)
    except OSError as ex:
        msg = "Failed while sending message (write error)"
        raise _exceptions.SerialWriteFailure(msg, port) from ex

    if written is not None and written != len(payload):
        msg = f"Failed while sending message (wrote {written}/{len(payload)}b)"
        raise _exceptions.SerialWriteFailure(msg, port)

    try:
        handle.flush()
    except OSError as ex:
        msg = "Failed while sending message (flush error)"
        raise _exceptions.SerialFlushFailure(msg, port) from ex

    data_log.debug("Sent %db", len(payload))


def monitor(
    handle: _port.PortHandle,
    hex_mode: bool = False,
    *,
    emit: collections.abc.Callable[[str], typing.Any] = print,
    stop: threading.Event | None = None,
) -> None:
    """Prints each chunk received on 'handle' as a line, until 'stop' is set.

    Each poll blocks up to the handle's read timeout for the first byte,
    then takes whatever else is already waiting (up to READ_SIZE bytes).
    Timeouts are routine; any other read error raises SerialReadFailure.
    Without 'stop', this only ends by exception (including Ctrl-C).
    """

    port = getattr(handle, "port", None)
    log.debug("Monitoring %s (%s)", port, "hex" if hex_mode else "text")
    while not (stop and stop.is_set()):
        try:
            # Block for at least one byte
            chunk = handle.read(1)
        except TimeoutError:
            continue
        except OSError as ex:
            msg = "Failed while monitoring (read error)"
            raise _exceptions.SerialReadFailure(msg, port) from ex

        if not chunk:
            continue

        error = None
        try:
            # ...then grab what else is available
            waiting = min(handle.in_waiting, READ_SIZE - len(chunk))
            if waiting > 0:
                chunk += handle.read(waiting)
        except TimeoutError:
            data_log.debug("Timeout after %db, keeping it", len(chunk))
        except OSError as ex:
            error = ex

        data_log.debug("Read %db", len(chunk))
        if hex_mode:
            emit(_hexcodec.encode_hex(chunk))
        else:
            emit(chunk.decode("utf-8", errors="replace"))

        if error:
            msg = "Failed while monitoring (read error)"
            raise _exceptions.SerialReadFailure(msg, port) from error


def run_session(
    config: _config.SessionConfig,
    *,
    emit: collections.abc.Callable[[str], typing.Any] = print,
    stop: threading.Event | None = None,
) -> None:
    """Opens the configured port and performs the configured action"""

    log.debug("Session: %s", config)
    with _port.connect(config.port, config.baud) as handle:
        match config.action:
            case _config.SendAction(message=message):
                send(handle, message, hex_mode=config.hex)
                log.info("📤 Sent %r to %s", message, config.port)
            case _config.MonitorAction():
                monitor(handle, hex_mode=config.hex, emit=emit, stop=stop)
