import dataclasses
import logging
import natsort
import os
import pathlib
from serial.tools import list_ports
from serial.tools import list_ports_common

import pydantic

from ok_uart import _exceptions

log = logging.getLogger("ok_uart.scanning")

OVERRIDE_ENV = "OK_UART_SCAN_OVERRIDE"

_override_adapter = pydantic.TypeAdapter(dict[str, dict[str, str]])
_port_sort_key = natsort.natsort_keygen(key=str, alg=natsort.ns.PATH)


@dataclasses.dataclass(frozen=True)
class SerialPort:
    """One port as enumerated, with its pyserial properties as strings"""

    name: str
    attr: dict[str, str]

    def __str__(self):
        return self.name


def scan_serial_ports() -> list[SerialPort]:
    """Lists ports on this system (or from $OK_UART_SCAN_OVERRIDE)"""

    if path := os.getenv(OVERRIDE_ENV):
        found = _ports_from_override(path)
    else:
        try:
            found = [_port_from_info(p) for p in list_ports.comports()]
        except OSError as ex:
            raise _exceptions.SerialScanException("Can't scan serial") from ex

    found.sort(key=_port_sort_key)
    log.debug("Found %d ports", len(found))
    return found


def port_exists(identifier: str) -> bool:
    """True if 'identifier' names a port currently visible on the system"""

    try:
        return any(p.name == identifier for p in scan_serial_ports())
    except _exceptions.SerialScanException as ex:
        log.debug("Treating %s as missing (%s)", identifier, ex)
        return False


def _ports_from_override(path: str) -> list[SerialPort]:
    try:
        data = pathlib.Path(path).read_bytes()
        ports = _override_adapter.validate_json(data)
    except (OSError, pydantic.ValidationError) as ex:
        msg = f"Can't read ${OVERRIDE_ENV} {path}"
        raise _exceptions.SerialScanException(msg) from ex

    log.debug("$%s (%s): %d ports", OVERRIDE_ENV, path, len(ports))
    return [SerialPort(name=name, attr=attr) for name, attr in ports.items()]


def _port_from_info(info: list_ports_common.ListPortInfo) -> SerialPort:
    attr = {}
    for key, value in vars(info).items():
        if value not in (None, "", "n/a"):
            attr[key.lower()] = str(value)
    return SerialPort(name=info.device, attr=attr)
