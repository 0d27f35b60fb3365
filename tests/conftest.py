import contextlib
import io
import json
import ok_logging_setup
import os
import pty
import pytest
import typing

ok_logging_setup.install(
    {
        "OK_LOGGING_LEVEL": "ok_uart=DEBUG,WARNING",
        "OK_LOGGING_OUTPUT": "stdout",
    }
)


class PseudoTtySerial(typing.NamedTuple):
    path: str
    control: io.FileIO
    simulated: io.FileIO


class FakeHandle:
    """In-memory PortHandle; each 'reads' entry is bytes or an exception"""

    def __init__(self, reads=(), write_result=None, write_error=None):
        self.port = "/dev/fake"
        self.reads = list(reads)
        self.pending = b""
        self.write_result = write_result
        self.write_error = write_error
        self.flush_error: OSError | None = None
        self.written = bytearray()
        self.calls: list[str] = []
        self.closed = False

    @property
    def in_waiting(self) -> int:
        return len(self.pending)

    def read(self, size: int = 1) -> bytes:
        self.calls.append("read")
        if not self.pending:
            if not self.reads:
                raise OSError("fake port drained")
            next_read = self.reads.pop(0)
            if isinstance(next_read, BaseException):
                raise next_read
            self.pending = next_read
        out, self.pending = self.pending[:size], self.pending[size:]
        return out

    def write(self, data: bytes) -> int | None:
        self.calls.append("write")
        if self.write_error:
            raise self.write_error
        self.written.extend(data)
        return len(data) if self.write_result is None else self.write_result

    def flush(self) -> None:
        self.calls.append("flush")
        if self.flush_error:
            raise self.flush_error

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def pty_serial():
    with contextlib.ExitStack() as cleanup:
        ctrl_fd, sim_fd = pty.openpty()
        path = os.ttyname(sim_fd)
        ctrl = cleanup.enter_context(os.fdopen(ctrl_fd, "r+b", buffering=0))
        sim = cleanup.enter_context(os.fdopen(sim_fd, "r+b", buffering=0))
        yield PseudoTtySerial(path=path, control=ctrl, simulated=sim)


@pytest.fixture
def set_scan_override(monkeypatch, tmp_path):
    path = tmp_path / "scan.json"
    path.write_text("{}")
    monkeypatch.setenv("OK_UART_SCAN_OVERRIDE", str(path))

    def set_ports(ports: dict[str, dict[str, str]]):
        path.write_text(json.dumps(ports))

    return set_ports


@pytest.fixture
def fake_handle():
    return FakeHandle
