"""Exception hierarchy for ok_uart"""


class SerialException(OSError):
    def __init__(
        self,
        message: str,
        port: str | None = None,
    ):
        super().__init__(f"{port}: {message}" if port else message)
        self.port = port


class PortNotFound(SerialException):
    def __init__(self, port: str, available: list[str]):
        listing = ", ".join(available) if available else "(none)"
        super().__init__(f"Serial port not found; available: {listing}", port)
        self.available = available


class SerialScanException(SerialException):
    pass


class SerialOpenException(SerialException):
    pass


class SerialOpenBusy(SerialOpenException):
    pass


class SerialIoException(SerialException):
    pass


class SerialWriteFailure(SerialIoException):
    pass


class SerialFlushFailure(SerialIoException):
    pass


class SerialReadFailure(SerialIoException):
    pass


class InvalidHexInput(ValueError):
    def __init__(self, message: str, fragment: str):
        super().__init__(message)
        self.fragment = fragment
