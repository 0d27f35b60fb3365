import os
import typing

import pydantic

DEFAULT_PORT = "COM3" if os.name == "nt" else "/dev/ttyUSB0"
DEFAULT_BAUD = 115200


class SendAction(pydantic.BaseModel, frozen=True):
    kind: typing.Literal["send"] = "send"
    message: str


class MonitorAction(pydantic.BaseModel, frozen=True):
    kind: typing.Literal["monitor"] = "monitor"


Action = typing.Annotated[
    SendAction | MonitorAction, pydantic.Field(discriminator="kind")
]


class SessionConfig(pydantic.BaseModel, frozen=True):
    """Everything one invocation needs: which port, how, and what to do"""

    port: str = DEFAULT_PORT
    baud: pydantic.PositiveInt = DEFAULT_BAUD
    hex: bool = False
    action: Action

    def __str__(self) -> str:
        mode = "hex" if self.hex else "text"
        return f"{self.port} @ {self.baud} baud ({mode}): {self.action!r}"
