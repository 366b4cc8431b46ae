"""Built-in callables the driver installs into the global environment."""

from __future__ import annotations

import time

from .values import Value, VNative, VNumber


def _clock(args: list[Value]) -> Value:
    return VNumber(time.time())


def default_natives() -> list[VNative]:
    return [
        VNative("clock", 0, _clock),
    ]
