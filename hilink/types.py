"""Enumerations used by the endpoint catalog."""

import enum


class PinType(enum.IntEnum):
    """``OperateType`` values for ``api/pin/operate``."""

    ENTER = 0
    ACTIVATE = 1
    DEACTIVATE = 2
    CHANGE = 3
    ENTER_PUK = 4


class UssdState(enum.IntEnum):
    """``result`` values of ``api/ussd/status``."""

    NONE = 0
    ACTIVE = 1
    WAITING = 2


class DeviceControl(enum.IntEnum):
    """``Control`` codes for ``api/device/control``."""

    REBOOT = 1
    RESET = 2
    BACKUP = 3
    SHUTDOWN = 4
