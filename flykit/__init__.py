"""Flight-control building blocks: HAL types, simulator IPC commands and queue, hardware interfaces, a BNO055 driver, service settings and throttle states."""

__version__ = "1.0.0"