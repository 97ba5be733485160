"""Abstract device factory interface."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List


@dataclass
class DeviceInfo:
    """Handle describing a discovered device."""
    serial_number: str
    name: str = ""
    product_line: int = 0


DevicesChangedCallback = Callable[[List[DeviceInfo], List[DeviceInfo]], None]


class DeviceFactory(ABC):
    """
    Lists the devices available to a context and reports additions and removals.

    A factory belongs to exactly one context.
    """

    def __init__(self, context: Any) -> None:
        self._context = context
        self._callbacks: List[DevicesChangedCallback] = []
        self.logger = logging.getLogger(__name__)

    @property
    def context(self) -> Any:
        return self._context

    @abstractmethod
    def query_devices(self, mask: int) -> List[DeviceInfo]:
        """Return the devices matching the product-line mask."""

    def register_callback(self, callback: DevicesChangedCallback) -> None:
        """Register a callback receiving (devices_removed, devices_added)."""
        self._callbacks.append(callback)

    def _notify(self, removed: List[DeviceInfo], added: List[DeviceInfo]) -> None:
        """Report a device change to every registered callback."""
        if not removed and not added:
            return
        self.logger.info(f"Devices changed: {len(removed)} removed, {len(added)} added")
        for callback in self._callbacks:
            callback(removed, added)
