"""Shared medium and station model for carrier-sense multiple access."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

MAX_BACKOFF = 5


class DeviceState(Enum):
    """What a station is doing at the moment."""

    IDLE = "idle"
    TRANSMITTING = "transmitting"
    WAITING = "waiting"


@dataclass
class Device:
    """One station attached to the shared channel."""

    id: int
    state: DeviceState = DeviceState.IDLE
    has_data: bool = False
    backoff_counter: int = 0


def make_devices(count: int) -> list[Device]:
    """Create ``count`` idle stations numbered from 1."""
    return [Device(device_id) for device_id in range(1, count + 1)]


class Channel:
    """A single shared medium and the stations that contend for it."""

    def __init__(
        self,
        num_devices: int = 3,
        rng: random.Random | None = None,
        out: TextIO | None = None,
    ) -> None:
        self.devices = make_devices(num_devices)
        self.busy = False
        self.rng = rng if rng is not None else random.Random()
        self.out = out

    def _say(self, message: str) -> None:
        print(message, file=self.out if self.out is not None else sys.stdout)

    def generate_data(self, device: Device) -> None:
        """Give a station a frame to send."""
        device.has_data = True

    def transmit(self, device: Device) -> None:
        """Start sending if the station has data and the medium is free."""
        if device.has_data and not self.busy:
            self._say(f"Device {device.id} starts transmitting.")
            self.busy = True
            device.state = DeviceState.TRANSMITTING
            device.has_data = False

    def transmission_complete(self, device: Device) -> None:
        """Finish a station's frame and release the medium."""
        self._say(f"Device {device.id} finished transmitting.")
        self.busy = False
        device.state = DeviceState.IDLE

    def has_collision(self) -> bool:
        """True when more than one station is transmitting."""
        transmitting = sum(
            1 for device in self.devices if device.state is DeviceState.TRANSMITTING
        )
        return transmitting > 1

    def handle_collision(self) -> None:
        """Send every colliding station into a random backoff."""
        if not (self.busy and self.has_collision()):
            return
        self._say("Collision detected!")
        for device in self.devices:
            if device.state is DeviceState.TRANSMITTING:
                device.backoff_counter = self.rng.randint(1, MAX_BACKOFF)
                device.state = DeviceState.WAITING
                self._say(
                    f"Device {device.id} is waiting for "
                    f"{device.backoff_counter} time units."
                )

    def backoff(self) -> None:
        """Count down waiting stations and release those whose wait is over."""
        for device in self.devices:
            if device.state is not DeviceState.WAITING:
                continue
            device.backoff_counter -= 1
            if device.backoff_counter <= 0:
                device.state = DeviceState.IDLE
                self._say(f"Device {device.id} is ready to transmit again.")