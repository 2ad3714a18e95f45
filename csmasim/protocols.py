"""Time-stepped simulations of 1-persistent, non-persistent and p-persistent CSMA."""

from __future__ import annotations

import random
import sys
import time
from enum import Enum
from typing import TextIO

from csmasim.channel import MAX_BACKOFF, Channel, DeviceState

DEFAULT_STEPS = 20


class Persistence(Enum):
    """How a station behaves when it finds the medium busy or idle."""

    ONE = "1-persistent"
    NON = "non-persistent"
    P = "p-persistent"


class Simulation:
    """A run of one CSMA variant over a shared channel."""

    def __init__(
        self,
        persistence: Persistence,
        probability: float = 1.0,
        rng: random.Random | None = None,
        out: TextIO | None = None,
        num_devices: int = 3,
        transmission_duration: int = 3,
    ) -> None:
        self.persistence = persistence
        self.probability = probability
        self.rng = rng if rng is not None else random.Random()
        self.out = out
        self.transmission_duration = transmission_duration
        self.channel = Channel(num_devices, self.rng, out)
        self.transmitting_time = [0] * num_devices

    def _say(self, message: str) -> None:
        print(message, file=self.out if self.out is not None else sys.stdout)

    def _maybe_generate(self) -> None:
        if self.rng.randrange(3) != 0:
            return
        device = self.channel.devices[self.rng.randrange(len(self.channel.devices))]
        if not device.has_data and device.state is DeviceState.IDLE:
            self.channel.generate_data(device)
            self._say(f"Device {device.id} has data to send.")

    def _attempt(self, index: int) -> None:
        channel = self.channel
        device = channel.devices[index]
        if channel.busy:
            if self.persistence is Persistence.NON:
                device.backoff_counter = self.rng.randint(1, MAX_BACKOFF)
                device.state = DeviceState.WAITING
                self._say(
                    f"Device {device.id} found channel busy, backing off for "
                    f"{device.backoff_counter} time units."
                )
            else:
                self._say(f"Device {device.id} wants to transmit but channel is BUSY.")
            return

        if self.persistence is Persistence.P:
            draw = self.rng.random()
            if draw > self.probability:
                self._say(
                    f"Device {device.id} defers with probability "
                    f"{self.probability:.2f} (random: {draw:.2f})."
                )
                return
            channel.transmit(device)
            if device.state is DeviceState.TRANSMITTING:
                self.transmitting_time[index] = 1
                self._say(
                    f"Device {device.id} transmits with probability "
                    f"{self.probability:.2f} (random: {draw:.2f})."
                )
            return

        channel.transmit(device)
        if device.state is DeviceState.TRANSMITTING:
            self.transmitting_time[index] = 1

    def _advance_transmissions(self) -> None:
        for index, device in enumerate(self.channel.devices):
            if device.state is not DeviceState.TRANSMITTING:
                continue
            elapsed = self.transmitting_time[index]
            if elapsed >= self.transmission_duration:
                self.channel.transmission_complete(device)
                self.transmitting_time[index] = 0
            else:
                self._say(
                    f"Device {device.id} is transmitting "
                    f"({elapsed}/{self.transmission_duration})."
                )
                self.transmitting_time[index] = elapsed + 1

    def step(self, time: int) -> None:
        """Simulate one time step, labelled ``time`` in the output."""
        self._say(f"\n--- Time Step {time} ---")
        self._say(f"Channel status: {'BUSY' if self.channel.busy else 'IDLE'}")

        self._maybe_generate()
        for index, device in enumerate(self.channel.devices):
            if device.has_data and device.state is DeviceState.IDLE:
                self._attempt(index)

        self.channel.handle_collision()
        self._advance_transmissions()
        self.channel.backoff()

    def run(self, steps: int = DEFAULT_STEPS, delay: float = 1.0) -> None:
        """Run ``steps`` time steps, pausing ``delay`` seconds after each."""
        for step_number in range(1, steps + 1):
            self.step(step_number)
            if delay:
                time.sleep(delay)


def one_persistent(
    rng: random.Random | None = None,
    out: TextIO | None = None,
    delay: float = 1.0,
) -> Simulation:
    """Run a 1-persistent CSMA simulation and return it."""
    simulation = Simulation(Persistence.ONE, rng=rng, out=out)
    simulation.run(delay=delay)
    return simulation


def non_persistent(
    rng: random.Random | None = None,
    out: TextIO | None = None,
    delay: float = 1.0,
) -> Simulation:
    """Run a non-persistent CSMA simulation and return it."""
    simulation = Simulation(Persistence.NON, rng=rng, out=out)
    simulation.run(delay=delay)
    return simulation


def p_persistent(
    probability: float,
    rng: random.Random | None = None,
    out: TextIO | None = None,
    delay: float = 1.0,
) -> Simulation:
    """Run a p-persistent CSMA simulation with the given probability and return it."""
    simulation = Simulation(Persistence.P, probability=probability, rng=rng, out=out)
    simulation.run(delay=delay)
    return simulation