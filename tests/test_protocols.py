import io
import random
from unittest import mock

import pytest

from csmasim.channel import MAX_BACKOFF, DeviceState
from csmasim.protocols import (
    Persistence,
    Simulation,
    non_persistent,
    one_persistent,
    p_persistent,
)


class ScriptedRng:
    """Hands back prepared draws in order."""

    def __init__(self, ranges=(), ints=(), floats=()):
        self.ranges = list(ranges)
        self.ints = list(ints)
        self.floats = list(floats)

    def randrange(self, n):
        value = self.ranges.pop(0)
        assert 0 <= value < n
        return value

    def randint(self, a, b):
        value = self.ints.pop(0)
        assert a <= value <= b
        return value

    def random(self):
        return self.floats.pop(0)


def test_one_persistent_full_transmission():
    out = io.StringIO()
    rng = ScriptedRng(ranges=[0, 1, 1, 1])
    sim = Simulation(Persistence.ONE, rng=rng, out=out)
    for t in (1, 2, 3):
        sim.step(t)
    text = out.getvalue()
    assert "Device 2 starts transmitting." in text
    assert "Device 2 is transmitting (1/3)." in text
    assert "Device 2 is transmitting (2/3)." in text
    assert "Device 2 finished transmitting." in text
    assert sim.channel.busy is False
    assert sim.channel.devices[1].state is DeviceState.IDLE


def test_one_persistent_waits_on_busy_channel():
    out = io.StringIO()
    rng = ScriptedRng(ranges=[0, 0, 0, 1])
    sim = Simulation(Persistence.ONE, rng=rng, out=out)
    sim.step(1)
    sim.step(2)
    second = sim.channel.devices[1]
    assert second.state is DeviceState.IDLE
    assert second.has_data is True
    assert "Device 2 wants to transmit but channel is BUSY." in out.getvalue()


def test_non_persistent_backs_off_on_busy_channel():
    out = io.StringIO()
    rng = ScriptedRng(ranges=[0, 0, 0, 1], ints=[MAX_BACKOFF])
    sim = Simulation(Persistence.NON, rng=rng, out=out)
    sim.step(1)
    sim.step(2)
    second = sim.channel.devices[1]
    assert second.state is DeviceState.WAITING
    assert second.backoff_counter == MAX_BACKOFF - 1
    assert "Device 2 found channel busy, backing off for" in out.getvalue()


def test_p_persistent_defers_when_draw_exceeds_probability():
    out = io.StringIO()
    rng = ScriptedRng(ranges=[0, 2], floats=[0.9])
    sim = Simulation(Persistence.P, probability=0.5, rng=rng, out=out)
    sim.step(1)
    device = sim.channel.devices[2]
    assert device.state is DeviceState.IDLE
    assert device.has_data is True
    assert sim.channel.busy is False
    assert "Device 3 defers with probability 0.50 (random: 0.90)." in out.getvalue()


def test_p_persistent_transmits_when_draw_within_probability():
    out = io.StringIO()
    rng = ScriptedRng(ranges=[0, 0], floats=[0.25])
    sim = Simulation(Persistence.P, probability=0.5, rng=rng, out=out)
    sim.step(1)
    assert sim.channel.devices[0].state is DeviceState.TRANSMITTING
    assert sim.channel.busy is True
    assert "Device 1 transmits with probability 0.50 (random: 0.25)." in out.getvalue()


def test_step_prints_header():
    out = io.StringIO()
    sim = Simulation(Persistence.ONE, rng=ScriptedRng(ranges=[1]), out=out)
    sim.step(4)
    assert out.getvalue().startswith("\n--- Time Step 4 ---\nChannel status: IDLE\n")


@pytest.mark.parametrize("persistence", list(Persistence))
@pytest.mark.parametrize("seed", range(10))
def test_channel_invariants_hold(persistence, seed):
    sim = Simulation(persistence, probability=0.5, rng=random.Random(seed), out=io.StringIO())
    for t in range(1, 41):
        sim.step(t)
        transmitting = [
            d for d in sim.channel.devices if d.state is DeviceState.TRANSMITTING
        ]
        assert len(transmitting) <= 1
        assert sim.channel.busy == bool(transmitting)
        for device in sim.channel.devices:
            if device.state is DeviceState.WAITING:
                assert 1 <= device.backoff_counter <= MAX_BACKOFF


def test_run_counts_steps_and_sleeps():
    out = io.StringIO()
    sim = Simulation(Persistence.NON, rng=random.Random(3), out=out)
    with mock.patch("csmasim.protocols.time.sleep") as sleep:
        sim.run(steps=5, delay=0.5)
    assert sleep.call_count == 5
    assert out.getvalue().count("--- Time Step") == 5


@pytest.mark.parametrize(
    "runner",
    [
        lambda rng, out: one_persistent(rng, out, delay=0),
        lambda rng, out: non_persistent(rng, out, delay=0),
        lambda rng, out: p_persistent(0.3, rng, out, delay=0),
    ],
)
def test_runners_cover_twenty_steps(runner):
    out = io.StringIO()
    sim = runner(random.Random(11), out)
    text = out.getvalue()
    assert text.count("--- Time Step") == 20
    assert "--- Time Step 20 ---" in text
    assert "--- Time Step 21 ---" not in text
    assert len(sim.channel.devices) == 3


def test_seeded_runs_are_reproducible():
    first, second = io.StringIO(), io.StringIO()
    non_persistent(random.Random(5), first, delay=0)
    non_persistent(random.Random(5), second, delay=0)
    assert first.getvalue() == second.getvalue()