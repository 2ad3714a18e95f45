# csmasim

A small console simulation of a shared channel used by three devices. Each
run uses one of the classic carrier-sense multiple access strategies:

- **1-persistent**: a device with data transmits as soon as the channel is
  idle. If the channel is busy it reports so and tries again on the next step.
- **Non-persistent**: a device that finds the channel busy backs off for a
  random 1–5 time units and then tries again.
- **p-persistent**: a device that finds the channel idle transmits with
  probability *p* and otherwise defers to a later step.

A run lasts 20 time steps. On each step the simulation may give data to a
random device, lets devices with data attempt to transmit, detects collisions
and sends colliding devices into a random backoff of 1–5 time units. A
transmission lasts 3 time steps.

## Installation

```
pip install .
```

## Command line

```
csmasim
```

The program asks on standard input which strategy to run (1–3). For
p-persistent it also asks for the value of *p* (0.0–1.0). It then prints what
happens at each time step. Any other choice, or a *p* that is not a number,
prints a message and ends the program.

Options:

- `--delay SECONDS`: pause between time steps (default `1.0`; `0` runs
  without pausing).
- `--seed N`: seed for the random number generator, for reproducible runs.

```
csmasim --delay 0 --seed 42
```

## Library use

```python
import random
import sys

from csmasim.protocols import Persistence, Simulation, p_persistent

# A reproducible run with no pauses between steps
sim = Simulation(Persistence.P, 0.5, random.Random(1), sys.stdout, 3, 3)
sim.run(20, 0)

# The same kind of run through the convenience function
p_persistent(0.5, rng=random.Random(1), out=sys.stdout, delay=0)
```

`Persistence` has the members `ONE`, `NON` and `P`. `Simulation.step(time)`
runs a single time step; `Simulation.run(steps, delay)` runs several.
`one_persistent(rng, out, delay)` and `non_persistent(rng, out, delay)` work
like `p_persistent`, each running 20 steps and returning the `Simulation`.
Output goes to `out`, or to standard output when `out` is `None`.

The channel model itself (`Channel`, `Device`, `DeviceState`, `make_devices`)
lives in `csmasim.channel` and can be driven by hand: `Channel` offers
`generate_data`, `transmit`, `transmission_complete`, `has_collision`,
`handle_collision` and `backoff`.

## Tests

```
pip install .[test]
pytest
```