# gardenvalves

This package controls two garden watering valves and a pool warm-up hose.
It includes a small web panel where you can change the watering schedule
and switch the valves by hand. The panel text and the log messages are in
Polish.

## What it does

- **Scheduled watering.** Watering starts when the local clock reads one
  of the two start times. The defaults are 06:00 and 21:00. Valve 1 runs
  for the watering time, and then valve 2 runs for the same length of
  time. Before a valve opens, both valves are switched off, so only one
  valve is open at a time. The watering time is in minutes and defaults
  to 10.
- **Pool cycle.** This cycle runs while the pool option is on:
  1. Both valves are switched off.
  2. Valve 1 opens for 20 seconds.
  3. Valve 1 closes and stays closed for 15 minutes.
  4. The cycle counter goes up by one.
  5. If the option is still on, the next cycle starts.
- **Web panel.** `GET /` shows the current time, the state of each valve,
  the watering time, the two start times, the pool option and the pool
  cycle count. The panel's forms post to these routes:
  - `/toggle` and `/toggle2` flip valve 1 and valve 2.
  - `/settime` sets the watering time.
  - `/settimes` sets the morning and evening start times, written as `HH:MM`.
  - `/togglePool` switches the pool cycle on or off.

  After every post the browser is sent back to `/`. Any other route gets
  a 404.

Times follow Central European time. Summer time (CEST) is used between
the last Sundays of March and October.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
gardenvalves [--host HOST] [--port PORT] [--interval SECONDS]
```

The options are:

- `--host` is the address to listen on. The default is `0.0.0.0`.
- `--port` is the port to listen on. The default is `80`, which usually
  needs extra privileges.
- `--interval` is how many seconds each pass of the loop waits for a
  request. The default is `0.01`.

The command runs a single loop. Each pass serves at most one HTTP
request and then advances the clock, the watering cycle and the pool
cycle. Stop it with Ctrl+C. When it stops, both valves are switched off.

## Using the pieces directly

`gardenvalves.relays`:

- `RelayBoard(writer=None)` holds the states of relays 1 and 2. It has
  the methods `set`, `toggle`, `all_off` and `is_on`. If you pass a
  `writer(pin, on)` callable, it is called on every change, with pin 0
  for relay 1 and pin 2 for relay 2.
- `Schedule` holds the start times and the watering time.
  `is_start_time(hour, minute)` checks the clock against the start times.
- `WateringCycle` and `PoolCycle` are state machines whose steps are the
  `Step` enum. Each call to `step(...)` takes the current time in
  milliseconds, moves the machine at most one step, and returns the new
  step.

`gardenvalves.clock.Clock(source=None)`:

- Keeps the local hour, minute and second.
- `update()` reads the source, which is system UTC by default, and
  returns `False` if the source returns `None`.
- `hhmm()` formats the time as `HH:MM`.

`gardenvalves.web`:

- `Panel` renders the page and applies the form posts.
  `dispatch(method, path, form)` returns `(status, headers, body)`.
- `make_server(panel, host, port)` returns an `http.server.HTTPServer`
  for the panel.
- `parse_int` and `parse_hhmm` read form values leniently. A value
  without a leading number counts as 0.

`gardenvalves.main`:

- `Controller` joins the board, schedule, clock and both cycles.
  `tick(now_ms)` runs one pass of the control loop.

## What it does not do

- **No valve hardware.** The `gardenvalves` command builds its
  `RelayBoard` without a writer, so it only tracks the valve states. To
  drive real outputs, build a `Controller` around a `RelayBoard` that has
  a writer.
- **No saved settings.** Settings are kept in memory only. The schedule,
  the watering time and the pool option go back to their defaults on
  every start.
- **No network setup, no remote updates and no login on the panel.**
- **Limited ranges.** Watering time, hours and minutes are stored in the
  range 0–255, and entered values wrap around to fit. The pool counter
  wraps at 65536.