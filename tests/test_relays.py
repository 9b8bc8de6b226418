import pytest

from gardenvalves.relays import (
    MINUTE_MS,
    POOL_FLOW_MS,
    POOL_PAUSE_MS,
    PoolCycle,
    RelayBoard,
    Schedule,
    Step,
    WateringCycle,
)


def test_board_starts_off():
    board = RelayBoard()
    assert not board.is_on(1)
    assert not board.is_on(2)


def test_toggle_returns_new_state_and_writes_pin():
    writes = []
    board = RelayBoard(writer=lambda pin, level: writes.append((pin, level)))
    assert board.toggle(1) is True
    assert board.is_on(1)
    assert writes == [(0, True)]
    assert board.toggle(2) is True
    assert writes[-1] == (2, True)


def test_all_off_clears_both():
    board = RelayBoard()
    board.set(1, True)
    board.set(2, True)
    board.all_off()
    assert (board.is_on(1), board.is_on(2)) == (False, False)


@pytest.mark.parametrize("index", [0, 3, -1])
def test_unknown_relay_rejected(index):
    board = RelayBoard()
    with pytest.raises(ValueError):
        board.set(index, True)
    with pytest.raises(ValueError):
        board.is_on(index)


def test_schedule_defaults_match_both_starts():
    schedule = Schedule()
    assert schedule.is_start_time(6, 0)
    assert schedule.is_start_time(21, 0)
    assert not schedule.is_start_time(6, 1)


def test_watering_runs_relay1_then_relay2():
    board = RelayBoard()
    schedule = Schedule(watering_time=1)
    cycle = WateringCycle(board, schedule)

    assert cycle.step(0, 5, 59) is Step.IDLE
    assert cycle.step(0, 6, 0) is Step.START_WATERING_REL1
    assert cycle.step(1000, 6, 0) is Step.WATERING_REL1
    assert board.is_on(1) and not board.is_on(2)

    assert cycle.step(1000 + MINUTE_MS - 1, 6, 0) is Step.WATERING_REL1
    assert cycle.step(1000 + MINUTE_MS, 6, 1) is Step.STOP_WATERING_REL1
    assert cycle.step(1000 + MINUTE_MS, 6, 1) is Step.START_WATERING_REL2
    assert not board.is_on(1)

    start2 = 2000 + MINUTE_MS
    assert cycle.step(start2, 6, 1) is Step.WATERING_REL2
    assert board.is_on(2) and not board.is_on(1)
    assert cycle.step(start2 + MINUTE_MS, 6, 2) is Step.STOP_WATERING_REL2
    assert cycle.step(start2 + MINUTE_MS, 6, 2) is Step.IDLE
    assert not board.is_on(2)


def test_watering_stays_idle_outside_schedule():
    board = RelayBoard()
    cycle = WateringCycle(board, Schedule())
    for minute in range(60):
        assert cycle.step(minute, 12, minute) is Step.IDLE
    assert not board.is_on(1)


def test_pool_idle_until_enabled():
    pool = PoolCycle(RelayBoard())
    assert pool.step(0) is Step.IDLE
    pool.enabled = True
    assert pool.step(0) is Step.START_WATERING_REL1


def test_pool_full_cycle_counts():
    board = RelayBoard()
    board.set(2, True)
    pool = PoolCycle(board, enabled=True)
    pool.step(0)
    assert pool.step(10) is Step.WATERING_REL1
    assert board.is_on(1) and not board.is_on(2)

    assert pool.step(10 + POOL_FLOW_MS - 1) is Step.WATERING_REL1
    stop_at = 10 + POOL_FLOW_MS
    assert pool.step(stop_at) is Step.STOP_WATERING_REL1
    assert pool.step(stop_at + 1) is Step.STOP_WATERING_REL1
    assert not board.is_on(1)
    assert pool.counter == 0

    assert pool.step(stop_at + POOL_PAUSE_MS) is Step.IDLE
    assert pool.counter == 1