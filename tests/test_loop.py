from __future__ import annotations

from twinarcade.loop import FrameDriver


def test_nothing_runs_until_scheduled() -> None:
    calls = []
    driver = FrameDriver(calls.append)

    assert not driver.pump(16)
    driver.schedule()
    assert driver.pump(16)
    assert calls == [16]


def test_next_frame_is_scheduled_after_the_current_one() -> None:
    calls = []
    driver = FrameDriver(calls.append)
    driver.schedule()
    for dt in (16, 17, 16):
        driver.pump(dt)

    assert calls == [16, 17, 16]
    assert driver.frames == 3
    assert driver.scheduled


def test_cancel_drops_the_pending_frame() -> None:
    calls = []
    driver = FrameDriver(calls.append)
    driver.schedule()
    driver.cancel()

    assert not driver.pump(16)
    assert calls == []
    assert not driver.scheduled


def test_restart_inside_a_frame_runs_only_the_new_schedule() -> None:
    seen = []
    states = {"current": "old"}

    def frame(dt: float) -> None:
        seen.append(states["current"])
        if states["current"] == "old":
            driver.cancel()
            states["current"] = "new"
            driver.schedule()

    driver = FrameDriver(frame)
    driver.schedule()
    driver.pump(16)
    driver.pump(16)

    assert seen == ["old", "new"]


def test_teardown_inside_a_frame_stops_the_loop() -> None:
    calls = []

    def frame(dt: float) -> None:
        calls.append(dt)
        driver.cancel()

    driver = FrameDriver(frame)
    driver.schedule()
    driver.pump(16)

    assert not driver.scheduled
    assert not driver.pump(16)
    assert calls == [16]
