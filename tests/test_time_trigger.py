import asyncio

import pytest

from garagething.models import TimerTick
from garagething.triggers import PeriodicTickSource


@pytest.mark.asyncio
async def test_ticks_are_submitted_periodically():
    ticks = []
    source = PeriodicTickSource(interval=0.01)
    await source.start(ticks.append)
    await asyncio.sleep(0.1)
    await source.stop()

    assert len(ticks) >= 3
    assert all(isinstance(t, TimerTick) for t in ticks)
    assert source.get_execution_metadata()["tick_count"] == len(ticks)


@pytest.mark.asyncio
async def test_no_ticks_after_stop():
    ticks = []
    source = PeriodicTickSource(interval=0.01)
    await source.start(ticks.append)
    await asyncio.sleep(0.03)
    await source.stop()
    count = len(ticks)
    await asyncio.sleep(0.05)

    assert len(ticks) == count
    assert not source.running


@pytest.mark.asyncio
async def test_stop_without_start_is_harmless():
    await PeriodicTickSource().stop()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicTickSource(interval=0)


@pytest.mark.asyncio
async def test_stop_logs_tick_metadata(caplog):
    source = PeriodicTickSource(interval=0.01)
    await source.start(lambda tick: None)
    await asyncio.sleep(0.03)
    with caplog.at_level("INFO", logger="PeriodicTickSource"):
        await source.stop()

    assert "tick_count" in caplog.text
