"""
Tests for the DummyAdapter class.
"""

import pytest

from statekit.adapters import DummyAdapter, HostAdapter
from statekit.events import MachineEventType


def test_is_host_adapter():
    assert isinstance(DummyAdapter(), HostAdapter)


@pytest.mark.asyncio
async def test_poll_input_replays_script():
    adapter = DummyAdapter(scripted_inputs=["walk", None, "jump"])

    assert adapter.inputs_remaining == 3
    assert await adapter.poll_input() == "walk"
    assert await adapter.poll_input() is None
    assert await adapter.poll_input() == "jump"
    assert adapter.inputs_remaining == 0

    # Exhausted scripts keep returning None
    assert await adapter.poll_input() is None


@pytest.mark.asyncio
async def test_queue_input_appends():
    adapter = DummyAdapter(scripted_inputs=["walk"])
    adapter.queue_input("run", "stop")

    polled = [await adapter.poll_input() for _ in range(3)]
    assert polled == ["walk", "run", "stop"]


@pytest.mark.asyncio
async def test_records_states_and_events():
    adapter = DummyAdapter()

    await adapter.render_state({"machine": "player", "state": "IDLE"})
    await adapter.notify_event(MachineEventType.STATE_CHANGED, {"to_state": "WALKING"})
    await adapter.notify_event("custom", {"value": 1})

    assert adapter.rendered_states == [{"machine": "player", "state": "IDLE"}]
    assert adapter.events[0] == ("STATE_CHANGED", {"to_state": "WALKING"})
    assert adapter.get_events_by_type(MachineEventType.STATE_CHANGED) == [
        {"to_state": "WALKING"}
    ]
    assert adapter.get_events_by_type("custom") == [{"value": 1}]

    adapter.clear()
    assert adapter.events == []
    assert adapter.rendered_states == []


@pytest.mark.asyncio
async def test_lifecycle_flags():
    adapter = DummyAdapter()
    await adapter.initialize()
    await adapter.shutdown()
    assert adapter.initialized
    assert adapter.shut_down


@pytest.mark.asyncio
async def test_verbose_prints(capsys):
    adapter = DummyAdapter(scripted_inputs=["walk"], verbose=True)

    await adapter.poll_input()
    await adapter.render_state({"machine": "player", "state": "WALKING"})

    out = capsys.readouterr().out
    assert "> walk" in out
    assert "[player] state: WALKING" in out
