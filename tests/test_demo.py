"""
Tests for the command-line demo.
"""

import pytest

from statekit.adapters import CLIAdapter, DummyAdapter
from statekit.demo import SETTLE_TICKS, build_engine, main, parse_args
from statekit.engine import GameFlowEngine, PlayerControllerEngine


def test_parse_args_defaults():
    args = parse_args([])
    assert args.machine == "player"
    assert args.inputs == []
    assert args.ticks is None
    assert args.interactive is False
    assert args.log_level == "WARNING"


def test_build_scripted_engine():
    args = parse_args(["--machine", "game", "--inputs", "start", "-", "pause"])
    engine = build_engine(args)

    assert isinstance(engine, GameFlowEngine)
    assert isinstance(engine.adapter, DummyAdapter)
    assert engine.adapter.scripted_inputs == ["start", None, "pause"]
    assert engine.settings.max_ticks == 3 + SETTLE_TICKS
    assert engine.settings.tick_interval == 0.0


@pytest.mark.asyncio
async def test_build_interactive_engine():
    args = parse_args(["--interactive", "--ticks", "10"])
    engine = build_engine(args)

    assert isinstance(engine, PlayerControllerEngine)
    assert isinstance(engine.adapter, CLIAdapter)
    assert engine.settings.tick_interval == 0.05
    assert engine.settings.max_ticks == 10


@pytest.mark.asyncio
async def test_main_runs_script(capsys):
    snapshot = await main(["--machine", "game", "--inputs", "start", "die", "restart"])

    assert snapshot["state"] == "PLAYING"
    assert "Final state: PLAYING after 8 ticks" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_main_writes_transcript(tmp_path):
    path = tmp_path / "player.tsv"

    await main(["--inputs", "walk", "jump", "--transcript", str(path)])

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "1\tIDLE\tWALKING"
    assert lines[1] == "2\tWALKING\tJUMPING"
    assert lines[2] == "4\tJUMPING\tIDLE"
