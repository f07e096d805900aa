import json
import random

import pytest

from clue_chat.assistant.streaming import PacingPolicy, stream_reply


def _payloads(frames):
    return [json.loads(frame[len("data: "):]) for frame in frames]


class RecordingSleep:
    def __init__(self, fail_on_call=None):
        self.delays = []
        self.fail_on_call = fail_on_call

    async def __call__(self, delay):
        self.delays.append(delay)
        if self.fail_on_call is not None and len(self.delays) == self.fail_on_call:
            raise RuntimeError("timer failed")


@pytest.mark.asyncio
async def test_units_then_single_complete():
    sleep = RecordingSleep()
    frames = [f async for f in stream_reply("q", PacingPolicy(), generate=lambda q: "日本\nx", sleep=sleep)]

    assert all(frame.startswith("data: ") and frame.endswith("\n\n") for frame in frames)
    assert _payloads(frames) == [
        {"content": "日", "type": "stream"},
        {"content": "本", "type": "stream"},
        {"content": "\n", "type": "stream"},
        {"content": "x", "type": "stream"},
        {"type": "complete"},
    ]


@pytest.mark.asyncio
async def test_pacing_delays():
    sleep = RecordingSleep()
    pacing = PacingPolicy(rng=random.Random(42))
    _ = [f async for f in stream_reply("q", pacing, generate=lambda q: "ab\nc", sleep=sleep)]

    initial, after_a, after_b, after_newline, after_c = sleep.delays
    assert initial == 0.5
    assert after_newline == 0.1
    for delay in (after_a, after_b, after_c):
        assert 0.02 <= delay < 0.07


@pytest.mark.asyncio
async def test_generation_failure_still_completes():
    def broken(query):
        raise KeyError("no template")

    frames = [f async for f in stream_reply("q", PacingPolicy.immediate(), generate=broken, sleep=RecordingSleep())]

    assert _payloads(frames) == [{"type": "complete"}]


@pytest.mark.asyncio
async def test_failure_mid_stream_keeps_partial_content():
    sleep = RecordingSleep(fail_on_call=3)  # initial delay, after "a", after "b"
    frames = [f async for f in stream_reply("q", PacingPolicy(), generate=lambda q: "abcdef", sleep=sleep)]

    payloads = _payloads(frames)
    assert [p.get("content") for p in payloads[:-1]] == ["a", "b"]
    assert payloads[-1] == {"type": "complete"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"initial_delay": -1},
        {"min_unit_delay": 0.08, "max_unit_delay": 0.07},
    ],
)
def test_invalid_pacing_rejected(kwargs):
    with pytest.raises(ValueError):
        PacingPolicy(**kwargs)


def test_pacing_from_settings():
    from clue_chat.config import Settings

    policy = PacingPolicy.from_settings(Settings(initial_delay_ms=250, newline_delay_ms=40))
    assert policy.initial_delay == 0.25
    assert policy.newline_delay == 0.04
    assert policy.delay_after("\n") == 0.04
