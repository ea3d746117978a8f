import asyncio

import numpy as np
import pytest

from weave_permute.engine import PermutationEngine
from weave_permute.errors import ProcessingCancelled
from weave_permute.utils.pixel_buffer import PixelBuffer
from weave_permute.validation import validate_pattern


def _buffer(width, height=3):
    rng = np.random.default_rng(width)
    return PixelBuffer.from_array(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))


def test_async_matches_sync():
    buffer = _buffer(30)
    pattern = validate_pattern(4, [2, 4, 1, 3])
    engine = PermutationEngine()
    expected = engine.apply(buffer, pattern)
    result = asyncio.run(engine.apply_async(buffer, pattern))
    assert result == expected


def test_async_yields_between_slices():
    events = []

    async def ticker():
        for _ in range(20):
            events.append("tick")
            await asyncio.sleep(0)

    async def main():
        engine = PermutationEngine(yield_every=1)
        task = asyncio.create_task(ticker())
        await engine.apply_async(_buffer(10), validate_pattern(2, [2, 1]), on_progress=lambda r: events.append(r))
        await task

    asyncio.run(main())
    ratios = [e for e in events if e != "tick"]
    assert ratios == [0.2, 0.4, 0.6, 0.8, 1.0]
    first, last = events.index(0.2), events.index(1.0)
    assert "tick" in events[first:last]


def test_async_task_cancellation_propagates():
    async def main():
        engine = PermutationEngine(yield_every=1)
        progress = []
        task = asyncio.create_task(
            engine.apply_async(_buffer(200), validate_pattern(2, [2, 1]), on_progress=progress.append)
        )
        while not progress:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return progress

    progress = asyncio.run(main())
    assert progress[-1] < 1.0


def test_async_cancel_event():
    class Flag:
        def __init__(self):
            self.value = False

        def is_set(self):
            return self.value

    flag = Flag()

    def on_progress(ratio):
        if ratio >= 0.5:
            flag.value = True

    with pytest.raises(ProcessingCancelled):
        asyncio.run(
            PermutationEngine().apply_async(
                _buffer(8), validate_pattern(2, [2, 1]), on_progress=on_progress, cancel_event=flag
            )
        )


def test_async_progress_reaches_one_with_batches():
    ratios = []
    asyncio.run(
        PermutationEngine(yield_every=3).apply_async(_buffer(14), validate_pattern(2, [1, 2]), on_progress=ratios.append)
    )
    assert ratios == sorted(ratios)
    assert ratios[-1] == 1.0
    assert len(ratios) == 7


def test_async_rejects_unvalidated_pattern():
    with pytest.raises(TypeError, match="^expected a ValidatedPattern"):
        asyncio.run(PermutationEngine().apply_async(_buffer(4), [2, 1]))
