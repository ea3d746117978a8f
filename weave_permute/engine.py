import asyncio
from dataclasses import dataclass

from tqdm import tqdm

from weave_permute.errors import ProcessingCancelled
from weave_permute.utils.pixel_buffer import PixelBuffer
from weave_permute.validation import ValidatedPattern, validate_pattern


@dataclass(frozen=True)
class SliceProgress:
    """Progress after one complete slice has been permuted."""

    index: int
    total: int
    ratio: float


class PermutationRun:
    """
    A single pass of a pattern over a pixel buffer.

    Iterating the run permutes one slice per step and yields a
    SliceProgress. ``result`` stays None until the iteration is exhausted,
    so an abandoned run never exposes partially written pixels.

    """

    def __init__(self, buffer: PixelBuffer, pattern: ValidatedPattern):
        self.buffer = buffer
        self.pattern = pattern
        self.total = buffer.width // pattern.size
        self.result: PixelBuffer | None = None
        self._steps = self._permute_slices()

    def __iter__(self):
        return self

    def __next__(self) -> SliceProgress:
        return next(self._steps)

    def _permute_slices(self):
        src = self.buffer.data
        out = self.buffer.writable_copy()
        size = self.pattern.size
        idx = self.pattern.indices

        if self.total == 0:
            yield SliceProgress(0, 0, 1.0)
        for i in range(self.total):
            start = i * size
            # gather: destination column j takes source column idx[j]
            row_block = src[:, start:start + size]
            out[:, start:start + size] = row_block[:, idx]
            yield SliceProgress(i, self.total, (i + 1) / self.total)

        self.result = PixelBuffer(self.buffer.width, self.buffer.height, out)


def _is_cancelled(cancel_event) -> bool:
    return cancel_event is not None and cancel_event.is_set()


class PermutationEngine:
    """
    Applies validated column patterns to pixel buffers slice by slice.

    yield_every : int
        Number of slices processed between cooperative yields in
        ``apply_async``.

    show_progress : bool
        Display a tqdm bar while a run is in progress.

    """

    validate = staticmethod(validate_pattern)

    def __init__(self, yield_every: int = 1, show_progress: bool = False):
        if yield_every < 1:
            raise ValueError(f"yield_every must be >= 1, got {yield_every}")
        self.yield_every = yield_every
        self.show_progress = show_progress

    def iter_apply(self, buffer: PixelBuffer, pattern: ValidatedPattern) -> PermutationRun:
        if not isinstance(pattern, ValidatedPattern):
            raise TypeError("expected a ValidatedPattern; call validate() first")
        if not isinstance(buffer, PixelBuffer):
            raise TypeError(f"expected a PixelBuffer, got {type(buffer).__name__}")
        return PermutationRun(buffer, pattern)

    def _progress_bar(self, total: int):
        return tqdm(total=max(total, 1), leave=False, desc="slices", disable=not self.show_progress)

    def apply(self, buffer, pattern, on_progress=None, cancel_event=None) -> PixelBuffer:
        """
        Return a new buffer with every complete slice permuted.

        on_progress : callable(float), optional
            Called with the completion ratio after every slice.

        cancel_event : object with is_set(), optional
            Checked at every slice boundary; raises ProcessingCancelled.

        """
        run = self.iter_apply(buffer, pattern)
        if _is_cancelled(cancel_event):
            raise ProcessingCancelled("Permutation cancelled before the first slice")
        with self._progress_bar(run.total) as pbar:
            for step in run:
                pbar.update(1)
                if on_progress is not None:
                    on_progress(step.ratio)
                if step.ratio < 1.0 and _is_cancelled(cancel_event):
                    raise ProcessingCancelled(f"Permutation cancelled after slice {step.index + 1} of {step.total}")
        return run.result

    async def apply_async(self, buffer, pattern, on_progress=None, cancel_event=None) -> PixelBuffer:
        """Coroutine version of ``apply`` that yields to the event loop between slices."""
        run = self.iter_apply(buffer, pattern)
        if _is_cancelled(cancel_event):
            raise ProcessingCancelled("Permutation cancelled before the first slice")
        with self._progress_bar(run.total) as pbar:
            for step in run:
                pbar.update(1)
                if on_progress is not None:
                    on_progress(step.ratio)
                if step.ratio < 1.0:
                    if (step.index + 1) % self.yield_every == 0:
                        await asyncio.sleep(0)
                    if _is_cancelled(cancel_event):
                        raise ProcessingCancelled(
                            f"Permutation cancelled after slice {step.index + 1} of {step.total}"
                        )
        return run.result
