"""Linear scales mapping data values to screen pixels and opacities."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .layout import LayoutConfig
from .processing import SeriesRecord

# Thresholds between 1-2-5 tick steps
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Step for roughly ``count`` ticks over [start, stop], on a 1-2-5 sequence.

    Positive results are the step itself; negative results are the negated
    inverse of a sub-unit step (so -10 means a step of 0.1), which keeps
    decimal ticks exact.
    """
    if count <= 0:
        return 0.0
    step = (stop - start) / count
    if step <= 0 or not math.isfinite(step):
        return 0.0
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


@dataclass(frozen=True)
class LinearScale:
    """Monotonic linear map from ``domain`` to ``range``."""
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        if span == 0:
            # Degenerate domain maps everything to the middle of the range
            return (r0 + r1) / 2
        return r0 + (value - d0) / span * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = r1 - r0
        if span == 0:
            return (d0 + d1) / 2
        return d0 + (pixel - r0) / span * (d1 - d0)

    def nice(self, count: int = 10) -> LinearScale:
        """Return a copy with the domain extended outward to round tick values."""
        start, stop = self.domain
        reverse = stop < start
        if reverse:
            start, stop = stop, start
        if start == stop:
            return self

        prestep = None
        for _ in range(10):
            step = tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            elif step < 0:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            else:
                break
            prestep = step

        domain = (stop, start) if reverse else (start, stop)
        return LinearScale(domain=domain, range=self.range)

    def ticks(self, count: int = 10) -> list[float]:
        """Round tick values inside the domain, about ``count`` of them."""
        start, stop = sorted(self.domain)
        if start == stop:
            return [start]
        step = tick_increment(start, stop, count)
        if step > 0:
            r0 = math.ceil(start / step)
            r1 = math.floor(stop / step)
            return [(r0 + i) * step for i in range(r1 - r0 + 1)]
        if step < 0:
            inv = -step
            r0 = math.ceil(start * inv)
            r1 = math.floor(stop * inv)
            return [(r0 + i) / inv for i in range(r1 - r0 + 1)]
        return []

    @property
    def domain_max(self) -> float:
        return max(self.domain)


@dataclass(frozen=True)
class ScaleSet:
    x: LinearScale
    y: LinearScale
    alpha: LinearScale

    def screen_x(self, alignment_index: int) -> float:
        """Pixel x for a sample ``alignment_index`` steps before the latest one."""
        return self.x(self.x.domain_max - alignment_index)

    def screen_y(self, value: float) -> float:
        return self.y(value)


def build_scales(records: Sequence[SeriesRecord], layout: LayoutConfig, max_opacity: float = 0.6) -> ScaleSet:
    """
    Build the x, y and alpha scales for a draw pass.

    Args:
        records: Normalized series for this draw
        layout: Resolved layout (plot width and height)
        max_opacity: Upper end of the alpha range

    Returns:
        ScaleSet
    """
    max_length = max((r.length for r in records), default=0)
    max_peak = max((r.peak for r in records), default=0.0)
    max_latest = max((r.latest for r in records), default=0.0)

    x = LinearScale(domain=(0, max_length), range=(0, layout.width)).nice()
    y = LinearScale(domain=(0, max_peak), range=(layout.height, 0)).nice()
    alpha = LinearScale(domain=(0, max_latest), range=(0, max_opacity))
    return ScaleSet(x=x, y=y, alpha=alpha)
