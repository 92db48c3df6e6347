"""
Hover highlighting: pointer position -> nearest series -> stroke and tooltip updates.

The transitions are pure functions returning a new HighlightState plus a list
of visual commands; HighlightController keeps the current state and forwards
commands to a render target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from .processing import SeriesRecord
from .scene import Scene

logger = logging.getLogger(__name__)

DEFAULT = 'default'
ACTIVE = 'active'

# Offset of the desktop tooltip from the series' rightmost point
TOOLTIP_OFFSET = (5, 5)


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in container-local pixels. Mouse and touch share this shape."""
    x: float
    y: float
    kind: str = 'mouse'


@dataclass(frozen=True)
class HighlightState:
    mode: str = DEFAULT
    active_country: str | None = None
    tooltip_position: tuple[float, float] | None = None
    tooltip_text: str | None = None
    point_index: int | None = None


@dataclass(frozen=True)
class ResetStrokes:
    """Return every series stroke to its unemphasized style."""


@dataclass(frozen=True)
class EmphasizeStroke:
    country_code: str


@dataclass(frozen=True)
class ShowTooltip:
    text: str
    x: float
    y: float


VisualCommand = Union[ResetStrokes, EmphasizeStroke, ShowTooltip]


class CommandSink(Protocol):
    def apply(self, commands: Sequence[VisualCommand]) -> None: ...


def tooltip_text(record: SeriesRecord) -> str:
    return f"{record.country.name} {record.latest:,.0f}"


def tooltip_position(record: SeriesRecord, scene: Scene) -> tuple[float, float]:
    """Plot-local tooltip anchor: beside the latest point, or pinned top-left on mobile."""
    if scene.layout.is_mobile:
        return (0.0, 0.0)
    dx, dy = TOOLTIP_OFFSET
    return (scene.layout.width + dx, scene.scales.screen_y(record.latest) + dy)


def _highlight_point(point_index: int | None, mode: str, scene: Scene):
    if point_index is None:
        return HighlightState(mode=mode), [ResetStrokes()]

    record = scene.record_for_point(point_index)
    position = tooltip_position(record, scene)
    text = tooltip_text(record)
    state = HighlightState(
        mode=mode,
        active_country=record.code,
        tooltip_position=position,
        tooltip_text=text,
        point_index=point_index,
    )
    commands = [
        ResetStrokes(),
        EmphasizeStroke(record.code),
        ShowTooltip(text, position[0], position[1]),
    ]
    return state, commands


def default_highlight(scene: Scene) -> tuple[HighlightState, list[VisualCommand]]:
    """
    Highlight the series nearest the plot's top-right corner.

    That is the series whose latest value is highest, so the leader shows
    without any interaction. An empty scene yields an empty highlight.
    """
    point_index = scene.index.nearest(scene.layout.width, 0)
    return _highlight_point(point_index, DEFAULT, scene)


def handle_pointer_event(
    state: HighlightState,
    event: PointerEvent,
    scene: Scene,
) -> tuple[HighlightState, list[VisualCommand]]:
    """
    Move the highlight to the series nearest the pointer.

    Positions outside the plot area leave the current highlight in place and
    emit no commands. The highlight is sticky: nothing reverts it to the
    default once the pointer leaves.
    """
    margin = scene.layout.margin
    x = event.x - margin.left
    y = event.y - margin.top
    if not scene.layout.contains(x, y):
        return state, []

    point_index = scene.index.nearest(x, y)
    if point_index is None:
        return state, []
    return _highlight_point(point_index, ACTIVE, scene)


def handle_pointer_leave(state: HighlightState) -> tuple[HighlightState, list[VisualCommand]]:
    """Pointer left the plot area: keep the last highlight visible."""
    return state, []


class HighlightController:
    """
    Owns the highlight state for the current scene and drives a render target.

    Call ``rebind`` after every draw so the scene and state are swapped
    together; no highlight survives into a scene that lacks its country.
    """

    def __init__(self, scene: Scene, target: CommandSink | None = None) -> None:
        self.target = target
        self.scene = scene
        self.state = HighlightState()
        self.rebind(scene)

    def rebind(self, scene: Scene) -> HighlightState:
        """Switch to a freshly drawn scene and apply its default highlight."""
        state, commands = default_highlight(scene)
        self.scene, self.state = scene, state
        self._emit(commands)
        return state

    def pointer_move(self, x: float, y: float, kind: str = 'mouse') -> HighlightState:
        self.state, commands = handle_pointer_event(self.state, PointerEvent(x, y, kind), self.scene)
        if commands:
            logger.debug(f"Highlight -> {self.state.active_country}")
        self._emit(commands)
        return self.state

    def pointer_leave(self) -> HighlightState:
        self.state, commands = handle_pointer_leave(self.state)
        self._emit(commands)
        return self.state

    def _emit(self, commands: Sequence[VisualCommand]) -> None:
        if commands and self.target is not None:
            self.target.apply(commands)
