"""Geometry of the seek and volume slider: click-to-jump and painted layout."""

from __future__ import annotations

from dataclasses import dataclass

HANDLE_SIZE = 12
_GROOVE_INSET_X = 2
_GROOVE_INSET_Y = 10


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with its top-left corner at (x, y)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def center_y(self) -> int:
        """Vertical centre of an integer rectangle, rounded toward zero."""
        top = int(self.y)
        bottom = top + int(self.height) - 1
        return int((top + bottom) / 2)

    def contains(self, x: float, y: float) -> bool:
        """Whether the point lies inside the rectangle."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )


@dataclass(frozen=True)
class SliderLayout:
    """Where the groove, the filled progress bar and the handle are drawn."""

    groove: Rect
    progress_bar: Rect
    handle: Rect
    fraction: float


def slider_value_from_position(
    minimum: int, maximum: int, position: int, span: int, upside_down: bool = False
) -> int:
    """Map a pixel offset along a track of ``span`` pixels to a slider value."""
    if span <= 0 or position <= 0:
        return maximum if upside_down else minimum
    if position >= span:
        return minimum if upside_down else maximum

    value_range = maximum - minimum
    if span > value_range:
        offset = (2 * position * value_range + span) // (2 * span)
    else:
        div, mod = divmod(value_range, span)
        offset = position * div + (2 * position * mod + span) // (2 * span)
    return maximum - offset if upside_down else minimum + offset


def jump_value(
    minimum: int,
    maximum: int,
    click: tuple[float, float],
    groove: Rect,
    handle: Rect,
    horizontal: bool = True,
    upside_down: bool = False,
) -> int | None:
    """Value a click on the track jumps to, or None when the handle was hit.

    A click on the handle keeps the ordinary drag behaviour, so no jump is
    requested for it.
    """
    x, y = click
    if handle.contains(x, y):
        return None
    if horizontal:
        handle_extent = int(handle.width)
        position = int(x - groove.x - handle_extent // 2)
        span = int(groove.width) - handle_extent
    else:
        handle_extent = int(handle.height)
        position = int(y - groove.y - handle_extent // 2)
        span = int(groove.height) - handle_extent
    return slider_value_from_position(minimum, maximum, position, span, upside_down)


def paint_layout(
    width: int, height: int, value: int, minimum: int = 0, maximum: int = 100
) -> SliderLayout:
    """Compute the painted geometry of a slider of the given widget size."""
    groove = Rect(
        _GROOVE_INSET_X,
        _GROOVE_INSET_Y,
        width - 2 * _GROOVE_INSET_X,
        height - 2 * _GROOVE_INSET_Y,
    )
    value_range = maximum - minimum
    fraction = (value - minimum) / value_range if value_range else 0.0
    travel = (groove.width - HANDLE_SIZE) * fraction

    # The filled bar's right edge is adjusted by a whole-pixel amount.
    bar_width = groove.width + int(travel - groove.width)
    progress_bar = Rect(groove.x, groove.y, bar_width, groove.height)

    handle = Rect(
        groove.left + travel,
        groove.center_y - HANDLE_SIZE // 2,
        HANDLE_SIZE,
        HANDLE_SIZE,
    )
    return SliderLayout(groove, progress_bar, handle, fraction)