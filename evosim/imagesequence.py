"""Environment grids driven by sequences of image files, and variable linkages."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike

from PIL import Image

RGB = tuple[int, int, int]
_Grid = list[list[RGB]]


class EnvironmentMode(IntEnum):
    """How a sequence moves through its images."""

    STATIC = 0
    ONCE = 1
    LOOP = 2
    BOUNCE = 3


class ImageLoadError(OSError):
    """An image of the sequence could not be opened."""


def _read_grid(path: str | PathLike[str], grid_x: int, grid_y: int) -> _Grid:
    try:
        with Image.open(path) as opened:
            image = opened.convert("RGB")
    except (OSError, ValueError) as exc:
        raise ImageLoadError(f"can't open image {path}") from exc
    if image.width < grid_x or image.height < grid_y:
        image = image.resize((grid_x, grid_y), Image.Resampling.NEAREST)
    pixels = image.load()
    return [[tuple(pixels[x, y][:3]) for y in range(grid_y)] for x in range(grid_x)]


def _black(grid_x: int, grid_y: int) -> _Grid:
    return [[(0, 0, 0)] * grid_y for _ in range(grid_x)]


class ImageSequence:
    """A grid of colours taken from a list of images, changing over time.

    Every ``change_rate`` iterations the next image is loaded; in between,
    the grid may be interpolated from the current image towards the next.
    """

    def __init__(
        self,
        files: Sequence[str | PathLike[str]],
        rate: int,
        grid_x: int,
        grid_y: int,
        mode: EnvironmentMode | int = EnvironmentMode.STATIC,
    ) -> None:
        self.files = list(files)
        self.change_rate = rate
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.current_file = 0
        self.change_counter = rate
        self.change_forward = True
        self._grid = _black(grid_x, grid_y)
        self._last = _black(grid_x, grid_y)
        self._next = _black(grid_x, grid_y)
        self.load(mode)

    def _next_file(self, mode: EnvironmentMode) -> int:
        if self.change_forward:
            if self.current_file + 1 < len(self.files):
                return self.current_file + 1
            if mode is EnvironmentMode.ONCE:
                return self.current_file
            if mode is EnvironmentMode.BOUNCE:
                return self.current_file - 1
            return 0
        return self.current_file - 1 if self.current_file > 0 else 1

    def load(self, mode: EnvironmentMode | int) -> None:
        """Load the current image, and the next one used for interpolation."""
        mode = EnvironmentMode(mode)
        if self.current_file >= len(self.files):
            return
        current = _read_grid(self.files[self.current_file], self.grid_x, self.grid_y)
        self._grid = [list(column) for column in current]
        self._last = [list(column) for column in current]
        if mode is EnvironmentMode.STATIC or len(self.files) == 1:
            self._next = [list(column) for column in current]
        else:
            self._next = _read_grid(self.files[self._next_file(mode)], self.grid_x, self.grid_y)

    def regenerate(self, mode: EnvironmentMode | int, interpolate: bool) -> bool:
        """Advance one iteration. Returns True when a once-through sequence ends."""
        mode = EnvironmentMode(mode)
        if self.change_rate == 0 or mode is EnvironmentMode.STATIC or len(self.files) == 1:
            return False

        self.change_counter -= 1
        if self.change_counter <= 0:
            if mode is not EnvironmentMode.BOUNCE:
                self.change_forward = True
            if self.change_forward:
                self.current_file += 1
                if self.current_file >= len(self.files):
                    if mode is EnvironmentMode.ONCE:
                        return True
                    if mode is EnvironmentMode.LOOP:
                        self.current_file = 0
                    else:
                        self.current_file -= 2
                        self.change_forward = False
            else:
                self.current_file -= 1
                if self.current_file < 0:
                    self.current_file = 1
                    self.change_forward = True
            self.change_counter = self.change_rate
            self.load(mode)
        elif interpolate:
            inverse = (self.change_counter + 1) / self.change_rate
            progress = 1 - inverse
            self._grid = [
                [
                    tuple(
                        int(0.5 + old * inverse + new * progress) & 0xFF
                        for old, new in zip(last_pixel, next_pixel)
                    )
                    for last_pixel, next_pixel in zip(last_column, next_column)
                ]
                for last_column, next_column in zip(self._last, self._next)
            ]
        return False

    def rgb(self, x: int, y: int) -> RGB:
        """Return the (r, g, b) colour of cell (x, y)."""
        return self._grid[x][y]

    def set_rgb(self, x: int, y: int, rgb: Sequence[int]) -> None:
        """Set the colour of cell (x, y)."""
        colour = tuple(rgb[:3])
        if len(colour) != 3 or not all(0 <= value <= 255 for value in colour):
            raise ValueError(f"{rgb!r} is not an (r, g, b) colour of bytes")
        self._grid[x][y] = colour

    def reset(self, counter: int) -> None:
        """Restart the change countdown at ``counter``, moving forwards."""
        self.change_counter = counter
        self.change_forward = True


@dataclass
class Linkage:
    """Ties a simulation variable to an image sequence."""

    variable: str = "temp"
    mode: EnvironmentMode = EnvironmentMode.STATIC
    interpolate: bool = True
    is_set: bool = False
    image_sequence: ImageSequence | None = None