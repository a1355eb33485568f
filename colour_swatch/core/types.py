"""Shared types for colour-swatch: ColourLabel, PatchRecord, SavedPatch, Command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from colour_swatch.core.swatch import SwatchConfig

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ColourLabel:
    """ISCC-NBS colour classification attached to a patch."""

    name: str
    code: int | None = None  # ISCC-NBS centroid number, when given

    def __str__(self) -> str:
        if self.code is None:
            return self.name
        return f'{self.code}:{self.name}'


@dataclass
class PatchRecord:
    """One reference colour cell of the swatch."""

    reflectance: float
    colour_label: ColourLabel | None = None

    def __str__(self) -> str:
        label = str(self.colour_label) if self.colour_label else '-'
        return f'reflectance={self.reflectance:g}  ISCC-NBS={label}'


@dataclass(frozen=True)
class SavedPatch:
    """A patch image written out by mask segmentation."""

    index: int
    path: str
    bounds: tuple[int, int, int, int]  # (x1, y1, x2, y2), x2/y2 exclusive

    @property
    def width(self) -> int:
        return self.bounds[2] - self.bounds[0]

    @property
    def height(self) -> int:
        return self.bounds[3] - self.bounds[1]


class Command:
    """A self-registering swatch-tool subcommand.

    Usage in a command module:

        command = Command(name='info', help='Print the parsed swatch')

        @command.run
        def run(swatch, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, swatch: SwatchConfig, args: Any) -> int:
        """Execute the command's run function, returning its exit code."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(swatch, args) or 0
