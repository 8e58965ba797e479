"""
Grid planning: turn image dimensions and a split spec into a frame grid.

Two entry points share the same arithmetic. :func:`layout` is lenient
and always returns a :class:`GridPlan` so previews and frame-count hints
can update while the user is still typing. :func:`plan` is strict and
returns a :class:`ValidationFailure` unless the grid tiles the image
exactly. Neither keeps any state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sprite_splitter.type_defs import ByCount, BySize, SplitSpec

_EMPTY_PLAN_FIELDS = (0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class GridPlan:
    """Frame dimensions and grid shape derived from a split spec."""

    frame_width: int
    frame_height: int
    rows: int
    cols: int

    @property
    def total_frames(self) -> int:
        return self.rows * self.cols

    @property
    def is_empty(self) -> bool:
        return self.rows == 0 or self.cols == 0


EMPTY_PLAN = GridPlan(*_EMPTY_PLAN_FIELDS)


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """
    Field-level reasons a split spec cannot be exported.

    ``layout`` carries the lenient grid so callers can keep drawing a
    preview while the failure is shown next to the inputs.
    """

    errors: dict[str, str] = field(default_factory=dict)
    layout: GridPlan = EMPTY_PLAN


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _divisors(spec: SplitSpec) -> dict[str, tuple[object, str]]:
    """Map each field of the active mode to its value and axis."""
    if isinstance(spec, BySize):
        return {
            "frame_width": (spec.frame_width, "width"),
            "frame_height": (spec.frame_height, "height"),
        }
    if isinstance(spec, ByCount):
        return {
            "cols": (spec.cols, "width"),
            "rows": (spec.rows, "height"),
        }
    msg = f"Unknown split spec: {spec!r}"
    raise TypeError(msg)


def layout(size: tuple[int, int], spec: SplitSpec) -> GridPlan:
    """
    Compute the grid eagerly, flooring any remainder.

    Returns :data:`EMPTY_PLAN` when a field of the active mode is
    missing or not a positive integer.
    """
    width, height = size
    if isinstance(spec, BySize):
        fw, fh = spec.frame_width, spec.frame_height
        if not (_is_positive_int(fw) and _is_positive_int(fh)):
            return EMPTY_PLAN
        return GridPlan(
            frame_width=fw,
            frame_height=fh,
            rows=height // fh,
            cols=width // fw,
        )
    if isinstance(spec, ByCount):
        rows, cols = spec.rows, spec.cols
        if not (_is_positive_int(rows) and _is_positive_int(cols)):
            return EMPTY_PLAN
        return GridPlan(
            frame_width=width // cols,
            frame_height=height // rows,
            rows=rows,
            cols=cols,
        )
    msg = f"Unknown split spec: {spec!r}"
    raise TypeError(msg)


def validate(size: tuple[int, int], spec: SplitSpec) -> dict[str, str]:
    """Return a message per invalid field; empty when the spec tiles exactly."""
    extents = {"width": size[0], "height": size[1]}
    errors: dict[str, str] = {}
    for name, (value, axis) in _divisors(spec).items():
        label = name.replace("_", " ")
        if value is None:
            errors[name] = f"{label} is required"
        elif not _is_positive_int(value):
            errors[name] = f"{label} must be a positive integer"
        elif extents[axis] % value != 0:
            errors[name] = (
                f"{label} {value} does not divide image {axis} "
                f"{extents[axis]} evenly"
            )
    return errors


def plan(size: tuple[int, int], spec: SplitSpec) -> GridPlan | ValidationFailure:
    """
    Plan an exact tiling of an image of ``size`` (width, height).

    Returns:
        A :class:`GridPlan` when every field is a positive integer and
        both axes divide with zero remainder, otherwise a
        :class:`ValidationFailure` listing every offending field.

    """
    errors = validate(size, spec)
    grid = layout(size, spec)
    if errors:
        return ValidationFailure(errors=errors, layout=grid)
    return grid


def is_exportable(size: tuple[int, int], spec: SplitSpec) -> bool:
    """Whether the export trigger should be enabled for ``spec``."""
    return isinstance(plan(size, spec), GridPlan)


def tiles_exactly(size: tuple[int, int], grid: GridPlan) -> bool:
    """Whether ``grid`` covers an image of ``size`` with no leftover pixels."""
    width, height = size
    return (
        not grid.is_empty
        and grid.frame_width * grid.cols == width
        and grid.frame_height * grid.rows == height
    )
