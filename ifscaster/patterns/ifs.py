"""Iterated-function-system expansion of a base triangle."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ifscaster.state.transforms import Transformation, Triangle


def expected_triangle_count(transform_count: int, depth: int) -> int:
    """Number of triangles generate() will emit: n ** depth."""
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")
    return transform_count ** depth


def generate(
    transformations: Iterable[Transformation],
    base_polygon: Triangle,
    depth: int,
) -> List[Triangle]:
    """
    Expand base_polygon through every transformation, depth times.

    Output is depth-first in transformation order: all descendants of the
    first transformation's image come before those of the second, and so on.
    A work stack replaces recursion so large depths never touch the
    interpreter's recursion limit.
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")

    maps: Sequence[Transformation] = list(transformations)
    base: Triangle = (tuple(base_polygon[0]), tuple(base_polygon[1]), tuple(base_polygon[2]))  # type: ignore[assignment]

    out: List[Triangle] = []
    if depth == 0:
        out.append(base)
        return out
    if not maps:
        return out

    stack: List[Tuple[Triangle, int]] = [(base, depth)]
    while stack:
        verts, remaining = stack.pop()
        if remaining == 0:
            out.append(verts)
            continue
        # push in reverse so the first transformation is expanded first
        for t in reversed(maps):
            stack.append((t.apply_all(verts), remaining - 1))
    return out
