"""
Arc-length lookup tables.

A table holds two tiers of normalized ``(marker, length)`` pairs:

- direct: one entry per topological segment, measured as the straight chord
  between the segment's vertices.
- precise: ``subdivisions`` entries per segment, measured along the curve
  by sampling it at evenly spaced local parameters.

Markers are the running distance at the start of an entry divided by the
tier's total, so each tier partitions [0, 1). Storage grows to the next
power of two and is never shrunk.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from splinepath.spline_math import distance, next_power_of_two

SegmentEvaluator = Callable[[int, float], np.ndarray]


class ArcLengthTable:
    """Direct and precise arc-length tables for one curve."""

    def __init__(self):
        self.direct_markers = np.zeros(0)
        self.direct_lengths = np.zeros(0)
        self.precise_markers = np.zeros(0)
        self.precise_lengths = np.zeros(0)

        self.segment_count = 0
        self.precise_count = 0
        self.subdivisions = 1

        self.direct_distance = 0.0
        self.precise_distance = 0.0

    @property
    def capacity(self) -> int:
        """Allocated precise entries."""
        return self.precise_markers.shape[0]

    def _ensure_capacity(self, direct_size: int, precise_size: int) -> None:
        direct_cap = next_power_of_two(direct_size)
        if direct_cap > self.direct_markers.shape[0]:
            self.direct_markers = np.zeros(direct_cap)
            self.direct_lengths = np.zeros(direct_cap)

        precise_cap = next_power_of_two(precise_size)
        if precise_cap > self.precise_markers.shape[0]:
            self.precise_markers = np.zeros(precise_cap)
            self.precise_lengths = np.zeros(precise_cap)

    def rebuild(
        self,
        points: Sequence[np.ndarray],
        evaluate: SegmentEvaluator,
        segment_count: int,
        looped: bool,
        subdivisions: int,
    ) -> None:
        """Recompute both tiers.

        Args:
            points: Vertex positions. Segment ``i`` runs from ``points[i]``
                to ``points[(i + 1) % len(points)]``.
            evaluate: ``evaluate(i, t)`` returns the point at local
                parameter ``t`` of segment ``i``.
            segment_count: Number of topological segments.
            looped: Whether the last vertex connects back to the first.
            subdivisions: Samples per segment for the precise tier.
        """
        subdivisions = max(1, int(subdivisions))
        vertex_count = len(points)
        precise_count = segment_count * subdivisions

        self._ensure_capacity(segment_count + 1, precise_count)

        direct_markers = np.zeros(segment_count)
        direct_lengths = np.zeros(segment_count)
        precise_markers = np.zeros(precise_count)
        precise_lengths = np.zeros(precise_count)

        direct_total = 0.0
        precise_total = 0.0

        for i in range(segment_count):
            start = points[i]
            end = points[(i + 1) % vertex_count]

            chord = distance(start, end)
            direct_markers[i] = direct_total
            direct_lengths[i] = chord
            direct_total += chord

            prev = start
            for j in range(subdivisions):
                nxt = evaluate(i, (j + 1) / subdivisions)
                step = distance(prev, nxt)

                idx = i * subdivisions + j
                precise_markers[idx] = precise_total
                precise_lengths[idx] = step

                precise_total += step
                prev = nxt

        if direct_total > 0:
            direct_markers /= direct_total
            direct_lengths /= direct_total
        if precise_total > 0:
            precise_markers /= precise_total
            precise_lengths /= precise_total

        self.direct_markers[:segment_count] = direct_markers
        self.direct_lengths[:segment_count] = direct_lengths
        if not looped:
            self.direct_markers[segment_count] = 1.0
            self.direct_lengths[segment_count] = 0.0

        self.precise_markers[:precise_count] = precise_markers
        self.precise_lengths[:precise_count] = precise_lengths

        self.segment_count = segment_count
        self.precise_count = precise_count
        self.subdivisions = subdivisions
        self.direct_distance = direct_total
        self.precise_distance = precise_total

    def _tier(self, precise: bool):
        if precise:
            return self.precise_markers, self.precise_lengths, self.precise_count
        return self.direct_markers, self.direct_lengths, self.segment_count

    def transform(self, percent: float, precise: bool) -> float:
        """Map an arc-length percent to a uniform percent.

        Scans backward for the last entry whose marker is ``<= percent``.
        When no entry past the first qualifies, entry 0 is used.
        """
        markers, lengths, count = self._tier(precise)
        with np.errstate(divide="ignore", invalid="ignore"):
            for i in range(count - 1, 0, -1):
                marker = markers[i]
                if marker <= percent:
                    lerp = (percent - marker) / lengths[i]
                    return float((i + lerp) / count)

            lerp = percent / lengths[0]
            return float(lerp / count)

    def inverse(self, percent: float, precise: bool) -> float:
        """Map a uniform percent to an arc-length percent."""
        markers, lengths, count = self._tier(precise)
        scaled = percent * count
        index = int(np.floor(scaled))
        if index < 0:
            index = 0
        elif index >= count:
            index = count - 1
        interpolation = scaled - index
        return float(markers[index] + lengths[index] * interpolation)

    def entries(self, precise: bool) -> np.ndarray:
        """Live ``(marker, length)`` pairs of a tier as an ``(n, 2)`` array."""
        markers, lengths, count = self._tier(precise)
        return np.column_stack((markers[:count], lengths[:count]))
