"""Cleans up a path before tracking: drops short segments and merges neighbours."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

import numpy as np

from pursuit.common import Path, PathSegment

logger = logging.getLogger(__name__)


@dataclass
class PathPreprocessorParameters:
    minimum_segment_length: float = 1.0  # meters


class PathPreprocessor:
    """Removes degenerate segments and joins consecutive segments of one direction."""

    def __init__(self, parameters: PathPreprocessorParameters | None = None) -> None:
        self.parameters = (
            copy.copy(parameters) if parameters is not None else PathPreprocessorParameters()
        )

    def preprocess_path(self, path: Path) -> tuple[int, int]:
        """Clean ``path`` in place; return ``(segments_removed, segments_merged)``."""
        removed = self.remove_short_path_segments(path)
        if not path.segments:
            raise ValueError("Path size is 0. All the segments have been erased.")
        logger.info(
            "Removed %d path segments, number of remaining path segments: %d",
            removed,
            len(path.segments),
        )
        merged = self.merge_path_segments_with_same_driving_directions(path)
        logger.info("Segments merged: %d, current number of segments: %d", merged, len(path.segments))
        return removed, merged

    def _is_too_short(self, segment: PathSegment) -> bool:
        if len(segment.points) < 2:
            return True
        start = segment.points[0].position
        goal = segment.points[-1].position
        return float(np.linalg.norm(start - goal)) <= self.parameters.minimum_segment_length

    def remove_short_path_segments(self, path: Path) -> int:
        """Drop segments with fewer than two points or too short; return how many."""
        before = len(path.segments)
        path.segments[:] = [segment for segment in path.segments if not self._is_too_short(segment)]
        return before - len(path.segments)

    def merge_path_segments_with_same_driving_directions(self, path: Path) -> int:
        """Join consecutive segments of equal direction; return how many were glued on."""
        merged: list[PathSegment] = []
        glued = 0
        for segment in path.segments:
            if merged and merged[-1].driving_direction is segment.driving_direction:
                merged[-1].points.extend(segment.points)
                glued += 1
            else:
                merged.append(PathSegment(segment.driving_direction, list(segment.points)))
        path.segments[:] = merged
        return glued


def create_path_preprocessor(parameters: PathPreprocessorParameters) -> PathPreprocessor:
    return PathPreprocessor(parameters)