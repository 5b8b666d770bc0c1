"""
Mesh Analyzer: early diagnostics for a vertex/face pair of element streams.

This module provides lightweight inspection of a mesh before it is handed
to NormalGenerator or an encoder:
    - Vertex and face counts
    - Face arity histogram
    - Degenerate faces (no usable normal)
    - Out-of-range indices
    - Unreferenced vertices
    - Warning flags

IMPORTANT: This is read-only. It does NOT modify elements and does NOT
raise on bad indices; it counts them so the caller can decide.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from plykit.errors import UsageError
from plykit.normals import face_normal, find_index_property
from plykit.readers import BufferedElementReader, ElementReader
from plykit.vectors import ZERO

logger = logging.getLogger(__name__)


@dataclass
class MeshReport:
    """Analysis report for one mesh."""

    vertex_type: str
    face_type: str
    vertex_count: int = 0
    face_count: int = 0

    # Faces
    face_arity: Dict[int, int] = field(default_factory=dict)
    short_faces: int = 0
    degenerate_faces: int = 0
    out_of_range_indices: int = 0

    # Vertices
    unreferenced_vertices: int = 0
    has_normals: bool = False

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_triangle_mesh(self) -> bool:
        return self.face_count > 0 and set(self.face_arity) == {3}


def analyze_mesh(
    vertices: BufferedElementReader,
    faces: ElementReader,
    index_property: Optional[str] = None,
) -> MeshReport:
    """
    Inspect a mesh and return a MeshReport.

    The vertex buffer is reset before reading and the face stream is
    drained. Vertices only need x, y, z for the degenerate-face check; when
    they are missing that check is skipped.

    Raises:
        UsageError: If the face type has no usable index list
    """
    vertex_type = vertices.get_element_type()
    face_type = faces.get_element_type()
    index_name = index_property or find_index_property(face_type)

    report = MeshReport(vertex_type=vertex_type.name, face_type=face_type.name)
    report.has_normals = all(vertex_type.has_property(n) for n in ("nx", "ny", "nz"))

    vertices.reset()
    report.vertex_count = len(vertices)

    positions = None
    if all(vertex_type.has_property(n) for n in ("x", "y", "z")):
        try:
            positions = [
                (v.get_double("x"), v.get_double("y"), v.get_double("z")) for v in vertices
            ]
        except UsageError as e:
            logger.warning(f"Skipping degenerate-face check: {e}")
            positions = None

    # =========================================================================
    # 1. FACE SCAN
    # =========================================================================

    arity: Dict[int, int] = defaultdict(int)
    referenced: Set[int] = set()

    for face in faces:
        report.face_count += 1
        indices = face.get_int_list(index_name)
        arity[len(indices)] += 1

        valid = [i for i in indices if 0 <= i < report.vertex_count]
        report.out_of_range_indices += len(indices) - len(valid)
        referenced.update(valid)

        if len(indices) < 3:
            report.short_faces += 1
            continue
        if positions is not None and len(valid) == len(indices):
            if face_normal([positions[i] for i in indices[:3]]) == ZERO:
                report.degenerate_faces += 1

    report.face_arity = dict(sorted(arity.items()))
    report.unreferenced_vertices = report.vertex_count - len(referenced)

    # =========================================================================
    # 2. WARNING FLAGS
    # =========================================================================

    if report.out_of_range_indices:
        report.add_warning(
            f"Out-of-range vertex indices: {report.out_of_range_indices}"
        )

    if report.short_faces:
        report.add_warning(
            f"Faces with fewer than 3 indices: {report.short_faces}"
        )

    if report.degenerate_faces:
        report.add_warning(
            f"Degenerate faces: {report.degenerate_faces} of {report.face_count}"
        )

    if report.unreferenced_vertices:
        report.add_warning(
            f"Unreferenced vertices: {report.unreferenced_vertices} of {report.vertex_count}"
        )

    if report.vertex_count and not report.face_count:
        report.add_warning("Mesh has vertices but no faces")

    logger.debug(f"Analyzed mesh: {report.vertex_count} vertices, {report.face_count} faces")
    return report
