"""Geometry variants embedded in model components.

Points, polylines and polygons can be rendered to WKT (x/y only). Surfaces
are opaque Wavefront OBJ meshes stored base64-encoded so they embed cleanly
in JSON; collections nest any of the other variants.
"""

import base64
from typing import Annotated, Any, Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer
from pydantic.alias_generators import to_camel
from shapely import geometry as shp
from shapely.errors import GEOSException

from ..errors import GeometryError

Coord3 = tuple[float, float, float]

# Keys left out of the wire form when unset.
_OMIT_WHEN_NONE = frozenset({"crs", "wkt", "wkb", "metadata"})


class BoundingBox(BaseModel):
    min: Coord3
    max: Coord3


class SurfaceMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    vertex_count: int = Field(ge=0)
    face_count: int = Field(ge=0)
    bounds: BoundingBox | None = None


class _GeometryBase(BaseModel):
    crs: str | None = None

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None or k not in _OMIT_WHEN_NONE}

    def set_crs(self, crs: str | None):
        """Replace the coordinate reference system label and return self."""
        self.crs = crs
        return self

    def to_canonical_text(self) -> str:
        raise GeometryError(
            f"Canonical text form is not supported for {self.type} geometry"
        )

    def to_wkt(self) -> str:
        return self.to_canonical_text()

    def compute_canonical_forms(self) -> None:
        """Refresh cached canonical forms; only polylines and polygons keep one."""


class _CachedCanonicalForms(_GeometryBase):
    wkt: str | None = None
    wkb: str | None = None

    def compute_canonical_forms(self) -> None:
        self.wkt = self.to_canonical_text()
        # No binary canonicalization yet; the slot stays empty.
        self.wkb = None


def _xy(coords: list[Coord3]) -> list[tuple[float, float]]:
    return [(c[0], c[1]) for c in coords]


def _closed_ring(coords: list[Coord3]) -> list[tuple[float, float]]:
    """Close a ring and pad it to the four positions a GEOS linear ring needs."""
    ring = _xy(coords)
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    while len(ring) < 4:
        ring.append(ring[0])
    return ring


class PointGeometry(_GeometryBase):
    type: Literal["point"] = "point"
    coordinates: Coord3

    def to_canonical_text(self) -> str:
        x, y, _ = self.coordinates
        return shp.Point(x, y).wkt


class LineStringGeometry(_CachedCanonicalForms):
    type: Literal["lineString"] = "lineString"
    coordinates: list[Coord3]

    def to_canonical_text(self) -> str:
        try:
            return shp.LineString(_xy(self.coordinates)).wkt
        except (ValueError, GEOSException) as exc:
            raise GeometryError(f"Invalid lineString geometry: {exc}") from exc


class PolygonGeometry(_CachedCanonicalForms):
    type: Literal["polygon"] = "polygon"
    # rings[0] is the exterior, the rest are holes
    rings: list[list[Coord3]]

    @property
    def exterior(self) -> list[Coord3]:
        return self.rings[0] if self.rings else []

    @property
    def interiors(self) -> list[list[Coord3]]:
        return self.rings[1:]

    def to_canonical_text(self) -> str:
        if not self.rings or not self.rings[0]:
            raise GeometryError("Empty polygon")
        holes = [_closed_ring(r) for r in self.rings[1:] if r]
        try:
            poly = shp.Polygon(_closed_ring(self.rings[0]), holes)
        except (ValueError, GEOSException) as exc:
            raise GeometryError(f"Invalid polygon geometry: {exc}") from exc
        return poly.wkt


class SurfaceGeometry(_GeometryBase):
    type: Literal["surface"] = "surface"
    obj_data: str
    metadata: SurfaceMetadata | None = None

    def obj_bytes(self) -> bytes:
        """Return the decoded OBJ payload."""
        return base64.b64decode(self.obj_data)


class CollectionGeometry(_GeometryBase):
    type: Literal["collection"] = "collection"
    geometries: list["Geometry"] = Field(default_factory=list)


Geometry = Annotated[
    Union[PointGeometry, LineStringGeometry, PolygonGeometry, SurfaceGeometry, CollectionGeometry],
    Field(discriminator="type"),
]

CollectionGeometry.model_rebuild()


def point(x: float, y: float, z: float) -> PointGeometry:
    return PointGeometry(coordinates=(x, y, z))


def linestring(coords: list[Coord3]) -> LineStringGeometry:
    """Build a polyline; at least two vertices are required."""
    if len(coords) < 2:
        raise GeometryError("LineString must have at least 2 points")
    return LineStringGeometry(coordinates=[tuple(c) for c in coords])


def polygon(exterior: list[Coord3], interiors: list[list[Coord3]] | None = None) -> PolygonGeometry:
    """Build a polygon from an exterior ring and optional holes.

    The exterior needs at least three vertices. Ring closure is neither
    checked nor added here.
    """
    if len(exterior) < 3:
        raise GeometryError("Polygon exterior ring must have at least 3 points")
    rings = [[tuple(c) for c in exterior]]
    for ring in interiors or []:
        rings.append([tuple(c) for c in ring])
    return PolygonGeometry(rings=rings)


def surface(obj_data: bytes, metadata: SurfaceMetadata | None = None) -> SurfaceGeometry:
    return SurfaceGeometry(
        obj_data=base64.b64encode(obj_data).decode("ascii"),
        metadata=metadata,
    )


def obj_mesh_metadata(obj_data: bytes) -> SurfaceMetadata:
    """Count vertices and faces of an OBJ mesh and compute its bounding box."""
    vertices = []
    face_count = 0
    for line_no, raw in enumerate(obj_data.decode("utf-8", errors="replace").splitlines(), 1):
        parts = raw.split()
        if not parts:
            continue
        if parts[0] == "v":
            try:
                vertices.append([float(p) for p in parts[1:4]])
            except ValueError as exc:
                raise GeometryError(f"Invalid OBJ vertex on line {line_no}: {raw!r}") from exc
            if len(vertices[-1]) != 3:
                raise GeometryError(f"OBJ vertex on line {line_no} must have 3 coordinates")
        elif parts[0] == "f":
            face_count += 1

    bounds = None
    if vertices:
        arr = np.asarray(vertices, dtype=float)
        bounds = BoundingBox(
            min=tuple(float(v) for v in arr.min(axis=0)),
            max=tuple(float(v) for v in arr.max(axis=0)),
        )
    return SurfaceMetadata(vertex_count=len(vertices), face_count=face_count, bounds=bounds)


def surface_from_obj(obj_data: bytes) -> SurfaceGeometry:
    return surface(obj_data, metadata=obj_mesh_metadata(obj_data))


def collection(geometries: list) -> CollectionGeometry:
    return CollectionGeometry(geometries=list(geometries))
