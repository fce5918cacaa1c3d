"""Pydantic entity model for AGSi documents.

A Document holds ground models; each ground model owns its materials and
components. Components point at materials by id only, so removing a material
leaves any component that used it dangling until the document is validated
again.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .config import AGSI_VERSION, PACKAGE_VERSION, PRODUCER_NAME
from .core.geometry import Geometry
from .errors import AgsiIOError, DeserializationError, JsonError

logger = logging.getLogger(__name__)

ModelType = Literal[
    "STRATIGRAPHIC", "STRUCTURAL", "HYDROGEOLOGICAL", "GEOTECHNICAL", "ENVIRONMENTAL", "COMPOSITE",
]
ModelDimension = Literal["ONE_D", "TWO_D", "THREE_D"]
ComponentType = Literal["LAYER", "LENS", "VOLUME", "FAULT", "INTRUSION", "BOUNDARY"]
MaterialType = Literal[
    "SOIL", "ROCK", "FILL", "MADE_GROUND", "ANTHROPOGENIC", "WATER", "VOID", "UNKNOWN",
]
PropertySource = Literal["TESTED", "ESTIMATED", "LITERATURE", "ASSUMED", "CALCULATED"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Return the JSON-ready wire form (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


# --- Material property values ---------------------------------------------

class NumberValue(BaseModel):
    value: float


class TextValue(BaseModel):
    value: str


class BooleanValue(BaseModel):
    value: bool


class RangeValue(BaseModel):
    min: float
    max: float


class ArrayValue(BaseModel):
    values: list[float]


PropertyValue = Union[NumberValue, TextValue, BooleanValue, RangeValue, ArrayValue]
_PROPERTY_VALUE_TYPES = (NumberValue, TextValue, BooleanValue, RangeValue, ArrayValue)


def property_value(raw: Any) -> PropertyValue:
    """Tag an untagged wire value (number, text, bool, {min, max}, number list)."""
    if isinstance(raw, _PROPERTY_VALUE_TYPES):
        return raw
    # bool before number: True is an int
    if isinstance(raw, bool):
        return BooleanValue(value=raw)
    if isinstance(raw, (int, float)):
        return NumberValue(value=raw)
    if isinstance(raw, str):
        return TextValue(value=raw)
    try:
        if isinstance(raw, dict) and "min" in raw and "max" in raw:
            return RangeValue(min=raw["min"], max=raw["max"])
        if isinstance(raw, (list, tuple)):
            return ArrayValue(values=list(raw))
    except ValidationError as exc:
        raise ValueError(f"Invalid property value {raw!r}: {exc}") from exc
    raise ValueError(f"Unsupported property value: {raw!r}")


def property_value_to_wire(value: PropertyValue) -> Any:
    if isinstance(value, RangeValue):
        return {"min": value.min, "max": value.max}
    if isinstance(value, ArrayValue):
        return list(value.values)
    return value.value


class MaterialProperty(_CamelModel):
    name: str
    value: PropertyValue
    unit: str | None = None
    method: str | None = None
    source: PropertySource | None = None

    @field_validator("value", mode="before")
    @classmethod
    def tag_wire_value(cls, v: Any) -> PropertyValue:
        return property_value(v)

    @field_serializer("value")
    def untag_value(self, value: PropertyValue) -> Any:
        return property_value_to_wire(value)

    @classmethod
    def numeric(cls, name: str, value: float, unit: str | None = None, **kwargs) -> "MaterialProperty":
        return cls(name=name, value=NumberValue(value=value), unit=unit, **kwargs)

    @classmethod
    def text(cls, name: str, value: str, **kwargs) -> "MaterialProperty":
        return cls(name=name, value=TextValue(value=value), **kwargs)

    @classmethod
    def boolean(cls, name: str, value: bool, **kwargs) -> "MaterialProperty":
        return cls(name=name, value=BooleanValue(value=value), **kwargs)

    @classmethod
    def range(cls, name: str, min: float, max: float, unit: str | None = None, **kwargs) -> "MaterialProperty":
        return cls(name=name, value=RangeValue(min=min, max=max), unit=unit, **kwargs)

    @classmethod
    def array(cls, name: str, values: list[float], unit: str | None = None, **kwargs) -> "MaterialProperty":
        return cls(name=name, value=ArrayValue(values=values), unit=unit, **kwargs)


# --- Materials and components ---------------------------------------------

class Material(_CamelModel):
    id: str
    name: str
    description: str | None = None
    material_type: MaterialType
    geology: str | None = None
    properties: list[MaterialProperty] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def add_property(self, prop: MaterialProperty) -> None:
        self.properties.append(prop)

    def get_property(self, name: str) -> MaterialProperty | None:
        return next((p for p in self.properties if p.name == name), None)

    def get_properties_by_name(self, name: str) -> list[MaterialProperty]:
        return [p for p in self.properties if p.name == name]


class ModelComponent(_CamelModel):
    id: str
    name: str
    component_type: ComponentType
    material_id: str
    geometry: Geometry
    top: float | None = None
    base: float | None = None
    thickness: float | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)

    def set_elevations(self, top: float, base: float) -> None:
        self.top = top
        self.base = base
        self.thickness = abs(top - base)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value


class ModelExtent(_CamelModel):
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float | None = None
    max_z: float | None = None

    def contains(self, x: float, y: float, z: float | None = None) -> bool:
        inside = self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y
        if z is not None and self.min_z is not None and self.max_z is not None:
            return inside and self.min_z <= z <= self.max_z
        return inside


class GroundModel(_CamelModel):
    model_config = ConfigDict(protected_namespaces=())

    id: str
    name: str
    description: str | None = None
    model_type: ModelType
    dimension: ModelDimension
    components: list[ModelComponent] = Field(default_factory=list)
    materials: list[Material] = Field(default_factory=list)
    crs: str | None = None
    extent: ModelExtent | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def add_material(self, material: Material) -> None:
        self.materials.append(material)

    def add_component(self, component: ModelComponent) -> None:
        self.components.append(component)

    def get_material(self, material_id: str) -> Material | None:
        # First match wins; duplicates are reported by validation.
        return next((m for m in self.materials if m.id == material_id), None)

    def get_component(self, component_id: str) -> ModelComponent | None:
        return next((c for c in self.components if c.id == component_id), None)

    def get_components_by_material(self, material_id: str) -> list[ModelComponent]:
        return [c for c in self.components if c.material_id == material_id]

    def remove_material(self, material_id: str) -> Material | None:
        """Remove and return the first material with this id.

        Components referencing it are left untouched.
        """
        for i, material in enumerate(self.materials):
            if material.id == material_id:
                return self.materials.pop(i)
        return None


# --- Project ----------------------------------------------------------------

class Location(_CamelModel):
    name: str
    country: str | None = None
    # (longitude, latitude)
    coordinates: tuple[float, float] | None = None
    crs: str | None = None


class ProjectDates(_CamelModel):
    start: str | None = None
    end: str | None = None
    data_collection: str | None = None


class Project(_CamelModel):
    id: str
    name: str
    description: str | None = None
    client: str | None = None
    contractor: str | None = None
    location: Location | None = None
    dates: ProjectDates | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


# --- Document ---------------------------------------------------------------

class SchemaInfo(_CamelModel):
    version: str = AGSI_VERSION
    variant: str | None = None


class FileInfo(_CamelModel):
    file_id: str
    file_name: str | None = None
    file_date: str | None = None
    file_author: str | None = None
    file_software: str | None = None
    file_version: str | None = None
    file_comments: str | None = None


class Document(_CamelModel):
    """Root of an AGSi file.

    Top-level keys that are not part of the schema are kept in
    ``extensions`` and written back unchanged.
    """
    model_config = ConfigDict(extra="allow")

    ags_schema: SchemaInfo = Field(default_factory=SchemaInfo)
    ags_file: FileInfo
    ags_project: Project | None = None
    agsi_model: list[GroundModel] = Field(default_factory=list)

    @classmethod
    def new(cls, file_id: str | None = None, **file_info: Any) -> "Document":
        """Create an empty document stamped with this library as producer."""
        info = {
            "file_software": PRODUCER_NAME,
            "file_version": PACKAGE_VERSION,
            **file_info,
        }
        if file_id is None:
            file_id = str(uuid.uuid4())
        return cls(ags_file=FileInfo(file_id=file_id, **info))

    @property
    def extensions(self) -> dict[str, Any]:
        return self.__pydantic_extra__

    def set_extension(self, key: str, value: Any) -> None:
        reserved = set(type(self).model_fields)
        reserved.update(f.alias for f in type(self).model_fields.values() if f.alias)
        if key in reserved:
            raise ValueError(f"{key!r} is a schema field, not an extension")
        self.__pydantic_extra__[key] = value

    def add_model(self, model: GroundModel) -> None:
        self.agsi_model.append(model)

    def get_model(self, model_id: str) -> GroundModel | None:
        return next((m for m in self.agsi_model if m.id == model_id), None)

    def remove_model(self, model_id: str) -> GroundModel | None:
        for i, model in enumerate(self.agsi_model):
            if model.id == model_id:
                return self.agsi_model.pop(i)
        return None

    def summary(self) -> dict:
        project = self.ags_project
        return {
            "file_id": self.ags_file.file_id,
            "file_name": self.ags_file.file_name,
            "author": self.ags_file.file_author,
            "software": self.ags_file.file_software,
            "schema_version": self.ags_schema.version,
            "project": {
                "id": project.id,
                "name": project.name,
                "client": project.client,
            } if project else None,
            "models": [
                {
                    "id": m.id,
                    "name": m.name,
                    "type": m.model_type,
                    "dimension": m.dimension,
                    "crs": m.crs,
                    "material_count": len(m.materials),
                    "component_count": len(m.components),
                }
                for m in self.agsi_model
            ],
        }

    # --- JSON ---------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise DeserializationError(f"Document does not match the AGSi model: {exc}") from exc

    @classmethod
    def from_json_str(cls, text: Union[str, bytes]) -> "Document":
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise JsonError(f"Invalid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_json_string(self, pretty: bool = True) -> str:
        return self.model_dump_json(by_alias=True, indent=2 if pretty else None)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "Document":
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise AgsiIOError(f"Failed to read {path}: {exc}") from exc
        return cls.from_json_str(data)

    def to_json_file(self, path: Union[str, Path]) -> None:
        text = self.to_json_string()
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as exc:
            raise AgsiIOError(f"Failed to write {path}: {exc}") from exc
        logger.info("Document %s written to %s", self.ags_file.file_id, path)
