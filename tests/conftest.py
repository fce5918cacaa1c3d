"""Shared fixtures: a small but fully populated AGSi document."""

import pytest

CUBE_OBJ = b"""# unit cube corner
v 0.0 0.0 -5.0
v 10.0 0.0 -5.0
v 10.0 10.0 -5.0
v 0.0 10.0 2.5
f 1 2 3
f 1 3 4
"""


def build_document():
    from agsi.core import geometry
    from agsi.models import (
        Document, GroundModel, Material, MaterialProperty, ModelComponent, ModelExtent, Project,
    )

    doc = Document.new("DOC001", file_name="city-centre.agsi.json", file_author="Ground Team")
    doc.ags_project = Project(id="PROJ001", name="City Centre Development", client="Urban Corp")

    model = GroundModel(
        id="MODEL001",
        name="Site Stratigraphy",
        model_type="STRATIGRAPHIC",
        dimension="TWO_D",
        crs="EPSG:27700",
        extent=ModelExtent(min_x=0, max_x=200, min_y=0, max_y=200, min_z=-20, max_z=5),
    )
    model.metadata["interpreter"] = {"name": "J. Smith", "reviewed": True}

    clay = Material(id="MAT001", name="London Clay", material_type="SOIL",
                    description="Stiff fissured grey-brown clay")
    clay.add_property(MaterialProperty.numeric("bulk_density", 2000.0, "kg/m3", source="TESTED"))
    clay.add_property(MaterialProperty.range("plasticity_index", 35.0, 50.0, "%"))
    clay.add_property(MaterialProperty.text("consistency", "stiff", method="BS 5930"))
    clay.add_property(MaterialProperty.boolean("fissured", True))
    clay.add_property(MaterialProperty.array("spt_n", [12.0, 15.0, 18.0]))
    clay.metadata["lab_ref"] = "LAB-42"

    gravel = Material(id="MAT002", name="River Terrace Deposits", material_type="SOIL")
    gravel.add_property(MaterialProperty.numeric("friction_angle", 38.0, "degrees", source="TESTED"))
    fill = Material(id="MAT003", name="Made Ground", material_type="MADE_GROUND")

    for mat in (clay, gravel, fill):
        model.add_material(mat)

    layer = ModelComponent(
        id="COMP001",
        name="Clay layer",
        component_type="LAYER",
        material_id="MAT001",
        geometry=geometry.polygon(
            [[0, 0, 0], [200, 0, 0], [200, 200, 0], [0, 200, 0], [0, 0, 0]],
            [[[50, 50, 0], [60, 50, 0], [60, 60, 0], [50, 50, 0]]],
        ),
    )
    layer.set_elevations(5.0, -15.0)
    layer.set_attribute("confidence", "high")

    boundary = ModelComponent(
        id="COMP002",
        name="Gravel surface",
        component_type="BOUNDARY",
        material_id="MAT002",
        geometry=geometry.linestring([[0, 0, -15], [100, 10, -16], [200, 0, -15]]).set_crs("EPSG:27700"),
    )
    lens = ModelComponent(
        id="COMP003",
        name="Fill lens",
        component_type="LENS",
        material_id="MAT003",
        geometry=geometry.collection([
            geometry.point(120.0, 80.0, 1.5),
            geometry.surface_from_obj(CUBE_OBJ),
        ]),
    )
    for comp in (layer, boundary, lens):
        model.add_component(comp)

    doc.add_model(model)
    doc.set_extension("x-vendor", {"tool": "gis-suite", "revision": 3, "tags": ["a", "b"]})
    return doc


@pytest.fixture
def document():
    return build_document()


@pytest.fixture
def document_file(tmp_path, document):
    path = tmp_path / "model.agsi.json"
    document.to_json_file(path)
    return path
