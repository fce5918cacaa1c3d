"""Tests for the AGSi MCP tools."""
import json

from unittest.mock import MagicMock


def _get_tools():
    from agsi.tools.convert import register_convert_tools
    from agsi.tools.info import register_info_tools
    from agsi.tools.materials import register_material_tools
    from agsi.tools.validate import register_validate_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    for register in (register_validate_tools, register_material_tools,
                     register_info_tools, register_convert_tools):
        register(mock_mcp)
    return tools


def _write(tmp_path, doc, name="doc.json"):
    path = tmp_path / name
    doc.to_json_file(path)
    return str(path)


def test_all_tools_registered():
    assert set(_get_tools()) == {
        "agsi_validate", "agsi_extract_materials", "agsi_get_info",
        "agsi_query_materials", "agsi_stats", "agsi_diff", "agsi_convert",
    }


def test_validate_valid_file(document_file):
    result = json.loads(_get_tools()["agsi_validate"](file_path=str(document_file)))
    assert result["valid"] is True
    assert result["errors"] == []
    assert result["report"].startswith("✓")


def test_validate_reports_errors(tmp_path, document):
    document.agsi_model[0].components[0].material_id = "MAT_MISSING"
    path = _write(tmp_path, document)
    result = json.loads(_get_tools()["agsi_validate"](file_path=path))
    assert result["valid"] is False
    assert result["errors"] == [{
        "path": "agsiModel[0].components[0].materialId",
        "message": "Material ID 'MAT_MISSING' not found in model",
        "type": "Reference",
    }]
    assert "✗ Validation failed" in result["report"]


def test_validate_missing_file(tmp_path):
    result = _get_tools()["agsi_validate"](file_path=str(tmp_path / "none.json"))
    assert result.startswith("Error:")


def test_extract_materials_single_model(document_file):
    result = json.loads(_get_tools()["agsi_extract_materials"](file_path=str(document_file)))
    assert result["model_id"] == "MODEL001"
    assert [m["id"] for m in result["materials"]] == ["MAT001", "MAT002", "MAT003"]
    clay = result["materials"][0]
    assert clay["properties"][0] == {
        "name": "bulk_density", "value": 2000.0, "unit": "kg/m3", "source": "TESTED",
    }
    assert clay["properties"][1]["value"] == {"min": 35.0, "max": 50.0}


def test_extract_materials_needs_model_id_when_ambiguous(tmp_path, document):
    from agsi.models import GroundModel
    document.add_model(GroundModel(id="MODEL002", name="Other", model_type="STRUCTURAL", dimension="ONE_D"))
    path = _write(tmp_path, document)
    tools = _get_tools()
    result = json.loads(tools["agsi_extract_materials"](file_path=path))
    assert result["available_models"] == ["MODEL001", "MODEL002"]
    assert "model_id" in result["error"]

    chosen = json.loads(tools["agsi_extract_materials"](file_path=path, model_id="MODEL002"))
    assert chosen["materials"] == []


def test_extract_materials_unknown_model(document_file):
    result = _get_tools()["agsi_extract_materials"](file_path=str(document_file), model_id="NOPE")
    assert result.startswith("Error:")
    assert "NOPE" in result


def test_query_materials_by_type(document_file):
    result = json.loads(_get_tools()["agsi_query_materials"](
        file_path=str(document_file), material_type="soil",
    ))
    assert result["matches"] == 2
    assert {m["material_id"] for m in result["materials"]} == {"MAT001", "MAT002"}


def test_query_materials_by_property(document_file):
    result = json.loads(_get_tools()["agsi_query_materials"](
        file_path=str(document_file), property_name="friction_angle",
    ))
    assert [m["material_id"] for m in result["materials"]] == ["MAT002"]


def test_query_materials_no_match(document_file):
    result = json.loads(_get_tools()["agsi_query_materials"](
        file_path=str(document_file), material_type="ROCK",
    ))
    assert result == {"matches": 0, "materials": []}


def test_get_info(document_file):
    result = json.loads(_get_tools()["agsi_get_info"](file_path=str(document_file)))
    assert result["file_id"] == "DOC001"
    assert result["project"]["client"] == "Urban Corp"
    assert result["models"][0]["material_count"] == 3
    assert result["models"][0]["component_count"] == 3


def test_stats(document_file):
    result = json.loads(_get_tools()["agsi_stats"](file_path=str(document_file)))
    assert result["materials"] == 3
    assert result["material_types"]["SOIL"] == 2


def test_diff(tmp_path, document, document_file):
    document.agsi_model[0].get_material("MAT001").name = "Clay"
    other = _write(tmp_path, document, "other.json")
    tools = _get_tools()

    summary = json.loads(tools["agsi_diff"](file_path_a=str(document_file), file_path_b=other))
    assert summary == {"identical": True, "differences": []}

    detailed = json.loads(tools["agsi_diff"](
        file_path_a=str(document_file), file_path_b=other, detailed=True,
    ))
    assert detailed["identical"] is False
    assert detailed["differences"] == ["Material MAT001 name: London Clay → Clay"]


def test_convert_to_avro(tmp_path, document_file):
    from agsi.serialization import Format, deserialize
    out = tmp_path / "converted" / "doc.avro"
    result = _get_tools()["agsi_convert"](
        input_path=str(document_file), output_path=str(out), format="avro",
    )
    assert result.startswith("Converted")
    assert "avro" in result
    assert deserialize(out.read_bytes(), Format.AVRO).ags_file.file_id == "DOC001"


def test_convert_compact_json(tmp_path, document_file):
    out = tmp_path / "doc.min.json"
    _get_tools()["agsi_convert"](
        input_path=str(document_file), output_path=str(out), format="json-compact",
    )
    assert len(out.read_bytes()) < document_file.stat().st_size


def test_convert_rejects_unknown_format(tmp_path, document_file):
    out = tmp_path / "doc.xml"
    result = _get_tools()["agsi_convert"](
        input_path=str(document_file), output_path=str(out), format="xml",
    )
    assert result.startswith("Error:")
    assert not out.exists()


def test_convert_protobuf_unavailable(tmp_path, document_file):
    out = tmp_path / "doc.pb"
    result = _get_tools()["agsi_convert"](
        input_path=str(document_file), output_path=str(out), format="protobuf",
    )
    assert result.startswith("Error:")
    assert "Protobuf" in result
    assert not out.exists()
