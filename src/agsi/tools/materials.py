"""Material tools: agsi_extract_materials, agsi_query_materials."""

import json
import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..errors import AgsiError
from ..models import Material, property_value_to_wire
from ._loading import load_document, select_model

logger = logging.getLogger(__name__)


def _material_entry(material: Material) -> dict:
    return {
        "id": material.id,
        "name": material.name,
        "type": material.material_type,
        "description": material.description,
        "properties": [
            {
                "name": p.name,
                "value": property_value_to_wire(p.value),
                "unit": p.unit,
                "source": p.source,
            }
            for p in material.properties
        ],
    }


def register_material_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_extract_materials(file_path: str, model_id: str | None = None) -> str:
        """Extract materials from an AGSi ground model.

        Args:
            file_path: Path to the AGSi JSON file
            model_id: Model to extract from. May be omitted when the file
                holds a single model.
        """
        try:
            doc = load_document(file_path)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"

        try:
            model = select_model(doc, model_id)
        except AgsiError as e:
            return f"Error: {e}"
        except ValueError as e:
            return json.dumps({
                "error": str(e),
                "available_models": [m.id for m in doc.agsi_model],
            }, indent=2)

        return json.dumps({
            "model_id": model.id,
            "model_name": model.name,
            "materials": [_material_entry(m) for m in model.materials],
        }, indent=2)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def agsi_query_materials(
        file_path: str,
        material_type: str | None = None,
        property_name: str | None = None,
    ) -> str:
        """Query materials across all models by type or property.

        Args:
            file_path: Path to the AGSi JSON file
            material_type: Filter by material type (SOIL, ROCK, ...), case-insensitive
            property_name: Only materials that define this property
        """
        try:
            doc = load_document(file_path)
        except (AgsiError, ValueError) as e:
            return f"Error: {e}"

        results = []
        for model in doc.agsi_model:
            for material in model.materials:
                if material_type and material.material_type.upper() != material_type.strip().upper():
                    continue
                if property_name and material.get_property(property_name) is None:
                    continue
                results.append({
                    "model_id": model.id,
                    "material_id": material.id,
                    "name": material.name,
                    "type": material.material_type,
                    "properties": len(material.properties),
                })

        if not results:
            logger.debug("agsi_query_materials matched nothing in %s", file_path)
        return json.dumps({"matches": len(results), "materials": results}, indent=2)
