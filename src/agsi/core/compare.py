"""Document statistics and document-to-document comparison."""

from collections import Counter

from ..models import Document


def document_stats(doc: Document) -> dict:
    materials = [mat for model in doc.agsi_model for mat in model.materials]
    components = [comp for model in doc.agsi_model for comp in model.components]
    property_counts = [len(mat.properties) for mat in materials]

    per_material = None
    if property_counts:
        per_material = {
            "average": round(sum(property_counts) / len(property_counts), 1),
            "min": min(property_counts),
            "max": max(property_counts),
        }

    return {
        "file_id": doc.ags_file.file_id,
        "schema_version": doc.ags_schema.version,
        "author": doc.ags_file.file_author,
        "models": len(doc.agsi_model),
        "materials": len(materials),
        "components": len(components),
        "material_types": dict(Counter(mat.material_type for mat in materials)),
        "component_types": dict(Counter(comp.component_type for comp in components)),
        "properties_per_material": per_material,
    }


def _total(doc: Document, attr: str) -> int:
    return sum(len(getattr(model, attr)) for model in doc.agsi_model)


def diff_documents(old: Document, new: Document, detailed: bool = False) -> list[str]:
    """Describe how ``new`` differs from ``old``; an empty list means no differences found.

    Models are compared pairwise in document order; materials within a
    model pair are matched by id.
    """
    differences = []

    if old.ags_schema.version != new.ags_schema.version:
        differences.append(f"Schema version: {old.ags_schema.version} → {new.ags_schema.version}")
    if old.ags_file.file_id != new.ags_file.file_id:
        differences.append(f"File ID: {old.ags_file.file_id} → {new.ags_file.file_id}")

    if len(old.agsi_model) != len(new.agsi_model):
        differences.append(f"Model count: {len(old.agsi_model)} → {len(new.agsi_model)}")
    for label, attr in (("Material", "materials"), ("Component", "components")):
        before, after = _total(old, attr), _total(new, attr)
        if before != after:
            differences.append(f"{label} count: {before} → {after}")

    if not detailed:
        return differences

    for idx, (m1, m2) in enumerate(zip(old.agsi_model, new.agsi_model)):
        if m1.id != m2.id:
            differences.append(f"Model {idx} ID: {m1.id} → {m2.id}")
        if m1.name != m2.name:
            differences.append(f"Model {idx} name: {m1.name} → {m2.name}")

        for mat1 in m1.materials:
            mat2 = m2.get_material(mat1.id)
            if mat2 is None:
                differences.append(f"Material {mat1.id} removed")
                continue
            if mat1.name != mat2.name:
                differences.append(f"Material {mat1.id} name: {mat1.name} → {mat2.name}")
            if len(mat1.properties) != len(mat2.properties):
                differences.append(
                    f"Material {mat1.id} properties: {len(mat1.properties)} → {len(mat2.properties)}"
                )
        for mat2 in m2.materials:
            if m1.get_material(mat2.id) is None:
                differences.append(f"Material {mat2.id} added")

    return differences
