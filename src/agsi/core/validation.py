"""Structural and referential validation of AGSi documents.

validate_document never mutates its input and always returns a report;
validate_or_raise turns a failing report into an exception.
"""

import logging
from collections import Counter
from typing import Literal

from pydantic import BaseModel, Field

from ..config import AGSI_VERSION
from ..errors import DocumentValidationError
from ..models import Document

logger = logging.getLogger(__name__)

ValidationErrorKind = Literal["Schema", "Required", "Type", "Range", "Format", "Reference"]


class ValidationIssue(BaseModel):
    path: str
    message: str
    kind: ValidationErrorKind


class ValidationWarning(BaseModel):
    path: str
    message: str


class ValidationReport(BaseModel):
    """Outcome of one validation run."""
    is_valid: bool = True
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)

    def add_error(self, path: str, message: str, kind: ValidationErrorKind) -> None:
        self.errors.append(ValidationIssue(path=path, message=message, kind=kind))
        self.is_valid = False

    def add_warning(self, path: str, message: str) -> None:
        self.warnings.append(ValidationWarning(path=path, message=message))

    def errors_of_kind(self, kind: ValidationErrorKind) -> list[ValidationIssue]:
        return [e for e in self.errors if e.kind == kind]

    def render(self) -> str:
        """Human-readable report, one bullet per error and warning."""
        lines = ["✓ Validation passed" if self.is_valid else "✗ Validation failed"]
        if self.errors:
            lines.append("")
            lines.append(f"{len(self.errors)} Errors:")
            lines.extend(f"  • {e.path} - {e.message}" for e in self.errors)
        if self.warnings:
            lines.append("")
            lines.append(f"{len(self.warnings)} Warnings:")
            lines.extend(f"  • {w.path} - {w.message}" for w in self.warnings)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


def _require_text(report: ValidationReport, value, path: str) -> None:
    if not value:
        report.add_error(path, "must be a non-empty string", "Schema")


def _check_structure(doc: Document, report: ValidationReport) -> None:
    _require_text(report, doc.ags_schema.version, "agsSchema.version")
    _require_text(report, doc.ags_file.file_id, "agsFile.fileId")
    if doc.ags_project is not None:
        _require_text(report, doc.ags_project.id, "agsProject.id")
        _require_text(report, doc.ags_project.name, "agsProject.name")
    for model_idx, model in enumerate(doc.agsi_model):
        prefix = f"agsiModel[{model_idx}]"
        _require_text(report, model.id, f"{prefix}.id")
        _require_text(report, model.name, f"{prefix}.name")
        for mat_idx, material in enumerate(model.materials):
            _require_text(report, material.id, f"{prefix}.materials[{mat_idx}].id")
            _require_text(report, material.name, f"{prefix}.materials[{mat_idx}].name")


def _check_extent(extent, prefix: str, report: ValidationReport) -> None:
    path = f"{prefix}.extent"
    if extent.min_x > extent.max_x:
        report.add_error(path, "min_x must be less than or equal to max_x", "Range")
    if extent.min_y > extent.max_y:
        report.add_error(path, "min_y must be less than or equal to max_y", "Range")
    if extent.min_z is not None and extent.max_z is not None and extent.min_z > extent.max_z:
        report.add_error(path, "min_z must be less than or equal to max_z", "Range")


def validate_document(doc: Document) -> ValidationReport:
    report = ValidationReport()

    _check_structure(doc, report)

    if doc.ags_schema.version != AGSI_VERSION:
        logger.warning(
            "Document %s declares schema %s, library knows %s",
            doc.ags_file.file_id, doc.ags_schema.version, AGSI_VERSION,
        )
        report.add_warning(
            "agsSchema.version",
            f"Schema version {doc.ags_schema.version} differs from library version {AGSI_VERSION}",
        )

    model_ids = Counter(m.id for m in doc.agsi_model)
    for model_idx, model in enumerate(doc.agsi_model):
        prefix = f"agsiModel[{model_idx}]"

        # Every occurrence of a duplicate is reported, not only the later ones.
        if model_ids[model.id] > 1:
            report.add_error(f"{prefix}.id", f"Duplicate model ID: {model.id}", "Reference")

        for comp_idx, component in enumerate(model.components):
            if model.get_material(component.material_id) is None:
                report.add_error(
                    f"{prefix}.components[{comp_idx}].materialId",
                    f"Material ID '{component.material_id}' not found in model",
                    "Reference",
                )

        material_ids = Counter(m.id for m in model.materials)
        for mat_idx, material in enumerate(model.materials):
            if material_ids[material.id] > 1:
                report.add_error(
                    f"{prefix}.materials[{mat_idx}].id",
                    f"Duplicate material ID: {material.id}",
                    "Reference",
                )

        if model.extent is not None:
            _check_extent(model.extent, prefix, report)

    logger.debug(
        "Validated %s: %d errors, %d warnings",
        doc.ags_file.file_id, len(report.errors), len(report.warnings),
    )
    return report


def validate_or_raise(doc: Document) -> ValidationReport:
    """Run validate_document and raise if it recorded any error."""
    report = validate_document(doc)
    if not report.is_valid:
        raise DocumentValidationError(
            f"Validation failed with {len(report.errors)} errors", report=report,
        )
    return report
