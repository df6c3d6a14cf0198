"""Pydantic models for merge manifests and options."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from onto_merge_engine.operation import COLLAPSE_IMPORTS_CLOSURE

SUPPORTED_FORMATS = ("turtle", "ttl", "xml", "pretty-xml", "nt", "ntriples", "n3", "json-ld", "trig")


class MergeOptions(BaseModel):
    """Flags controlling a merge.

    Accepts both field names and the dashed option names used in option
    maps; unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    include_annotations: bool = Field(
        default=False,
        alias="include-annotations",
        description="Copy ontology annotations of each source",
    )
    collapse_imports_closure: bool = Field(
        default=False,
        alias=COLLAPSE_IMPORTS_CLOSURE,
        description="Merge the imports closure and drop import declarations",
    )
    defined_by: bool = Field(
        default=False,
        alias="annotate-defined-by",
        description="Annotate entities with rdfs:isDefinedBy",
    )
    derived_from: bool = Field(
        default=False,
        alias="annotate-derived-from",
        description="Annotate axioms with prov:wasDerivedFrom",
    )

    @classmethod
    def from_option_map(cls, options: Optional[Mapping[str, str]]) -> "MergeOptions":
        """Parse a string option map such as ``{"collapse-imports-closure": "true"}``."""
        return cls.model_validate(dict(options or {}))

    def as_kwargs(self) -> Dict[str, bool]:
        """Return the options as keyword arguments for ``merge_into``."""
        return self.model_dump(by_alias=False)


class MergeManifest(BaseModel):
    """A complete merge job loaded from YAML."""

    name: str = Field(default="merge", description="Job name used in logs")
    inputs: List[str] = Field(..., min_length=1, description="Ontologies to merge, first is the target")
    imports: List[str] = Field(
        default_factory=list,
        description="Ontologies loaded only so that import declarations resolve",
    )
    output: str = Field(..., description="Path of the merged ontology")
    format: str = Field(default="turtle", description="rdflib serialization format")
    options: MergeOptions = Field(default_factory=MergeOptions, description="Merge flags")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure job name is valid."""
        if not v or not v.strip():
            raise ValueError("Merge name cannot be empty")
        return v.strip()

    @field_validator('inputs', 'imports')
    @classmethod
    def validate_paths(cls, v: List[str]) -> List[str]:
        """Ensure no path is blank."""
        if any(not path or not path.strip() for path in v):
            raise ValueError("Ontology paths cannot be empty")
        return [path.strip() for path in v]

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Ensure the output format is one rdflib can write."""
        if v not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {v}. Valid options: {SUPPORTED_FORMATS}")
        return v

    def resolve_paths(self, base_dir: Path) -> "MergeManifest":
        """Return a copy with relative paths resolved against ``base_dir``."""

        def resolve(path: str) -> str:
            candidate = Path(path)
            return str(candidate if candidate.is_absolute() else (base_dir / candidate).resolve())

        return self.model_copy(update={
            "inputs": [resolve(p) for p in self.inputs],
            "imports": [resolve(p) for p in self.imports],
            "output": resolve(self.output),
        })
