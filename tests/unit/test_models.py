"""
Unit tests for merge manifest and option models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from onto_merge_orchestrator.models import MergeManifest, MergeOptions


class TestMergeOptions:
    """Test MergeOptions parsing."""

    @pytest.mark.unit
    def test_defaults(self):
        """Test that every flag defaults to False."""
        options = MergeOptions()

        assert options.as_kwargs() == {
            "include_annotations": False,
            "collapse_imports_closure": False,
            "defined_by": False,
            "derived_from": False,
        }

    @pytest.mark.unit
    def test_dashed_names(self):
        """Test that dashed option names populate the fields."""
        options = MergeOptions.model_validate({
            "include-annotations": True,
            "collapse-imports-closure": True,
            "annotate-defined-by": True,
            "annotate-derived-from": True,
        })

        assert all(options.as_kwargs().values())

    @pytest.mark.unit
    def test_field_names(self):
        """Test that field names are accepted too."""
        options = MergeOptions(collapse_imports_closure=True)

        assert options.collapse_imports_closure is True

    @pytest.mark.unit
    def test_option_map_strings(self):
        """Test parsing a string option map."""
        options = MergeOptions.from_option_map({"collapse-imports-closure": "true"})

        assert options.collapse_imports_closure is True
        assert options.include_annotations is False

    @pytest.mark.unit
    def test_option_map_ignores_unknown_keys(self):
        """Test that unrecognised options are ignored."""
        options = MergeOptions.from_option_map({"unknown": "1"})

        assert options == MergeOptions()

    @pytest.mark.unit
    def test_option_map_none(self):
        """Test that a missing map gives the defaults."""
        assert MergeOptions.from_option_map(None) == MergeOptions()

    @pytest.mark.unit
    def test_invalid_boolean(self):
        """Test that a non-boolean value is rejected."""
        with pytest.raises(ValidationError):
            MergeOptions.from_option_map({"collapse-imports-closure": "maybe"})


class TestMergeManifest:
    """Test MergeManifest validation."""

    @pytest.mark.unit
    def test_minimal(self):
        """Test a manifest with only inputs and output."""
        manifest = MergeManifest(inputs=["a.ttl"], output="out.ttl")

        assert manifest.name == "merge"
        assert manifest.imports == []
        assert manifest.format == "turtle"
        assert manifest.options == MergeOptions()

    @pytest.mark.unit
    def test_inputs_required(self):
        """Test that at least one input is needed."""
        with pytest.raises(ValidationError):
            MergeManifest(inputs=[], output="out.ttl")

    @pytest.mark.unit
    def test_blank_path_rejected(self):
        """Test that blank paths are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            MergeManifest(inputs=["a.ttl", "  "], output="out.ttl")

        assert "Ontology paths cannot be empty" in str(exc_info.value)

    @pytest.mark.unit
    def test_blank_name_rejected(self):
        """Test that a blank job name is rejected."""
        with pytest.raises(ValidationError):
            MergeManifest(name=" ", inputs=["a.ttl"], output="out.ttl")

    @pytest.mark.unit
    def test_unsupported_format(self):
        """Test that unknown serialization formats are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            MergeManifest(inputs=["a.ttl"], output="out.owl", format="owl-functional")

        assert "Unsupported format" in str(exc_info.value)

    @pytest.mark.unit
    def test_nested_options(self, manifest_data):
        """Test that options are parsed from their dashed names."""
        manifest = MergeManifest.model_validate(manifest_data)

        assert manifest.options.include_annotations is True
        assert manifest.options.defined_by is False

    @pytest.mark.unit
    def test_resolve_paths(self, tmp_path):
        """Test that relative paths resolve against the base directory."""
        absolute = str(tmp_path / "abs.ttl")
        manifest = MergeManifest(inputs=["a.ttl", absolute], imports=["lib/b.ttl"], output="out/m.ttl")

        resolved = manifest.resolve_paths(tmp_path)

        assert resolved.inputs == [str((tmp_path / "a.ttl").resolve()), absolute]
        assert resolved.imports == [str((tmp_path / "lib" / "b.ttl").resolve())]
        assert Path(resolved.output).is_absolute()
        assert manifest.inputs[0] == "a.ttl"
