"""Pre-flight validation checks for merge jobs."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from onto_merge_core.errors import (
    ManifestValidationError,
    PreflightCheckError,
    ResourceAccessError,
)
from onto_merge_orchestrator.models import MergeManifest

logger = structlog.get_logger(__name__)


class PreflightValidator:
    """Pre-flight validation for a merge manifest."""

    def __init__(self, manifest_path: Path) -> None:
        """Initialize validator.

        Args:
            manifest_path: Path to merge manifest
        """
        self.manifest_path = manifest_path
        self.manifest: Optional[MergeManifest] = None
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self) -> Tuple[bool, List[str], List[str]]:
        """Run all pre-flight checks.

        Returns:
            Tuple of (success, errors, warnings)
        """
        checks = [
            ("Manifest file existence", self.check_manifest_exists),
            ("Manifest YAML syntax", self.check_manifest_yaml),
            ("Manifest schema validation", self.check_manifest_schema),
            ("Input file availability", self.check_input_files),
            ("Output directory access", self.check_output_dir),
        ]

        for check_name, check_func in checks:
            try:
                check_func()
            except (PreflightCheckError, ManifestValidationError, ResourceAccessError) as e:
                self.errors.append(f"{check_name}: {e.message}")
                break
            except Exception as e:
                self.errors.append(f"{check_name}: Unexpected error - {str(e)}")
                break

        return len(self.errors) == 0, self.errors, self.warnings

    def check_manifest_exists(self) -> None:
        """Check if manifest file exists."""
        if not self.manifest_path.exists():
            raise PreflightCheckError(
                f"Manifest file not found: {self.manifest_path}",
                check_name="manifest_exists",
                suggestion="Verify the manifest path is correct"
            )

        if not self.manifest_path.is_file():
            raise PreflightCheckError(
                f"Manifest path is not a file: {self.manifest_path}",
                check_name="manifest_exists"
            )

    def check_manifest_yaml(self) -> None:
        """Check if manifest is valid YAML."""
        try:
            with open(self.manifest_path, 'r') as f:
                yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PreflightCheckError(
                f"Invalid YAML syntax: {str(e)}",
                check_name="manifest_yaml",
                suggestion="Check YAML indentation and syntax"
            )

    def check_manifest_schema(self) -> None:
        """Validate manifest against the pydantic schema."""
        with open(self.manifest_path, 'r') as f:
            data = yaml.safe_load(f)

        try:
            manifest = MergeManifest.model_validate(data)
        except PydanticValidationError as e:
            errors = []
            for error in e.errors():
                loc = " -> ".join(str(l) for l in error['loc'])
                errors.append(f"{loc}: {error['msg']}")

            raise ManifestValidationError(
                "Manifest validation failed",
                manifest_path=str(self.manifest_path),
                errors=errors
            )

        self.manifest = manifest.resolve_paths(self.manifest_path.resolve().parent)

    def check_input_files(self) -> None:
        """Check that every input and import file exists and is readable."""
        if not self.manifest:
            raise PreflightCheckError(
                "Manifest not loaded",
                check_name="input_files",
                suggestion="Run manifest validation first"
            )

        for path_str in [*self.manifest.inputs, *self.manifest.imports]:
            path = Path(path_str)
            if not path.is_file():
                raise PreflightCheckError(
                    f"Ontology file not found: {path}",
                    check_name="input_files"
                )
            if not self._check_file_readable(path):
                raise ResourceAccessError(
                    f"Cannot read ontology file: {path}",
                    resource_path=str(path),
                    operation="read"
                )

        if len(set(self.manifest.inputs)) != len(self.manifest.inputs):
            self.warnings.append("The same input file is listed more than once")

    def check_output_dir(self) -> None:
        """Check that the output directory can be created and written."""
        output_dir = Path(self.manifest.output).parent
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            test_file = output_dir / ".preflight_test"
            test_file.write_text("test")
            test_file.unlink()
        except OSError as e:
            raise ResourceAccessError(
                f"Cannot write to output directory: {output_dir} ({e})",
                resource_path=str(output_dir),
                operation="write"
            )

    @staticmethod
    def _check_file_readable(path: Path) -> bool:
        """Check if file is readable."""
        try:
            with open(path, 'rb') as f:
                f.read(1)
            return True
        except OSError:
            return False


def run_preflight_checks(manifest_path: Path, strict: bool = True) -> Dict[str, Any]:
    """Run all pre-flight checks and return results.

    Args:
        manifest_path: Path to merge manifest
        strict: If True, raise on check failures

    Returns:
        Dictionary with check results and the resolved manifest

    Raises:
        PreflightCheckError: If checks fail and strict=True
    """
    validator = PreflightValidator(manifest_path)
    success, errors, warnings = validator.validate_all()

    for warning in warnings:
        logger.warning("preflight_warning", message=warning)

    if not success and strict:
        error_msg = "\n".join(f"  - {e}" for e in errors)
        raise PreflightCheckError(
            f"Pre-flight checks failed:\n{error_msg}",
            check_name="preflight",
            suggestion="Fix the errors above and try again"
        )

    return {
        "success": success,
        "errors": errors,
        "warnings": warnings,
        "manifest": validator.manifest,
    }
