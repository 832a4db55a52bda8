"""Generation reporting for a Terraform generation run.

Tracks what happened to every application of the account, from listing
through file writing, and formats the end-of-run summary.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class UnsupportedTypeInfo:
    """Information about a rule type no handler is registered for."""

    rule_type: str
    count: int
    examples: List[str] = field(default_factory=list)


@dataclass
class AppFailure:
    """An application whose file could not be generated or written."""

    app_id: str
    app_name: str
    stage: str
    error: str


@dataclass
class GenerationMetrics:
    """Metrics collected during a generation run."""

    apps_found: int = 0
    apps_selected: int = 0
    apps_generated: int = 0
    files_written: int = 0

    blocks_by_type: Dict[str, int] = field(default_factory=dict)
    rules_skipped: int = 0
    handler_errors: int = 0
    unsupported_types: Dict[str, UnsupportedTypeInfo] = field(default_factory=dict)

    failures: List[AppFailure] = field(default_factory=list)
    written_files: List[Path] = field(default_factory=list)

    @property
    def apps_failed(self) -> int:
        return len(self.failures)

    @property
    def total_blocks(self) -> int:
        return sum(self.blocks_by_type.values())

    def record_failure(self, app_id: str, app_name: str, stage: str, error: Any) -> None:
        self.failures.append(
            AppFailure(app_id=app_id, app_name=app_name, stage=stage, error=str(error))
        )

    def absorb_emitter_statistics(self, stats: Dict[str, Any]) -> None:
        """Copy the counters of ``TerraformEmitter.get_statistics()``."""
        self.blocks_by_type = dict(stats.get("emitted_blocks", {}))
        self.rules_skipped = stats.get("skipped_rules", 0)
        self.handler_errors = stats.get("handler_errors_count", 0)
        self.unsupported_types = {
            rule_type: UnsupportedTypeInfo(
                rule_type=rule_type, count=len(rule_ids), examples=list(rule_ids)
            )
            for rule_type, rule_ids in stats.get("unsupported_rule_types", {}).items()
        }


@dataclass
class GenerationReport:
    """Complete generation report with metrics and formatting."""

    metrics: GenerationMetrics
    output_directory: Path
    timestamp: str
    dry_run: bool = False
    cancelled: bool = False
    account_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return not self.cancelled and self.metrics.apps_failed == 0

    def format_report(self) -> str:
        """Format the generation report as a human-readable string.

        Returns:
            Formatted report string ready for display.
        """
        metrics = self.metrics
        lines = []
        lines.append("")
        lines.append("=" * 80)
        lines.append("TERRAFORM GENERATION REPORT")
        lines.append("=" * 80)
        lines.append("")

        if self.cancelled:
            lines.append("  Generation cancelled, no files were written.")
            lines.append("")
            lines.append("=" * 80)
            lines.append("")
            return "\n".join(lines)

        lines.append("APPLICATIONS")
        lines.append("-" * 80)
        if self.account_id:
            lines.append(f"  Account:                  {self.account_id}")
        lines.append(f"  Apps Found:               {metrics.apps_found}")
        lines.append(f"  Apps Selected:            {metrics.apps_selected}")
        lines.append(f"  Apps Generated:           {metrics.apps_generated}")
        lines.append(f"  Apps Failed:              {metrics.apps_failed}")
        lines.append("")

        lines.append("TERRAFORM BLOCKS")
        lines.append("-" * 80)
        for terraform_type, count in sorted(metrics.blocks_by_type.items()):
            lines.append(f"  {terraform_type:<26}{count}")
        lines.append(f"  {'Total':<26}{metrics.total_blocks}")
        lines.append(f"  {'Rules Skipped':<26}{metrics.rules_skipped}")
        if metrics.handler_errors:
            lines.append(f"  {'Invalid Rule Targets':<26}{metrics.handler_errors}")
        if self.dry_run:
            lines.append("  Dry run: output printed, no files written")
        else:
            lines.append(f"  {'Files Written':<26}{metrics.files_written}")
        lines.append("")

        if metrics.unsupported_types:
            lines.append("UNSUPPORTED RULE TYPES")
            lines.append("-" * 80)
            sorted_types = sorted(
                metrics.unsupported_types.values(),
                key=lambda x: x.count,
                reverse=True,
            )
            for type_info in sorted_types:
                lines.append(f"  {type_info.rule_type}")
                lines.append(f"    Count: {type_info.count}")
                if type_info.examples:
                    # Show first 2 examples
                    examples_str = ", ".join(type_info.examples[:2])
                    lines.append(f"    Examples: {examples_str}")
            lines.append("")

        if metrics.failures:
            lines.append("FAILED APPLICATIONS")
            lines.append("-" * 80)
            for failure in metrics.failures:
                lines.append(f"  {failure.app_name} ({failure.app_id}), {failure.stage}")
                lines.append(f"    {failure.error}")
            lines.append("")

        if not self.dry_run and metrics.files_written:
            lines.append("NEXT STEPS")
            lines.append("-" * 80)
            lines.append(f"  1. Review generated files in: {self.output_directory}")
            lines.append("  2. Run: terraform init")
            lines.append("  3. Run: terraform plan")
            lines.append("")

        lines.append("=" * 80)
        lines.append("")
        return "\n".join(lines)
