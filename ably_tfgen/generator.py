"""
Run orchestration for Terraform generation.

AblyTerraformGenerator drives a whole run: resolve the account, list and
select applications, ask for confirmation, then aggregate and write one file
per application.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Sequence

import structlog
from rich.console import Console
from rich.table import Table

from .aggregator import AppAggregator, AppResourceSource
from .config_manager import AblyTerraformConfig
from .emitters.terraform import TerraformEmitter, sanitize_name
from .exceptions import ControlApiError, OutputWriteError
from .generation_report import GenerationMetrics, GenerationReport
from .models import App
from .output import TerraformFileWriter

logger = structlog.get_logger(__name__)

CONFIRM_PROMPT = "Do you want to proceed with generation?"


class ControlApiSource(AppResourceSource, Protocol):
    def resolve_account_id(self) -> str: ...

    def list_apps(self, account_id: str) -> Sequence[App]: ...


def select_apps(apps: Sequence[App], app_filter: Sequence[str]) -> List[App]:
    """Keep the apps whose id or name is in ``app_filter`` (all when empty)."""
    if not app_filter:
        return list(apps)
    wanted = set(app_filter)
    selected = [app for app in apps if app.id in wanted or app.name in wanted]
    matched = {app.id for app in selected} | {app.name for app in selected}
    for missing in sorted(wanted - matched):
        logger.warning("No application matches filter", app_filter=missing)
    return selected


def build_apps_table(apps: Sequence[App], title: str = "Ably Applications") -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("App ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("File", style="yellow")
    for app in apps:
        table.add_row(app.id, app.name, f"{sanitize_name(app.name)}.tf")
    return table


class AblyTerraformGenerator:
    """
    Generates one Terraform file per Ably application.

    Collaborators are injected: the Control API client, the confirmation
    callback (``click.confirm`` from the CLI), the file writer and the rich
    console.
    """

    def __init__(
        self,
        config: AblyTerraformConfig,
        client: ControlApiSource,
        confirm: Callable[[str], bool],
        writer: Optional[TerraformFileWriter] = None,
        console: Optional[Console] = None,
        emitter: Optional[TerraformEmitter] = None,
        assume_yes: bool = False,
    ):
        self.config = config
        self.client = client
        self.confirm = confirm
        self.writer = writer or TerraformFileWriter(config.output.extension)
        self.console = console or Console()
        self.emitter = emitter or TerraformEmitter(
            rule_block_style=config.generation.rule_block_style,
            strict_mode=config.generation.strict_mode,
        )
        self.assume_yes = assume_yes
        self.aggregator = AppAggregator(client, self.emitter)

    def run(self) -> GenerationReport:
        """
        Execute a generation run.

        Returns:
            GenerationReport for the run (cancelled when the prompt is declined)

        Raises:
            AuthenticationError: If the account cannot be resolved
            ControlApiError: If listing apps fails, or fetching an app's
                resources fails while per-app isolation is off
        """
        metrics = GenerationMetrics()
        output_directory = Path(self.config.output.directory)
        report = GenerationReport(
            metrics=metrics,
            output_directory=output_directory,
            timestamp=datetime.now().isoformat(timespec="seconds"),
            dry_run=self.config.output.dry_run,
        )

        account_id = self.client.resolve_account_id()
        report.account_id = account_id

        apps = list(self.client.list_apps(account_id))
        metrics.apps_found = len(apps)
        apps = select_apps(apps, self.config.generation.app_filter)
        metrics.apps_selected = len(apps)
        logger.info("Listed applications", account_id=account_id, found=metrics.apps_found, selected=len(apps))

        if not apps:
            self.console.print("[yellow]No applications to generate.[/yellow]")
            return report

        self.console.print(build_apps_table(apps))

        if not self.assume_yes and not self.confirm(CONFIRM_PROMPT):
            logger.info("Generation cancelled by user")
            report.cancelled = True
            return report

        for app in apps:
            self._generate_app(app, account_id, output_directory, metrics)

        metrics.absorb_emitter_statistics(self.emitter.get_statistics())
        logger.info(
            "Generation finished",
            generated=metrics.apps_generated,
            failed=metrics.apps_failed,
            files=metrics.files_written,
        )
        return report

    def _generate_app(
        self,
        app: App,
        account_id: str,
        output_directory: Path,
        metrics: GenerationMetrics,
    ) -> None:
        log = logger.bind(app_id=app.id, app_name=app.name)
        log.info("Generating application")
        context = self.emitter.new_context(app)

        try:
            content = self.aggregator.aggregate(app, account_id, context)
        except ControlApiError as e:
            log.error("Failed to fetch application resources", error=str(e))
            metrics.record_failure(app.id, app.name, "fetch", e)
            if not self.config.generation.isolate_app_failures:
                raise
            return

        metrics.apps_generated += 1
        file_name = sanitize_name(app.name)

        if self.config.output.dry_run:
            self.console.rule(f"{file_name}{self.writer.extension}")
            self.console.print(content, markup=False, highlight=False)
            self.emitter.commit(context)
            return

        try:
            path = self.writer.write(output_directory, file_name, content)
        except OutputWriteError as e:
            log.error("Failed to write Terraform file", error=str(e))
            metrics.record_failure(app.id, app.name, "write", e)
            return

        # Only delivered output counts towards the block statistics
        self.emitter.commit(context)
        metrics.files_written += 1
        metrics.written_files.append(path)
        self.console.print(f"[green]Wrote[/green] {path}")
