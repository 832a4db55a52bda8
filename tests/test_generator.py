"""Tests for AblyTerraformGenerator run orchestration."""

import io
from pathlib import Path
from unittest.mock import Mock

import pytest
from rich.console import Console

from ably_tfgen.config_manager import (
    AblyTerraformConfig,
    ControlApiConfig,
    GenerationConfig,
    OutputConfig,
)
from ably_tfgen.exceptions import OutputWriteError, ResourceFetchError
from ably_tfgen.generator import CONFIRM_PROMPT, AblyTerraformGenerator, select_apps
from ably_tfgen.models import App
from ably_tfgen.output import TerraformFileWriter


def make_config(output_dir, **generation):
    return AblyTerraformConfig(
        control_api=ControlApiConfig(token="test-token"),
        output=OutputConfig(directory=str(output_dir)),
        generation=GenerationConfig(
            rule_block_style=generation.pop("rule_block_style", "generic"),
            isolate_app_failures=generation.pop("isolate_app_failures", True),
            strict_mode=generation.pop("strict_mode", False),
            app_filter=generation.pop("app_filter", []),
        ),
    )


def quiet_console():
    return Console(file=io.StringIO(), width=120)


class FailingWriter(TerraformFileWriter):
    """Writer that fails for one file name."""

    def __init__(self, failing_name):
        super().__init__()
        self.failing_name = failing_name

    def write(self, directory, file_name, content):
        if file_name == self.failing_name:
            raise OutputWriteError("disk full", path=f"{directory}/{file_name}.tf")
        return super().write(directory, file_name, content)


@pytest.fixture
def two_apps():
    return [App(id="a1", name="My App"), App(id="a2", name="Other App")]


class TestEndToEnd:
    def test_writes_one_file_per_app(self, tmp_path, make_fake_api, my_app, prod_key):
        api = make_fake_api([my_app], keys={"a1": [prod_key]})
        confirm = Mock(return_value=True)

        report = AblyTerraformGenerator(
            make_config(tmp_path), api, confirm, console=quiet_console()
        ).run()

        confirm.assert_called_once_with(CONFIRM_PROMPT)
        written = tmp_path / "my_app.tf"
        assert written.exists()
        content = written.read_text(encoding="utf-8")
        assert 'resource "ably_api_key" "my_app_prod_key" {' in content
        assert "app_id           = ably_app.my_app.id" in content
        assert report.metrics.files_written == 1
        assert report.metrics.written_files == [written]
        assert report.account_id == "acc1"
        assert api.calls[:2] == ["me", "apps:acc1"]

    def test_creates_missing_output_directory(self, tmp_path, make_fake_api, my_app):
        out = tmp_path / "nested" / "dir"
        AblyTerraformGenerator(
            make_config(out), make_fake_api([my_app]), lambda _: True, console=quiet_console()
        ).run()
        assert (out / "my_app.tf").exists()

    def test_assume_yes_skips_prompt(self, tmp_path, make_fake_api, my_app):
        confirm = Mock(return_value=False)
        AblyTerraformGenerator(
            make_config(tmp_path),
            make_fake_api([my_app]),
            confirm,
            console=quiet_console(),
            assume_yes=True,
        ).run()
        confirm.assert_not_called()
        assert (tmp_path / "my_app.tf").exists()


class TestCancel:
    def test_declining_writes_nothing(self, tmp_path, make_fake_api, two_apps):
        out = tmp_path / "out"
        api = make_fake_api(two_apps)

        report = AblyTerraformGenerator(
            make_config(out), api, lambda _: False, console=quiet_console()
        ).run()

        assert report.cancelled
        assert not out.exists()
        assert api.calls == ["me", "apps:acc1"]


class TestIsolation:
    def test_fetch_failure_does_not_stop_next_app(self, tmp_path, make_fake_api, two_apps):
        api = make_fake_api(two_apps, fail={"a1": "queues"})

        report = AblyTerraformGenerator(
            make_config(tmp_path), api, lambda _: True, console=quiet_console()
        ).run()

        assert not (tmp_path / "my_app.tf").exists()
        assert (tmp_path / "other_app.tf").exists()
        assert report.metrics.apps_failed == 1
        assert report.metrics.failures[0].stage == "fetch"
        assert not report.succeeded

    def test_fail_fast_propagates(self, tmp_path, make_fake_api, two_apps):
        api = make_fake_api(two_apps, fail={"a1": "keys"})
        generator = AblyTerraformGenerator(
            make_config(tmp_path, isolate_app_failures=False),
            api,
            lambda _: True,
            console=quiet_console(),
        )

        with pytest.raises(ResourceFetchError):
            generator.run()

        assert "keys:a2" not in api.calls

    def test_write_failure_does_not_stop_next_app(self, tmp_path, make_fake_api, two_apps):
        report = AblyTerraformGenerator(
            make_config(tmp_path, isolate_app_failures=False),
            make_fake_api(two_apps),
            lambda _: True,
            writer=FailingWriter("my_app"),
            console=quiet_console(),
        ).run()

        assert (tmp_path / "other_app.tf").exists()
        assert report.metrics.files_written == 1
        assert report.metrics.failures[0].stage == "write"


class TestStatisticsOfFailedApps:
    def test_fetch_failure_after_emitting_is_not_counted(
        self, tmp_path, make_fake_api, my_app, prod_key
    ):
        api = make_fake_api([my_app], keys={"a1": [prod_key]}, fail={"a1": "queues"})

        report = AblyTerraformGenerator(
            make_config(tmp_path), api, lambda _: True, console=quiet_console()
        ).run()

        assert report.metrics.files_written == 0
        assert report.metrics.blocks_by_type == {}
        assert report.metrics.total_blocks == 0

    def test_failed_app_rules_are_not_counted(
        self, tmp_path, make_fake_api, two_apps, rule_factory
    ):
        api = make_fake_api(
            two_apps,
            rules={"a1": [rule_factory("ifttt", {}, rule_id="lost")]},
            fail={"a1": "rules"},
        )

        report = AblyTerraformGenerator(
            make_config(tmp_path), api, lambda _: True, console=quiet_console()
        ).run()

        assert report.metrics.rules_skipped == 0
        assert report.metrics.unsupported_types == {}
        assert report.metrics.blocks_by_type == {"ably_app": 1}

    def test_write_failure_is_not_counted(
        self, tmp_path, make_fake_api, two_apps, prod_key, rule_factory
    ):
        api = make_fake_api(
            two_apps,
            keys={"a1": [prod_key]},
            rules={"a1": [rule_factory("ifttt", {}, rule_id="unwritten")]},
        )

        report = AblyTerraformGenerator(
            make_config(tmp_path),
            api,
            lambda _: True,
            writer=FailingWriter("my_app"),
            console=quiet_console(),
        ).run()

        assert report.metrics.files_written == 1
        assert report.metrics.blocks_by_type == {"ably_app": 1}
        assert report.metrics.rules_skipped == 0
        assert report.metrics.unsupported_types == {}

    def test_dry_run_counts_printed_apps(self, tmp_path, make_fake_api, my_app, prod_key):
        config = make_config(tmp_path / "out")
        config.output.dry_run = True

        report = AblyTerraformGenerator(
            config,
            make_fake_api([my_app], keys={"a1": [prod_key]}),
            lambda _: True,
            console=quiet_console(),
        ).run()

        assert report.metrics.files_written == 0
        assert report.metrics.blocks_by_type == {"ably_app": 1, "ably_api_key": 1}


class TestDryRunAndFilter:
    def test_dry_run_prints_instead_of_writing(self, tmp_path, make_fake_api, my_app):
        config = make_config(tmp_path / "out")
        config.output.dry_run = True
        console = Console(record=True, width=120, file=io.StringIO())

        report = AblyTerraformGenerator(
            config, make_fake_api([my_app]), lambda _: True, console=console
        ).run()

        assert not (tmp_path / "out").exists()
        assert 'resource "ably_app" "my_app"' in console.export_text()
        assert report.metrics.apps_generated == 1
        assert report.metrics.files_written == 0

    def test_app_filter_by_id_or_name(self, two_apps):
        assert select_apps(two_apps, ["a2"]) == [two_apps[1]]
        assert select_apps(two_apps, ["My App"]) == [two_apps[0]]
        assert select_apps(two_apps, []) == two_apps
        assert select_apps(two_apps, ["nope"]) == []

    def test_no_apps_skips_prompt(self, tmp_path, make_fake_api):
        confirm = Mock()
        report = AblyTerraformGenerator(
            make_config(tmp_path), make_fake_api([]), confirm, console=quiet_console()
        ).run()
        confirm.assert_not_called()
        assert report.metrics.apps_found == 0

    def test_statistics_reach_report(self, tmp_path, make_fake_api, my_app, rule_factory):
        api = make_fake_api([my_app], rules={"a1": [rule_factory("ifttt", {})]})
        report = AblyTerraformGenerator(
            make_config(tmp_path), api, lambda _: True, console=quiet_console()
        ).run()

        assert report.metrics.rules_skipped == 1
        assert report.metrics.unsupported_types["ifttt"].examples == ["rule1"]
        assert report.metrics.blocks_by_type == {"ably_app": 1}
        assert Path(report.output_directory) == tmp_path
