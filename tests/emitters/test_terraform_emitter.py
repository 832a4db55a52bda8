"""Tests for TerraformEmitter dispatch, failure isolation and statistics."""

import logging

import pytest
from pydantic import ValidationError

from ably_tfgen.emitters.terraform import TerraformEmitter, join_blocks
from ably_tfgen.exceptions import UnsupportedRuleTypeError
from ably_tfgen.models import ApiKey, App


@pytest.fixture
def zapier_target():
    return {"url": "https://hooks.zapier.com/x"}


def emit_and_commit(emitter, app, keys=(), rules=()):
    context = emitter.new_context(app)
    blocks = [emitter.emit_app(app, context)]
    blocks.extend(emitter.emit_keys(keys, context))
    blocks.extend(emitter.emit_rules(rules, context))
    emitter.commit(context)
    return join_blocks(blocks)


class TestEmit:
    def test_idempotent(self, my_app, prod_key, rule_factory, http_target):
        rules = [rule_factory("http", http_target)]
        first = emit_and_commit(TerraformEmitter(), my_app, [prod_key], rules)
        second = emit_and_commit(TerraformEmitter(), my_app, [prod_key], rules)
        assert first == second

    def test_identifiers_unique_for_distinct_names(self, my_app):
        keys = [
            ApiKey(id="k1", name="Root"),
            ApiKey(id="k2", name="Subscribe Only"),
            ApiKey(id="k3", name="publisher"),
        ]
        emitter = TerraformEmitter()
        context = emitter.new_context(my_app)
        emitter.emit_app(my_app, context)
        emitter.emit_keys(keys, context)

        names = context.emitted_resources["ably_api_key"]
        assert len(names) == len(set(names)) == 3

    def test_join_blocks(self):
        assert join_blocks(["a {\n}\n", "b {\n}\n"]) == "a {\n}\n\nb {\n}\n"


class TestUnsupportedRules:
    def test_unknown_rule_type_is_skipped_and_logged(
        self, my_app, rule_factory, zapier_target, caplog
    ):
        emitter = TerraformEmitter()
        rules = [
            rule_factory("zapier", zapier_target, rule_id="before"),
            rule_factory("ifttt", {"webhookUrl": "x"}, rule_id="odd"),
            rule_factory("zapier", zapier_target, rule_id="after"),
        ]

        with caplog.at_level(logging.WARNING):
            text = emit_and_commit(emitter, my_app, rules=rules)

        assert "my_app_before" in text
        assert "my_app_after" in text
        assert "my_app_odd" not in text
        assert "Unsupported rule type: ifttt" in caplog.text

        stats = emitter.get_statistics()
        assert stats["skipped_rules"] == 1
        assert stats["unsupported_rule_types"] == {"ifttt": ["odd"]}
        assert stats["emitted_blocks"]["ably_rule"] == 2

    def test_strict_mode_raises(self, my_app, rule_factory):
        emitter = TerraformEmitter(strict_mode=True)
        context = emitter.new_context(my_app)
        with pytest.raises(UnsupportedRuleTypeError):
            emitter.emit_rules([rule_factory("ifttt", {})], context)

    def test_invalid_target_is_skipped(self, my_app, rule_factory, zapier_target):
        emitter = TerraformEmitter()
        rules = [
            rule_factory("http", {"format": "json"}, rule_id="broken"),
            rule_factory("zapier", zapier_target, rule_id="ok"),
        ]

        text = emit_and_commit(emitter, my_app, rules=rules)

        assert "my_app_broken" not in text
        assert "my_app_ok" in text
        assert emitter.get_statistics()["handler_errors_count"] == 1

    def test_invalid_target_strict_mode(self, my_app, rule_factory):
        emitter = TerraformEmitter(strict_mode=True)
        context = emitter.new_context(my_app)
        with pytest.raises(ValidationError):
            emitter.emit_rule(rule_factory("http", {"format": "json"}), context)


class TestStatistics:
    def test_typed_statistics_use_kind_types(self, my_app, rule_factory, zapier_target):
        emitter = TerraformEmitter(rule_block_style="typed")
        text = emit_and_commit(emitter, my_app, rules=[rule_factory("zapier", zapier_target)])

        assert 'resource "ably_rule_zapier" "my_app_rule1"' in text
        assert emitter.get_statistics()["emitted_blocks"] == {
            "ably_app": 1,
            "ably_rule_zapier": 1,
        }

    def test_supported_rule_types(self):
        assert "kafka" in TerraformEmitter().get_supported_rule_types()

    def test_statistics_totals(self, my_app, prod_key):
        emitter = TerraformEmitter()
        emit_and_commit(emitter, my_app, keys=[prod_key])
        stats = emitter.get_statistics()
        assert stats["committed_apps"] == 1
        assert stats["total_blocks"] == 2
        assert stats["skipped_rules"] == 0

    def test_uncommitted_context_is_not_counted(self, my_app, prod_key, rule_factory):
        emitter = TerraformEmitter()
        context = emitter.new_context(my_app)
        emitter.emit_app(my_app, context)
        emitter.emit_keys([prod_key], context)
        emitter.emit_rules([rule_factory("ifttt", {})], context)

        assert context.block_counts() == {"ably_app": 1, "ably_api_key": 1}
        assert context.skipped_rules == 1
        stats = emitter.get_statistics()
        assert stats["committed_apps"] == 0
        assert stats["emitted_blocks"] == {}
        assert stats["skipped_rules"] == 0
        assert stats["unsupported_rule_types"] == {}

        emitter.commit(context)

        stats = emitter.get_statistics()
        assert stats["emitted_blocks"] == {"ably_app": 1, "ably_api_key": 1}
        assert stats["unsupported_rule_types"] == {"ifttt": ["rule1"]}

    def test_commit_merges_apps(self, rule_factory):
        emitter = TerraformEmitter()
        emit_and_commit(
            emitter, App(id="a1", name="First"), rules=[rule_factory("ifttt", {}, rule_id="x")]
        )
        emit_and_commit(
            emitter, App(id="a2", name="Second"), rules=[rule_factory("ifttt", {}, rule_id="y")]
        )

        stats = emitter.get_statistics()
        assert stats["committed_apps"] == 2
        assert stats["emitted_blocks"] == {"ably_app": 2}
        assert stats["skipped_rules"] == 2
        assert stats["unsupported_rule_types"] == {"ifttt": ["x", "y"]}
