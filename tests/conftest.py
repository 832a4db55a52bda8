"""Shared fixtures: Control API records and an in-memory Control API."""

from typing import Any, Dict, List, Optional

import pytest

from ably_tfgen.emitters.terraform import EmitterContext
from ably_tfgen.exceptions import ResourceFetchError
from ably_tfgen.models import ApiKey, App, Namespace, Queue, Rule


def make_rule(
    rule_type: str,
    target: Optional[Dict[str, Any]] = None,
    rule_id: str = "rule1",
) -> Rule:
    return Rule.model_validate(
        {
            "id": rule_id,
            "status": "enabled",
            "requestMode": "single",
            "ruleType": rule_type,
            "source": {"channelFilter": "^chat", "type": "channel.message"},
            "target": target or {},
        }
    )


class FakeControlApi:
    """In-memory stand-in for ControlApiClient.

    ``fail`` maps an app id to the resource kind whose listing should fail.
    """

    def __init__(
        self,
        apps: List[App],
        keys: Optional[Dict[str, List[ApiKey]]] = None,
        namespaces: Optional[Dict[str, List[Namespace]]] = None,
        queues: Optional[Dict[str, List[Queue]]] = None,
        rules: Optional[Dict[str, List[Rule]]] = None,
        fail: Optional[Dict[str, str]] = None,
        account_id: str = "acc1",
    ):
        self.apps = apps
        self.keys = keys or {}
        self.namespaces = namespaces or {}
        self.queues = queues or {}
        self.rules = rules or {}
        self.fail = fail or {}
        self.account_id = account_id
        self.calls: List[str] = []

    def resolve_account_id(self) -> str:
        self.calls.append("me")
        return self.account_id

    def list_apps(self, account_id: str) -> List[App]:
        self.calls.append(f"apps:{account_id}")
        return list(self.apps)

    def _listing(self, kind: str, app_id: str, records: Dict[str, list]) -> list:
        self.calls.append(f"{kind}:{app_id}")
        if self.fail.get(app_id) == kind:
            raise ResourceFetchError(
                f"Failed to fetch {kind}: HTTP 500",
                resource_type=kind,
                app_id=app_id,
                status_code=500,
                payload={"message": "boom"},
            )
        return list(records.get(app_id, []))

    def list_keys(self, app_id: str) -> List[ApiKey]:
        return self._listing("keys", app_id, self.keys)

    def list_namespaces(self, app_id: str) -> List[Namespace]:
        return self._listing("namespaces", app_id, self.namespaces)

    def list_queues(self, app_id: str) -> List[Queue]:
        return self._listing("queues", app_id, self.queues)

    def list_rules(self, app_id: str) -> List[Rule]:
        return self._listing("rules", app_id, self.rules)


@pytest.fixture
def context() -> EmitterContext:
    return EmitterContext(app_name="My App")


@pytest.fixture
def my_app() -> App:
    return App(id="a1", name="My App")


@pytest.fixture
def prod_key() -> ApiKey:
    return ApiKey.model_validate(
        {
            "id": "k1",
            "name": "Prod Key",
            "key": "a1.k1:super-secret",
            "capability": {"chat:*": ["publish", "subscribe"]},
        }
    )


@pytest.fixture
def http_target() -> Dict[str, Any]:
    return {
        "url": "https://example.com/hook",
        "format": "json",
        "headers": [{"name": "X-Team", "value": "core"}],
        "signingKeyId": "k1",
        "enveloped": True,
    }


@pytest.fixture
def make_fake_api():
    return FakeControlApi


@pytest.fixture
def rule_factory():
    return make_rule
