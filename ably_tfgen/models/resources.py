"""Ably Control API resource records.

Each model is a read-only snapshot of one record returned by the Control
API. Field aliases accept the API's camelCase keys; keys the generator does
not use are ignored.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Values allowed inside passthrough collections (headers and the like)
Primitive = Union[str, int, float, bool, None]
Headers = List[Dict[str, Primitive]]
Capability = Dict[str, List[str]]


class ControlApiModel(BaseModel):
    """Base model for Control API records."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class RuleType(str, Enum):
    """Integration rule types the generator knows how to emit."""

    HTTP = "http"
    AMQP = "amqp"
    AMQP_EXTERNAL = "amqp/external"
    AWS_KINESIS = "aws/kinesis"
    AWS_LAMBDA = "aws/lambda"
    AWS_SQS = "aws/sqs"
    AZURE_FUNCTION = "azure/function"
    GOOGLE_FUNCTION = "google/function"
    KAFKA = "kafka"
    PULSAR = "pulsar"
    ZAPIER = "zapier"


class App(ControlApiModel):
    """An Ably application; every other resource belongs to one."""

    id: str
    name: str


class ApiKey(ControlApiModel):
    """
    An API key of an application.

    Fields:
        id: Key identifier.
        name: Human readable key name, used for the Terraform identifier.
        secret: Key material. Never written to generated files.
        capability: Channel pattern to permitted operations.
    """

    id: str
    name: str
    secret: Optional[str] = Field(None, alias="key", repr=False)
    capability: Capability = Field(default_factory=dict)

    @field_validator("capability", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class Namespace(ControlApiModel):
    """
    Channel namespace configuration.

    The id doubles as the channel prefix the rules apply to. Batching
    settings arrive as flat fields; a nested ``batching`` object is flattened.
    """

    id: str
    authenticated: bool = False
    persisted: bool = False
    persist_last: bool = Field(False, alias="persistLast")
    push_enabled: bool = Field(False, alias="pushEnabled")
    tls_only: bool = Field(False, alias="tlsOnly")
    batching_enabled: Optional[bool] = Field(None, alias="batchingEnabled")
    batching_interval: Optional[int] = Field(None, alias="batchingInterval")
    batching_policy: Optional[str] = Field(None, alias="batchingPolicy")

    @model_validator(mode="before")
    @classmethod
    def flatten_batching(cls, data: Any) -> Any:
        """Accept ``{"batching": {"enabled", "interval", "policy"}}``."""
        if isinstance(data, dict) and isinstance(data.get("batching"), dict):
            data = dict(data)
            batching = data.pop("batching")
            data.setdefault("batchingEnabled", batching.get("enabled"))
            data.setdefault("batchingInterval", batching.get("interval"))
            data.setdefault("batchingPolicy", batching.get("policy"))
        return data


class Queue(ControlApiModel):
    """An Ably queue."""

    id: str
    name: str
    ttl: int
    max_length: int = Field(..., alias="maxLength")
    region: str


class RuleSource(ControlApiModel):
    channel_filter: str = Field(..., alias="channelFilter")
    type: str


class Rule(ControlApiModel):
    """
    An integration rule.

    ``rule_type`` is the discriminant for ``target``: the target stays a raw
    mapping here and is parsed into the typed target model of the handler
    registered for the rule type, so unknown rule types still load.
    """

    id: str
    status: str
    request_mode: str = Field(..., alias="requestMode")
    rule_type: str = Field(..., alias="ruleType")
    source: RuleSource
    target: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("target", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v
