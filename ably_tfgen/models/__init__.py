"""Data model for Ably Control API resources."""

from .resources import (
    ApiKey,
    App,
    Capability,
    Headers,
    Namespace,
    Queue,
    Rule,
    RuleSource,
    RuleType,
)
from .targets import (
    AmqpExternalTarget,
    AmqpTarget,
    AwsAuthentication,
    AwsKinesisTarget,
    AwsLambdaTarget,
    AwsSqsTarget,
    AzureFunctionTarget,
    GoogleFunctionTarget,
    HttpTarget,
    KafkaTarget,
    PulsarTarget,
    RuleTarget,
    ZapierTarget,
)

__all__ = [
    "AmqpExternalTarget",
    "AmqpTarget",
    "ApiKey",
    "App",
    "AwsAuthentication",
    "AwsKinesisTarget",
    "AwsLambdaTarget",
    "AwsSqsTarget",
    "AzureFunctionTarget",
    "Capability",
    "GoogleFunctionTarget",
    "Headers",
    "HttpTarget",
    "KafkaTarget",
    "Namespace",
    "PulsarTarget",
    "Queue",
    "Rule",
    "RuleSource",
    "RuleTarget",
    "RuleType",
    "ZapierTarget",
]
