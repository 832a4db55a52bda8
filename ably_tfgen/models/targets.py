"""Typed rule targets, one model per rule type.

Required fields have no default, so a target missing one fails validation.
Optional fields default to ``None`` and the handlers render the documented
fallback (``""``, ``false`` or ``null``) instead of omitting them.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from .resources import ControlApiModel, Headers


class RuleTarget(ControlApiModel):
    """Base class for rule targets."""


class HeadersMixin(ControlApiModel):
    headers: Headers = Field(default_factory=list)

    @field_validator("headers", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class HttpTarget(RuleTarget, HeadersMixin):
    url: str
    format: str
    signing_key_id: Optional[str] = Field(None, alias="signingKeyId")
    enveloped: Optional[bool] = None


class AmqpTarget(RuleTarget):
    queue_id: str = Field(..., alias="queueId")
    format: str
    enveloped: Optional[bool] = None


class AmqpExternalTarget(RuleTarget, HeadersMixin):
    url: str
    routing_key: str = Field(..., alias="routingKey")
    mandatory_route: bool = Field(..., alias="mandatoryRoute")
    persistent_messages: bool = Field(..., alias="persistentMessages")
    message_ttl: Optional[int] = Field(None, alias="messageTtl")
    format: str
    enveloped: Optional[bool] = None


class AwsAuthentication(ControlApiModel):
    """AWS credentials block shared by the Kinesis, Lambda and SQS targets."""

    authentication_mode: str = Field(..., alias="authenticationMode")
    access_key_id: Optional[str] = Field(None, alias="accessKeyId")
    secret_access_key: Optional[str] = Field(None, alias="secretAccessKey")
    assume_role_arn: Optional[str] = Field(None, alias="assumeRoleArn")


class AwsKinesisTarget(RuleTarget):
    region: str
    stream_name: str = Field(..., alias="streamName")
    partition_key: str = Field(..., alias="partitionKey")
    format: str
    authentication: AwsAuthentication
    enveloped: Optional[bool] = None


class AwsLambdaTarget(RuleTarget):
    region: str
    function_name: str = Field(..., alias="functionName")
    format: str
    authentication: AwsAuthentication
    enveloped: Optional[bool] = None


class AwsSqsTarget(RuleTarget):
    region: str
    aws_account_id: str = Field(..., alias="awsAccountId")
    queue_name: str = Field(..., alias="queueName")
    format: str
    authentication: AwsAuthentication
    enveloped: Optional[bool] = None


class AzureFunctionTarget(RuleTarget, HeadersMixin):
    azure_app_id: str = Field(..., alias="azureAppId")
    function_name: str = Field(..., alias="functionName")
    format: str
    signing_key_id: Optional[str] = Field(None, alias="signingKeyId")
    enveloped: Optional[bool] = None


class GoogleFunctionTarget(RuleTarget, HeadersMixin):
    region: str
    project_id: str = Field(..., alias="projectId")
    function_name: str = Field(..., alias="functionName")
    format: str
    signing_key_id: Optional[str] = Field(None, alias="signingKeyId")
    enveloped: Optional[bool] = None


class KafkaSasl(ControlApiModel):
    mechanism: str
    username: str
    password: str


class KafkaAuth(ControlApiModel):
    sasl: KafkaSasl


class KafkaTarget(RuleTarget):
    brokers: List[str]
    routing_key: str = Field(..., alias="routingKey")
    format: str
    auth: KafkaAuth
    enveloped: Optional[bool] = None


class PulsarAuthentication(ControlApiModel):
    mode: str
    token: Optional[str] = None


class PulsarTarget(RuleTarget):
    routing_key: str = Field(..., alias="routingKey")
    topic: str
    service_url: str = Field(..., alias="serviceUrl")
    tls_trust_certs: List[str] = Field(default_factory=list, alias="tlsTrustCerts")
    format: str
    authentication: PulsarAuthentication
    enveloped: Optional[bool] = None

    @field_validator("tls_trust_certs", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ZapierTarget(RuleTarget, HeadersMixin):
    url: str
    signing_key_id: Optional[str] = Field(None, alias="signingKeyId")
