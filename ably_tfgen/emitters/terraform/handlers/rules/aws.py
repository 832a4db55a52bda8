"""AWS rule handlers for Terraform emission.

Handles: aws/kinesis, aws/lambda, aws/sqs
Emits: target block of ably_rule / ably_rule_kinesis / ably_rule_lambda /
ably_rule_sqs

All three targets carry the same ``authentication`` block. Every credential
field is emitted even when the authentication mode does not use it.
"""

from typing import ClassVar, Set, Type

from .....models import (
    AwsAuthentication,
    AwsKinesisTarget,
    AwsLambdaTarget,
    AwsSqsTarget,
    RuleTarget,
)
from ...base_handler import RuleTargetHandler, TargetT
from ...hcl import HclBlock
from .. import handler


class AwsTargetHandler(RuleTargetHandler[TargetT]):
    """Shared projection of the AWS ``authentication`` block."""

    def add_authentication(
        self, authentication: AwsAuthentication, block: HclBlock
    ) -> None:
        auth_block = block.block("authentication")
        auth_block.set("authentication_mode", authentication.authentication_mode)
        auth_block.set("access_key_id", self.text(authentication.access_key_id))
        auth_block.set(
            "secret_access_key", self.text(authentication.secret_access_key)
        )
        auth_block.set("assume_role_arn", self.text(authentication.assume_role_arn))


@handler
class AwsKinesisTargetHandler(AwsTargetHandler[AwsKinesisTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"aws/kinesis"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_kinesis"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AwsKinesisTarget

    def project_fields(self, target: AwsKinesisTarget, block: HclBlock) -> None:
        block.set("region", target.region)
        block.set("stream_name", target.stream_name)
        block.set("partition_key", target.partition_key)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))
        self.add_authentication(target.authentication, block)


@handler
class AwsLambdaTargetHandler(AwsTargetHandler[AwsLambdaTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"aws/lambda"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_lambda"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AwsLambdaTarget

    def project_fields(self, target: AwsLambdaTarget, block: HclBlock) -> None:
        block.set("region", target.region)
        block.set("function_name", target.function_name)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))
        self.add_authentication(target.authentication, block)


@handler
class AwsSqsTargetHandler(AwsTargetHandler[AwsSqsTarget]):
    HANDLED_TYPES: ClassVar[Set[str]] = {"aws/sqs"}
    TERRAFORM_TYPE: ClassVar[str] = "ably_rule_sqs"
    TARGET_MODEL: ClassVar[Type[RuleTarget]] = AwsSqsTarget

    def project_fields(self, target: AwsSqsTarget, block: HclBlock) -> None:
        block.set("region", target.region)
        block.set("aws_account_id", target.aws_account_id)
        block.set("queue_name", target.queue_name)
        block.set("format", target.format)
        block.set("enveloped", self.flag(target.enveloped))
        self.add_authentication(target.authentication, block)
