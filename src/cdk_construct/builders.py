import json
import logging

from constructs import Construct
from aws_cdk import (
    ArnFormat,
    Duration,
    Stack,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_logs as logs,
)

from src.cdk_construct.descriptors import (
    DeployableFunction,
    ExecutionIdentity,
    FunctionHandler,
    LogSink,
    Route,
    RouteTable,
    StaticContent,
)
from src.cdk_construct.policies import (
    LAMBDA_SERVICE_PRINCIPAL,
    log_write_policy,
    serialize_policy,
    trust_policy,
)

logger = logging.getLogger(__name__)

FUNCTION_NAME = "date-function"
DEFAULT_LOG_GROUP_NAME = f"/aws/lambda/{FUNCTION_NAME}"
LOG_RETENTION_DAYS = 14

BASIC_EXECUTION_POLICY = "service-role/AWSLambdaBasicExecutionRole"
LOG_POLICY_NAME = "lambda-log-policy"

RUNTIME = "python3.12"
RUNTIME_ENUM = _lambda.Runtime.PYTHON_3_12
HANDLER = "handler.handler"
CODE_PATH = "./function"
MEMORY_SIZE = 128
TIMEOUT_SECONDS = 10

STATIC_CONTENT_PATH = "www"


def build_log_sink(scope: Construct, name: str) -> LogSink:
    """Declare the log group the function writes to, kept for two weeks."""
    log_group = logs.LogGroup(
        scope, "LambdaLogGroup",
        log_group_name=name,
        retention=logs.RetentionDays.TWO_WEEKS,
    )
    # Plain ARN, without the ":*" the CloudFormation Arn attribute carries
    arn = Stack.of(scope).format_arn(
        service="logs",
        resource="log-group",
        resource_name=log_group.log_group_name,
        arn_format=ArnFormat.COLON_RESOURCE_NAME,
    )
    return LogSink(
        name=name,
        retention_days=LOG_RETENTION_DAYS,
        log_group=log_group,
        arn=arn,
    )


def build_execution_identity(scope: Construct, log_sink: LogSink) -> ExecutionIdentity:
    """
    Declare the role the function runs as.

    Both policy documents are serialized before anything is declared, so a
    document that cannot be rendered leaves no partial role behind.
    """
    trust = trust_policy(LAMBDA_SERVICE_PRINCIPAL)
    inline = log_write_policy(log_sink.arn)
    trust_json = serialize_policy(trust)
    inline_json = serialize_policy(inline)
    logger.debug("Trust policy: %s", trust_json)
    logger.debug("Inline policy %s: %s", LOG_POLICY_NAME, inline_json)

    role = iam.Role(
        scope, "LambdaExecutionRole",
        assumed_by=iam.ServicePrincipal(LAMBDA_SERVICE_PRINCIPAL),
        managed_policies=[
            iam.ManagedPolicy.from_aws_managed_policy_name(BASIC_EXECUTION_POLICY),
        ],
        inline_policies={
            LOG_POLICY_NAME: iam.PolicyDocument.from_json(json.loads(inline_json)),
        },
    )
    role.node.default_child.add_property_override(
        "AssumeRolePolicyDocument", json.loads(trust_json)
    )
    return ExecutionIdentity(
        trust_policy=trust,
        attached_policies=(BASIC_EXECUTION_POLICY,),
        inline_policy=inline,
        role=role,
    )


def build_function(
    scope: Construct,
    identity: ExecutionIdentity,
    log_sink: LogSink,
) -> DeployableFunction:
    """Declare the date function bound to the execution role."""
    fn = _lambda.Function(
        scope, "DateFunction",
        function_name=FUNCTION_NAME,
        runtime=RUNTIME_ENUM,
        handler=HANDLER,
        role=identity.role,
        code=_lambda.Code.from_asset(CODE_PATH),
        memory_size=MEMORY_SIZE,
        timeout=Duration.seconds(TIMEOUT_SECONDS),
    )
    # The log group has to exist before Lambda gets a chance to create it itself
    fn.node.add_dependency(log_sink.log_group)
    return DeployableFunction(
        runtime=RUNTIME,
        handler=HANDLER,
        code_path=CODE_PATH,
        memory_size=MEMORY_SIZE,
        timeout=TIMEOUT_SECONDS,
        function=fn,
    )


def build_route_table(function: DeployableFunction) -> RouteTable:
    return RouteTable(
        routes=(
            Route(path="/", target=StaticContent(STATIC_CONTENT_PATH)),
            Route(path="/date", target=FunctionHandler(function), method="GET"),
        )
    )
