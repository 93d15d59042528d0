"""
Descriptors handed between the declaration steps.

Each one keeps the static values it was declared with next to the CDK
construct, so later steps (and tests) can read them without resolving tokens.
"""
from dataclasses import dataclass

from aws_cdk import (
    aws_apigateway as apigw,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_logs as logs,
)


@dataclass(frozen=True)
class LogSink:
    name: str
    retention_days: int
    log_group: logs.LogGroup
    arn: str


@dataclass(frozen=True)
class ExecutionIdentity:
    trust_policy: dict
    attached_policies: tuple[str, ...]
    inline_policy: dict
    role: iam.Role


@dataclass(frozen=True)
class DeployableFunction:
    runtime: str
    handler: str
    code_path: str
    memory_size: int
    timeout: int
    function: _lambda.Function


@dataclass(frozen=True)
class StaticContent:
    local_path: str


@dataclass(frozen=True)
class FunctionHandler:
    function: DeployableFunction


RouteTarget = StaticContent | FunctionHandler


@dataclass(frozen=True)
class Route:
    path: str
    target: RouteTarget
    method: str | None = None


@dataclass(frozen=True)
class RouteTable:
    routes: tuple[Route, ...]


@dataclass(frozen=True)
class RestApiBinding:
    route_table: RouteTable
    api: apigw.RestApi

    @property
    def url(self) -> str:
        return self.api.url
