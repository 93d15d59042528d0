import logging

from constructs import Construct
from aws_cdk import (
    aws_apigateway as apigw,
    aws_iam as iam,
    aws_s3 as s3,
    aws_s3_deployment as s3_deployment,
)

from src.cdk_construct.descriptors import (
    FunctionHandler,
    RestApiBinding,
    Route,
    RouteTable,
    StaticContent,
)

logger = logging.getLogger(__name__)

API_NAME = "date-api"
INDEX_DOCUMENT = "index.html"

CONTENT_TYPE_METHOD = "method.response.header.Content-Type"
CONTENT_TYPE_INTEGRATION = "integration.response.header.Content-Type"


def build_rest_api(scope: Construct, route_table: RouteTable) -> RestApiBinding:
    """
    Declare the public REST API for a route table.

    Routes are bound in table order. Static routes serve the index document at
    their own path and every other file below it; function routes forward the
    request to the Lambda with a proxy integration.
    """
    api = apigw.RestApi(
        scope, "RestApi",
        rest_api_name=API_NAME,
        cloud_watch_role=False,
    )

    for index, route in enumerate(route_table.routes):
        resource = api.root.resource_for_path(route.path)
        if isinstance(route.target, StaticContent):
            _bind_static_content(scope, f"Route{index}", resource, route)
        elif isinstance(route.target, FunctionHandler):
            _bind_function(resource, route)
        else:
            raise TypeError(f"Unsupported route target: {route.target!r}")
        logger.info("Bound route %s %s", route.method or "*", route.path)

    # The stack publishes the url itself
    api.node.try_remove_child("Endpoint")

    return RestApiBinding(route_table=route_table, api=api)


def _bind_function(resource: apigw.IResource, route: Route) -> None:
    resource.add_method(
        route.method or "ANY",
        apigw.LambdaIntegration(route.target.function.function),
    )


def _bind_static_content(
    scope: Construct,
    id_prefix: str,
    resource: apigw.IResource,
    route: Route,
) -> None:
    bucket = s3.Bucket(
        scope, f"{id_prefix}Bucket",
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        encryption=s3.BucketEncryption.S3_MANAGED,
        enforce_ssl=True,
    )
    s3_deployment.BucketDeployment(
        scope, f"{id_prefix}Deployment",
        sources=[s3_deployment.Source.asset(route.target.local_path)],
        destination_bucket=bucket,
    )

    # API Gateway reads the objects with its own role
    role = iam.Role(
        scope, f"{id_prefix}ReadRole",
        assumed_by=iam.ServicePrincipal("apigateway.amazonaws.com"),
    )
    bucket.grant_read(role)

    method = route.method or "GET"
    resource.add_method(
        method,
        _s3_integration(bucket, role, INDEX_DOCUMENT),
        method_responses=_method_responses(),
    )
    resource.add_resource("{proxy+}").add_method(
        method,
        _s3_integration(
            bucket, role, "{proxy}",
            request_parameters={"integration.request.path.proxy": "method.request.path.proxy"},
        ),
        request_parameters={"method.request.path.proxy": True},
        method_responses=_method_responses(),
    )


def _s3_integration(
    bucket: s3.Bucket,
    role: iam.Role,
    key: str,
    request_parameters: dict[str, str] | None = None,
) -> apigw.AwsIntegration:
    return apigw.AwsIntegration(
        service="s3",
        integration_http_method="GET",
        path=f"{bucket.bucket_name}/{key}",
        options=apigw.IntegrationOptions(
            credentials_role=role,
            request_parameters=request_parameters,
            integration_responses=[
                apigw.IntegrationResponse(
                    status_code="200",
                    response_parameters={CONTENT_TYPE_METHOD: CONTENT_TYPE_INTEGRATION},
                ),
                # S3 answers 403 for missing keys when the role cannot list the bucket
                apigw.IntegrationResponse(status_code="404", selection_pattern="4\\d{2}"),
            ],
        ),
    )


def _method_responses() -> list[apigw.MethodResponse]:
    return [
        apigw.MethodResponse(
            status_code="200",
            response_parameters={CONTENT_TYPE_METHOD: True},
        ),
        apigw.MethodResponse(status_code="404"),
    ]
