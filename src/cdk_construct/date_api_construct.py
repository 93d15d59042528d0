import logging

from constructs import Construct

from src.cdk_construct import builders, rest_api
from src.cdk_construct.builders import DEFAULT_LOG_GROUP_NAME
from src.cdk_construct.errors import DeploymentError, DeploymentStage

logger = logging.getLogger(__name__)


class DateApiConstruct(Construct):
    """
    Log group, execution role, date function and REST API, declared in that order.

    Each step consumes the previous step's descriptor. The first step that
    raises stops the sequence with a DeploymentError naming the step.
    """

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        log_group_name: str = DEFAULT_LOG_GROUP_NAME,
    ) -> None:
        super().__init__(scope, id)
        self.stage = DeploymentStage.INIT

        self.log_sink = self._step(
            DeploymentStage.LOG_SINK_CREATED,
            "failed to create log group",
            builders.build_log_sink, self, log_group_name,
        )
        self.identity = self._step(
            DeploymentStage.IDENTITY_CREATED,
            "failed to create IAM role",
            builders.build_execution_identity, self, self.log_sink,
        )
        self.function = self._step(
            DeploymentStage.FUNCTION_CREATED,
            "failed to create Lambda function",
            builders.build_function, self, self.identity, self.log_sink,
        )
        self.api = self._step(
            DeploymentStage.ROUTES_CREATED,
            "failed to create API Gateway",
            self._create_rest_api,
        )

        self.stage = DeploymentStage.DONE
        logger.info("Declared %s", self.node.path)

    def _create_rest_api(self):
        """Lay out the routes and bind them to a REST API."""
        route_table = builders.build_route_table(self.function)
        return rest_api.build_rest_api(self, route_table)

    def _step(self, reached: DeploymentStage, message: str, declare, *args):
        try:
            result = declare(*args)
        except Exception as e:
            failed_after = self.stage
            logger.error("%s (after %s): %s", message, failed_after.value, e)
            self.stage = DeploymentStage.FAILED
            raise DeploymentError(failed_after, message, e) from e
        self.stage = reached
        logger.info("Stage %s", reached.value)
        return result
