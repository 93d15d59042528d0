from constructs import Construct
from aws_cdk import Stack, CfnOutput
from src.cdk_construct.builders import DEFAULT_LOG_GROUP_NAME
from src.cdk_construct.date_api_construct import DateApiConstruct

class DateApiStack(Stack):
    def __init__(self, scope: Construct, construct_id: str, *, cfg: dict, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.date_api = DateApiConstruct(
            self,
            "DateApi",
            log_group_name=cfg.get("logGroupName") or DEFAULT_LOG_GROUP_NAME,
        )

        # Only output; never reached when a declaration step fails
        CfnOutput(self, "url", value=self.date_api.api.url)
