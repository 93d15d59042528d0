from enum import Enum


class DeploymentStage(Enum):
    INIT = "init"
    LOG_SINK_CREATED = "log-sink-created"
    IDENTITY_CREATED = "identity-created"
    FUNCTION_CREATED = "function-created"
    ROUTES_CREATED = "routes-created"
    DONE = "done"
    FAILED = "failed"


class PolicySerializationError(ValueError):
    """Raised when an IAM policy document cannot be rendered as JSON."""


class DeploymentError(RuntimeError):
    """
    A declaration step failed; the steps after it were not run.

    ``failed_after`` is the last stage reached before the failing step.
    """

    def __init__(self, failed_after: DeploymentStage, message: str, cause: Exception) -> None:
        super().__init__(f"{message}: {cause}")
        self.failed_after = failed_after
        self.message = message
