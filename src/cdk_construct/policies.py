import json

from src.cdk_construct.errors import PolicySerializationError

POLICY_VERSION = "2012-10-17"
LAMBDA_SERVICE_PRINCIPAL = "lambda.amazonaws.com"
LOG_WRITE_ACTIONS = ["logs:CreateLogStream", "logs:PutLogEvents"]


def trust_policy(service: str = LAMBDA_SERVICE_PRINCIPAL) -> dict:
    """Assume-role document letting a single service principal take the role."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Action": "sts:AssumeRole",
                "Effect": "Allow",
                "Principal": {"Service": service},
            }
        ],
    }


def log_write_policy(sink_arn: str) -> dict:
    """Grant stream creation and event writes on every stream under the log group."""
    return {
        "Version": POLICY_VERSION,
        "Statement": [
            {
                "Effect": "Allow",
                "Action": list(LOG_WRITE_ACTIONS),
                "Resource": f"{sink_arn}:*",
            }
        ],
    }


def serialize_policy(document: dict) -> str:
    try:
        return json.dumps(document)
    except (TypeError, ValueError) as e:
        raise PolicySerializationError(f"Policy document is not serializable: {e}") from e
