import json
import logging
from datetime import datetime, timezone

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def handler(event, context):
    now = datetime.now(timezone.utc)
    logger.info("%s %s", (event or {}).get("httpMethod"), (event or {}).get("path"))
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"date": now.isoformat()}),
    }
