#!/usr/bin/env python
import logging
import os

import aws_cdk as cdk
from src.config.load import load_config
from src.stacks.date_api_stack import DateApiStack

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = cdk.App()

cfg = load_config(app)

env = cdk.Environment(
    account=cfg.get("awsAccount"),
    region=cfg.get("awsRegion"),
)

DateApiStack(
    app,
    cfg["stackName"],
    cfg=cfg,
    env=env,
)

for key, value in cfg["tags"].items():
    cdk.Tags.of(app).add(key, value)

app.synth()
