# tests/conftest.py
import os

import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from src.stacks.date_api_stack import DateApiStack

# Asset paths ("./function", "www") are relative to the project root
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

TEST_ENV = cdk.Environment(account="123456789012", region="us-east-1")
TEST_CFG = {"stackName": "date-api-test", "stage": "test", "tags": {}}


@pytest.fixture
def in_project_root(monkeypatch):
    monkeypatch.chdir(ROOT_DIR)


@pytest.fixture
def stack(in_project_root) -> DateApiStack:
    app = cdk.App()
    return DateApiStack(app, TEST_CFG["stackName"], cfg=TEST_CFG, env=TEST_ENV)


@pytest.fixture
def template(stack) -> Template:
    return Template.from_stack(stack)
