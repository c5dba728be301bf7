"""Pytest fixtures for construct, CDK app and signing script tests."""

import pytest
from aws_cdk import App, Environment, Stack

SOURCE_ACCOUNT = "111111111111"
TARGET_ACCOUNT = "222222222222"
REGION = "us-east-1"
OTHER_REGION = "eu-west-1"


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Keep signing and AWS settings from the developer's shell out of tests."""
    for name in ("SIGNING_KEY_SCOPE", "SIGNING_KEY_USER", "AWS_PROFILE", "AWS_REGION"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app():
    """A fresh CDK app."""
    return App()


@pytest.fixture
def source_stack(app):
    """Stack holding the rule, in account 111111111111 / us-east-1."""
    return Stack(app, "SourceStack", env=Environment(account=SOURCE_ACCOUNT, region=REGION))


@pytest.fixture
def stack():
    """A stack without an explicit environment, in its own app."""
    return Stack(App(), "TestStack")
