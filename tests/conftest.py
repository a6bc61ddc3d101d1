"""Shared fixtures: real boto3 DynamoDB clients with stubbed responses."""

from __future__ import annotations

import boto3
import pytest
from botocore.stub import Stubber


def make_client():
    return boto3.client(
        "dynamodb",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def make_item(n: int) -> dict:
    return {"pk": {"S": f"item-{n}"}, "seq": {"N": str(n)}}


def table_description(name: str, status: str = "ACTIVE") -> dict:
    return {
        "Table": {
            "TableName": name,
            "TableStatus": status,
            "AttributeDefinitions": [{"AttributeName": "pk", "AttributeType": "S"}],
            "KeySchema": [{"AttributeName": "pk", "KeyType": "HASH"}],
            "BillingModeSummary": {"BillingMode": "PAY_PER_REQUEST"},
        }
    }


def stub_exists(stubber: Stubber, name: str) -> None:
    stubber.add_response("describe_table", table_description(name), {"TableName": name})


def stub_missing(stubber: Stubber, name: str) -> None:
    stubber.add_client_error(
        "describe_table",
        service_error_code="ResourceNotFoundException",
        service_message=f"Requested resource not found: Table: {name} not found",
        http_status_code=400,
        expected_params={"TableName": name},
    )


def stub_batch_write(stubber: Stubber, name: str, items: list) -> None:
    stubber.add_response(
        "batch_write_item",
        {"UnprocessedItems": {}},
        {"RequestItems": {name: [{"PutRequest": {"Item": item}} for item in items]}},
    )


@pytest.fixture
def source():
    return make_client()


@pytest.fixture
def target():
    return make_client()


@pytest.fixture
def source_stub(source):
    with Stubber(source) as stubber:
        yield stubber


@pytest.fixture
def target_stub(target):
    with Stubber(target) as stubber:
        yield stubber
