import logging

from botocore.exceptions import ClientError

from .errors import CloneCancelledError

logger = logging.getLogger(__name__)

NOT_FOUND = "ResourceNotFoundException"


def describe_table(client, table_name):
    """Return the table description, or None if the table does not exist.

    Any other failure is raised as-is.
    """
    try:
        return client.describe_table(TableName=table_name)["Table"]
    except ClientError as e:
        if e.response["Error"]["Code"] == NOT_FOUND:
            logger.debug("Table %s not found", table_name)
            return None
        raise


def table_exists(client, table_name) -> bool:
    return describe_table(client, table_name) is not None


def wait_for_table(client, table_name, delay=5, max_attempts=60):
    """Block until the table is ACTIVE, using the boto3 ``table_exists`` waiter.

    Raises ``botocore.exceptions.WaiterError`` (a ``BotoCoreError``) when the
    table is not ready after ``max_attempts`` polls.
    """
    logger.info("Waiting for table %s to become active", table_name)
    waiter = client.get_waiter("table_exists")
    waiter.wait(
        TableName=table_name,
        WaiterConfig={"Delay": delay, "MaxAttempts": max_attempts},
    )


def check_cancelled(cancel_event, action):
    if cancel_event is not None and cancel_event.is_set():
        raise CloneCancelledError(f"Cancelled before {action}")
