import logging

from .errors import SourceTableNotFoundError
from .tables import check_cancelled, describe_table, table_exists

logger = logging.getLogger(__name__)

PROVISIONED = "PROVISIONED"
PAY_PER_REQUEST = "PAY_PER_REQUEST"


def _throughput(source):
    # Describe output carries extra fields (NumberOfDecreasesToday, timestamps)
    # that create_table does not accept.
    return {
        "ReadCapacityUnits": source["ReadCapacityUnits"],
        "WriteCapacityUnits": source["WriteCapacityUnits"],
    }


def build_create_table_request(description, target_table_name):
    """Translate a describe_table result into create_table keyword arguments.

    The request is addressed to ``target_table_name``; everything else is
    taken from the source description.
    """
    billing_mode = description.get("BillingModeSummary", {}).get("BillingMode", PROVISIONED)
    provisioned = billing_mode != PAY_PER_REQUEST

    request = {
        "TableName": target_table_name,
        "AttributeDefinitions": description["AttributeDefinitions"],
        "KeySchema": description["KeySchema"],
        "BillingMode": billing_mode,
    }

    if provisioned and description.get("ProvisionedThroughput"):
        request["ProvisionedThroughput"] = _throughput(description["ProvisionedThroughput"])

    global_indexes = []
    for index in description.get("GlobalSecondaryIndexes", []):
        gsi = {
            "IndexName": index["IndexName"],
            "KeySchema": index["KeySchema"],
            "Projection": index["Projection"],
        }
        if provisioned and index.get("ProvisionedThroughput"):
            gsi["ProvisionedThroughput"] = _throughput(index["ProvisionedThroughput"])
        global_indexes.append(gsi)
    if global_indexes:
        request["GlobalSecondaryIndexes"] = global_indexes

    local_indexes = [
        {
            "IndexName": index["IndexName"],
            "KeySchema": index["KeySchema"],
            "Projection": index["Projection"],
        }
        for index in description.get("LocalSecondaryIndexes", [])
    ]
    if local_indexes:
        request["LocalSecondaryIndexes"] = local_indexes

    if "StreamSpecification" in description:
        request["StreamSpecification"] = description["StreamSpecification"]

    return request


def duplicate_schema(source, target, source_table_name, target_table_name, cancel_event=None) -> bool:
    """Create ``target_table_name`` on the target with the source table's schema.

    Returns True if the table was created and False if it already existed.
    Creation is asynchronous on the service; this does not wait for the new
    table to become active.
    """
    description = describe_table(source, source_table_name)
    if description is None:
        raise SourceTableNotFoundError(source_table_name)

    if table_exists(target, target_table_name):
        logger.warning("Table %s already exists. Skipping.", target_table_name)
        return False

    request = build_create_table_request(description, target_table_name)
    check_cancelled(cancel_event, f"creating table {target_table_name}")
    logger.debug("create_table request: %s", request)
    target.create_table(**request)
    logger.info("Requested creation of table %s from %s", target_table_name, source_table_name)
    return True
