import logging
from itertools import islice

from .errors import SourceTableNotFoundError, TargetTableNotFoundError, UnprocessedItemsError
from .tables import check_cancelled, table_exists

logger = logging.getLogger(__name__)

# Hard limit of a single BatchWriteItem call.
BATCH_SIZE = 25


def chunked(iterable, size):
    """Yield lists of up to ``size`` consecutive elements of ``iterable``."""
    if size < 1:
        raise ValueError("size must be >= 1")
    iterator = iter(iterable)
    while True:
        chunk = list(islice(iterator, size))
        if not chunk:
            return
        yield chunk


def scan_items(client, table_name):
    paginator = client.get_paginator("scan")
    for page in paginator.paginate(TableName=table_name):
        logger.debug("Scanned page of %d items from %s", len(page.get("Items", [])), table_name)
        yield from page.get("Items", [])


def write_batch(client, table_name, items):
    response = client.batch_write_item(
        RequestItems={table_name: [{"PutRequest": {"Item": item}} for item in items]}
    )
    unprocessed = response.get("UnprocessedItems", {}).get(table_name, [])
    if unprocessed:
        raise UnprocessedItemsError(table_name, len(unprocessed))


def clone_content(source, target, source_table_name, target_table_name, cancel_event=None) -> int:
    """Copy every item of the source table into the target table.

    Items are streamed from a paginated scan and written in batches of
    ``BATCH_SIZE``, one batch at a time. A failed batch stops the copy;
    batches already written stay on the target. Returns the number of items
    written.
    """
    if not table_exists(source, source_table_name):
        raise SourceTableNotFoundError(source_table_name)
    if not table_exists(target, target_table_name):
        raise TargetTableNotFoundError(target_table_name)

    check_cancelled(cancel_event, f"scanning {source_table_name}")
    written = 0
    for number, batch in enumerate(chunked(scan_items(source, source_table_name), BATCH_SIZE), start=1):
        check_cancelled(cancel_event, f"writing batch {number} to {target_table_name}")
        write_batch(target, target_table_name, batch)
        written += len(batch)
        logger.debug("Wrote batch %d (%d items) to %s", number, len(batch), target_table_name)

    logger.info("Copied %d items from %s to %s", written, source_table_name, target_table_name)
    return written
