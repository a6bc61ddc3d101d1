import argparse
import logging
import os
import signal
import sys
import threading

from botocore.exceptions import BotoCoreError, ClientError

from .config import create_client, load_settings
from .content import clone_content
from .errors import CloneCancelledError, CloneError
from .schema import duplicate_schema
from .tables import wait_for_table

logger = logging.getLogger(__name__)


def do_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="dynamodb-clone",
        description="Clone a DynamoDB table's schema, and optionally its items, to another table",
    )
    parser.add_argument("table_name", help="Source table name")
    parser.add_argument("--target-table-name", help="Target table name (defaults to the source name)")
    parser.add_argument("--settings-file", help="JSON file with Source and Target sections")
    parser.add_argument("--clone-content", help="Copy the items as well as the schema", action="store_true")
    parser.add_argument("--wait", help="Wait for a newly created target table to become active", action="store_true")
    parser.add_argument("--debug", help="print debugging info", action="store_true")
    return parser.parse_args(argv)


def run(args, source, target, cancel_event=None):
    target_table_name = args.target_table_name or args.table_name
    clone = args.clone_content and "DISABLE_DATACOPY" not in os.environ

    print(f"Copying {args.table_name} into table {target_table_name}")
    created = duplicate_schema(source, target, args.table_name, target_table_name, cancel_event)
    if created and (clone or args.wait):
        wait_for_table(target, target_table_name)

    if clone:
        print(f"Cloning {args.table_name} content into table {target_table_name}")
        count = clone_content(source, target, args.table_name, target_table_name, cancel_event)
        print(f"Data copy completed successfully. {count} items copied.")


def install_interrupt_handler(cancel_event):
    """First Ctrl-C asks the running operation to stop at its next remote call;
    a second one interrupts immediately. Returns the previous handler."""

    def handler(signum, frame):
        if cancel_event.is_set():
            raise KeyboardInterrupt
        print("Cancelling after the current request (Ctrl-C again to abort)...", file=sys.stderr)
        cancel_event.set()

    return signal.signal(signal.SIGINT, handler)


def main(argv=None):
    args = do_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    target_table_name = args.target_table_name or args.table_name
    cancel_event = threading.Event()
    previous_handler = install_interrupt_handler(cancel_event)

    try:
        source_config, target_config = load_settings(args.settings_file)
        source = create_client(source_config)
        target = create_client(target_config)
        run(args, source, target, cancel_event)
    except KeyboardInterrupt:
        print("Interrupted. Target table may be partially written.", file=sys.stderr)
        return 130
    except CloneCancelledError as e:
        print(f"Cancelled ({args.table_name} -> {target_table_name}): {e}", file=sys.stderr)
        return 130
    except (CloneError, ClientError, BotoCoreError) as e:
        print(f"Error cloning {args.table_name} into {target_table_name}: {e}", file=sys.stderr)
        return 1
    finally:
        signal.signal(signal.SIGINT, previous_handler)
    return 0


if __name__ == "__main__":
    sys.exit(main())
