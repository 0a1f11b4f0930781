"""Serve the student store over HTTP.

The store lives only as long as this process; nothing is written to disk.
"""

import argparse
import logging

import uvicorn

from student_store.app import HOST, PORT, create_app
from student_store.record_store import RecordStore

logger = logging.getLogger("student_store")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the in-memory student store")
    parser.add_argument("--host", default=HOST, help="Bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=PORT, help="Bind port (default: %(default)s)")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    store = RecordStore()
    app = create_app(store)
    logger.info("Serving student store on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
