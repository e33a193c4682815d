"""A small demonstration that writes a task to the store and cleans up."""

from __future__ import annotations

import argparse
import logging
import sys

from cleanbots.adapters.base import Adapter, TaskConflictError
from cleanbots.adapters.mongo_adapter import MongoAdapter
from cleanbots.adapters.robot_store import DEFAULT_DB_NAME, DEFAULT_URI
from cleanbots.robot import Robot
from cleanbots.room import Room

logger = logging.getLogger(__name__)


def run_demo(adapter: Adapter) -> Robot:
    """Start a task for a sample robot, then remove all robots.

    Returns the sample robot. Raises TaskConflictError if the robot or its
    room is already busy.
    """
    print("First make a robot: ")
    robot = Robot(18, "Large", 50, 100, "", "Ongoing", Room(3), "Scrub", 0)
    logger.info("Connected to the mongodb!")
    adapter.write_task(robot)
    adapter.delete_all_robots()
    return robot


def main(argv: list[str] | None = None) -> int:
    """Run the demonstration against a MongoDB server."""
    parser = argparse.ArgumentParser(
        prog="cleanbots", description="Write a sample cleaning task to MongoDB."
    )
    parser.add_argument("--uri", default=DEFAULT_URI, help="MongoDB connection URI")
    parser.add_argument("--db", default=DEFAULT_DB_NAME, help="database name")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    adapter = MongoAdapter(uri=args.uri, db_name=args.db)
    try:
        run_demo(adapter)
    except TaskConflictError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())