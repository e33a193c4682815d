"""An in-memory collection of robots keyed by id."""

from __future__ import annotations

from collections.abc import Iterator

from cleanbots.robot import Robot


class RobotManager:
    """Holds the robots that the simulation works on, in insertion order."""

    def __init__(self) -> None:
        self.robots: list[Robot] = []

    def add_robot(self, robot: Robot) -> None:
        """Add a robot to the end of the list."""
        self.robots.append(robot)

    def find_robot_by_id(self, robot_id: int) -> Robot:
        """Return the first robot with this id; raise LookupError if none."""
        for robot in self.robots:
            if robot.robot_id == robot_id:
                return robot
        raise LookupError(f"Robot with ID {robot_id} not found.")

    def remove_robot_by_id(self, robot_id: int) -> bool:
        """Remove every robot with this id; return whether any was removed."""
        kept = [robot for robot in self.robots if robot.robot_id != robot_id]
        removed = len(kept) != len(self.robots)
        self.robots[:] = kept
        return removed

    def __len__(self) -> int:
        return len(self.robots)

    def __iter__(self) -> Iterator[Robot]:
        return iter(self.robots)