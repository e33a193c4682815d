"""The cleaning simulation: resource use, failures and the task loop."""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Iterable

from cleanbots.robot import Robot

_TASK_DURATION = {"Small": 2, "Medium": 4, "Large": 6}
_RESOURCE_USAGE = {"Small": 1, "Medium": 4, "Large": 9}
_CAPACITY = {"Small": 100, "Medium": 120}
_LARGE_CAPACITY = 140

# Each failure is tried in turn with a chance of probability out of 1000.
_FAILURES = (("Overheat", 1), ("Motor Failure", 1), ("Sensor Failure", 1))

_REFILL_STEP = 10
_PROGRESS_STEP = 10


def calculate_task_duration(room_size: str) -> int:
    """Seconds one tenth of a task takes in a room of this size."""
    return _TASK_DURATION.get(room_size, 0)


def get_resource_usage(room_size: str) -> int:
    """Water and battery used by one tenth of a task in a room of this size."""
    return _RESOURCE_USAGE.get(room_size, 0)


def check_robot(robot: Robot) -> bool:
    """Whether the robot has enough water and battery to finish its task."""
    remaining_chunks = int((100 - robot.task_percent) / 10)
    needed = get_resource_usage(robot.task_room.room_size) * remaining_chunks
    return needed <= robot.battery_level and needed <= robot.water_level


def fix(robot: Robot) -> None:
    """Clear a robot's error and make it ready, full and available."""
    if robot.error_status:
        robot.task_status = "Available"
        robot.error_status = ""
        robot.task_percent = 0
        robot.water_level = 100
        robot.battery_level = 100


def calculate_error_status(robot: Robot, rng=None) -> None:
    """Possibly give the robot a random failure, cancelling its task."""
    source = rng if rng is not None else random
    for name, probability in _FAILURES:
        if source.randint(1, 1000) <= probability:
            robot.error_status = name
            robot.task_status = "Cancelled"
            return


def _capacity(size: str) -> int:
    return _CAPACITY.get(size, _LARGE_CAPACITY)


class TaskExecutor:
    """Runs the robot task loop over a shared collection of robots.

    ``robots`` is re-iterated on every tick, so a list or a RobotManager
    can be passed and changed while the loop runs, under ``lock``.
    ``interval`` is the period of the loop in seconds and ``time_scale``
    multiplies how long each task step sleeps.
    """

    def __init__(
        self,
        robots: Iterable[Robot],
        lock: threading.Lock | None = None,
        interval: float = 10.0,
        time_scale: float = 1.0,
        rng=None,
    ) -> None:
        self.robots = robots
        self.lock = lock if lock is not None else threading.Lock()
        self.interval = interval
        self.time_scale = time_scale
        self.rng = rng if rng is not None else random.Random()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def _advance(self, robot_id: int, usage: int, duration: int) -> None:
        time.sleep(duration * self.time_scale)
        with self.lock:
            for robot in self.robots:
                if robot.robot_id == robot_id:
                    robot.water_level -= usage
                    robot.battery_level -= usage
                    robot.task_percent += _PROGRESS_STEP
                    if robot.task_percent >= 100:
                        robot.task_status = "Complete"
                    calculate_error_status(robot, self.rng)
                    break

    def _step(self, robot: Robot, workers: dict[int, threading.Thread]) -> None:
        status = robot.task_status
        healthy = not robot.error_status

        if status in ("Cancelled", "Complete") and healthy:
            robot.task_status = "Available"
            robot.task_percent = 0
            robot.task_room.availability = "Available"
            return

        if status == "Ongoing" and not check_robot(robot):
            robot.task_status = "Cancelled"
            return

        if status == "Available" and healthy and robot.task_percent == 0:
            limit = _capacity(robot.size)
            robot.water_level = min(robot.water_level + _REFILL_STEP, limit)
            robot.battery_level = min(robot.battery_level + _REFILL_STEP, limit)
            return

        if robot.task_percent < 100 and status == "Ongoing" and healthy:
            if robot.robot_id not in workers:
                room_size = robot.task_room.room_size
                worker = threading.Thread(
                    target=self._advance,
                    args=(
                        robot.robot_id,
                        get_resource_usage(room_size),
                        calculate_task_duration(room_size),
                    ),
                    daemon=True,
                )
                workers[robot.robot_id] = worker
                worker.start()
            return

        if robot.task_percent == 100 and status == "Ongoing":
            robot.task_status = "Complete"

    def tick(self) -> None:
        """Run one pass of the loop and wait for its task steps to finish."""
        workers: dict[int, threading.Thread] = {}
        with self.lock:
            for robot in self.robots:
                self._step(robot, workers)
        for worker in workers.values():
            worker.join()

    def _run(self) -> None:
        while not self._stop.is_set():
            started = time.monotonic()
            self.tick()
            remaining = self.interval - (time.monotonic() - started)
            if remaining > 0 and self._stop.wait(remaining):
                break

    def start(self) -> None:
        """Start the loop in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Ask the loop to end and wait for its thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None