"""The cleaning robot record shared by the simulation and the store."""

from __future__ import annotations

from dataclasses import dataclass, field

from cleanbots.room import Room


@dataclass
class Robot:
    """A cleaning robot together with the state of its current task."""

    robot_id: int
    size: str = ""
    water_level: int = 0
    battery_level: int = 0
    error_status: str = ""
    task_status: str = ""
    task_room: Room = field(default_factory=Room)
    function_type: str = ""
    task_percent: int = 0