"""Rooms that cleaning robots are sent to."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Room:
    """A room in the building.

    A room built with no arguments is the empty placeholder that a robot
    holds while it has no task.
    """

    room_number: int = 0
    room_size: str = ""
    floor_type: str = ""
    availability: str = ""