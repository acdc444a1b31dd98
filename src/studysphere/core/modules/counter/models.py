"""Auto-incrementing counters for sequential numbering.

Counter documents look like `{"_id": "<counter type>", "seq": <last issued value>}`.
"""

from enum import StrEnum


class CounterType(StrEnum):
    """Entities that use sequential integer ids."""

    USER = "user"
