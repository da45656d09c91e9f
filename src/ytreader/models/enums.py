"""
Enums for ytreader models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum


class UpdateType(str, Enum):
    """Kinds of crawl a worker can be asked to run (the ``-t`` argument)."""

    STANDARD = "standard"
    FULL = "full"
    CHANNELS = "channels"


class Region(str, Enum):
    """Regions worker container groups are placed in, in round-robin order."""

    US_EAST = "eastus"
    US_WEST = "westus"
    US_WEST_2 = "westus2"
    US_EAST_2 = "eastus2"
    US_SOUTH_CENTRAL = "southcentralus"


class ContainerGroupState(str, Enum):
    """States reported for a container group by the cloud API."""

    RUNNING = "Running"
    STOPPED = "Stopped"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    PENDING = "Pending"


class RestartPolicy(str, Enum):
    """Container group restart policies."""

    NEVER = "Never"
    ON_FAILURE = "OnFailure"
    ALWAYS = "Always"


REGIONS: tuple[Region, ...] = tuple(Region)
"""Fixed region list used for fleet placement."""
