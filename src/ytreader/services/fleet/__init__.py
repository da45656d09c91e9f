"""
Crawl fleet services: batch planning and container group orchestration.
"""

from .batch_planner import batch_name, batch_sizes, plan_batches
from .orchestrator import FleetOrchestrator, run_bounded, worker_args

__all__ = [
    "FleetOrchestrator",
    "batch_name",
    "batch_sizes",
    "plan_batches",
    "run_bounded",
    "worker_args",
]
