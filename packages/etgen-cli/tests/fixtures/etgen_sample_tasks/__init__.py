"""Sample decorated classes used as discovery input in tests."""

from etgen_sample_tasks.http import HttpTasks

__all__ = ["HttpTasks"]
