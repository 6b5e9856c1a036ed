"""
Build driving for ndkbuild.
"""

from .driver import BuildDriver, BuildJob, JobState

__all__ = ["BuildDriver", "BuildJob", "JobState"]
