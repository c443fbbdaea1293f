"""
AppWatch: a single-process supervisor.

Launches one managed command, polls its HTTP health endpoint on a fixed
interval and restarts it when the probe keeps failing or the process dies.
"""

__version__ = "0.1.0"
