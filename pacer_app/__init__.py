"""
Execution Pacer - Order Scheduling and Pacing Engine

Paces the execution of a large order across a trading session: builds a
per-interval execution plan (time-sliced or participation-of-volume), tracks
live progress against it, and scores fills against market VWAP.
"""

__version__ = "0.1.0"
__author__ = "Execution Desk Tools"
