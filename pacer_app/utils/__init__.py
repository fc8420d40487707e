"""
Utility functions module.

Common helpers for time-of-day handling shared across the system.

Time Semantics:
- Session boundaries and the pacing clock are times of day, not datetimes
- The caller always supplies "now"; the core never samples the wall clock
- Only outer adapters (scripts, examples) call current_time_of_day()
"""
