"""taskflow - calendar, task hierarchy and notification engine.

Derived-state computations for a task and schedule application:
calendar synthesis from tasks and weekly schedules, task forests, due-date
alerts and a notification delivery sink.
"""

__version__ = "1.0.0"
