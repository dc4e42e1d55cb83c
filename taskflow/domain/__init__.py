"""Domain layer for taskflow.

Pure models and functions, no I/O:

- shared: Result type and DomainEvent base
- types: Weekday / ClockTime value objects and date helpers
- task: task snapshots, forest building, view filters
- schedule: weekly schedule blocks
- calendar: recurrence expansion and calendar synthesis
- notification: derived alerts, settings and delivery records
"""
