"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority, TaskPatch, StatsSnapshot)
- task_store.py: SQLite-backed storage + grouped counts
- task_service.py: request validation and error mapping over the store
- task_stats.py: completion statistics from counts or from a task list
"""
