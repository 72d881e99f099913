"""
Task subsystem.

Components:
- task_models.py: data structures (Task, ResolvedDueFields, DueUpdateRequest, RemoteTask)
- task_store.py: SQLite-backed local mirror + the atomic due-field update
- task_manager.py: background loop that runs due updates off the console thread
"""
