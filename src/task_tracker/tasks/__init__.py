"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) + JSON record codec
- task_store.py: JSON-file store with id allocation, queries and rollback-on-failure writes
"""
