"""
Task subsystem.

Components:
- errors.py: error taxonomy (domain + storage)
- task_models.py: data structures (Task, TaskStats, TaskSnapshot)
- task_store.py: in-memory ordered task list with the id counter
- task_file.py: JSON load/save of the full store state
"""
