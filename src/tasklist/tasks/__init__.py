"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskList), JSON snapshot codec, id generator
- task_errors.py: error taxonomy (hydration, persistence, reorder)
- task_search.py: search projection and visible-order merging
- task_store.py: canonical list owner with fire-and-forget persistence
"""
