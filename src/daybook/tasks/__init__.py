"""
Task subsystem.

Components:
- task_models.py: the Task entity and its completion marker
- dates.py: canonical "M/D/YYYY" date parsing, formatting and sort keys
- task_codec.py: persisted JSON records <-> Task
- task_store.py: ordered collection, sort policy, persistence, change listeners
"""
