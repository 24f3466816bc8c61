# priming/core/__init__.py
"""
Core Domain Layer.

Pure priming logic: value types, merge algebra, describers and the
turn-scoped context stack.
- No dependencies on the dialog engine or on the speech channel.
- Defines Interfaces (Ports) that the Infrastructure layer must implement.
"""
