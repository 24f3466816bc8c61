# priming/adapters/__init__.py
"""
Infrastructure Adapters.

Concrete implementations of the core ports, plus the declarative loader
that turns `$kind` JSON resources into recognizer and dialog models.
"""
