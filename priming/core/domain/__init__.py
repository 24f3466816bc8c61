# priming/core/domain/__init__.py
"""
Domain Entities and Value Objects.

Priming value types (Intent, Entity, vocabulary, aggregates, frames) and
the declarations of the recognizer and dialog variants they are computed
from. Devoid of any infrastructure logic.
"""
