# tests/__init__.py
"""
Test Suite for Speech Priming.

Organization:
- `core`: Domain models, describers, context stack and the use case, with the speech channel mocked.
- `adapters`: Declarative resource loader and the logging speech channel.
"""
