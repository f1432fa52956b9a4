"""Test suite for auditaspect.

Test structure:
- unit/: Unit tests - one component at a time, collaborators mocked
- integration/: Integration tests - weaver, dispatcher, registry and handlers
  wired together
- utils/: Handler test doubles shared by both suites
"""
