"""
Skill Points Test Suite
=======================

Test Organization
-----------------
- tests/unit/          : Fast unit tests with fakes and mocks (no external dependencies)
- tests/unit/domain/   : Value object validation
- tests/integration/   : Repository tests against an in-memory SQLite engine

Testing Philosophy
------------------
- Unit tests: Fast, isolated, test engine logic
- Integration tests: Exercise real SQL for the reference adapter
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
