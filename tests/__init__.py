"""
Test Suite for exactmoney

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: Configuration and command-line workflow tests

Test Categories:
- Exact arithmetic and rounding
- Currencies and registries
- Contexts, Money, RationalMoney and allocation
- Formatting and reporting
- Configuration and CLI
"""
