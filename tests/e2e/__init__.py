#!/usr/bin/env python3
"""
End-to-end tests for the exactmoney package.

These tests run the exactmoney CLI in a separate Python process, the way a
user invokes it from a shell.
"""
