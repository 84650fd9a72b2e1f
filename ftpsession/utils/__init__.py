"""Utility module for ftpsession.

This module provides cross-cutting utilities:
- Logging: Configured logging with secret redaction
- Validators: Input validation for host and port
"""
