"""Shared utilities for jtd-validate."""
