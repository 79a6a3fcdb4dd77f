"""Shared utilities: constants, environment loading and logging setup."""
