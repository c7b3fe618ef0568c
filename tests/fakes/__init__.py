"""Test doubles: a small employee/user domain resolved through the broker."""
