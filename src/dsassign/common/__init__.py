"""Shared helpers that are independent of the assignment domain."""
