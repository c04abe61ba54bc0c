"""Test doubles for the matching service."""
