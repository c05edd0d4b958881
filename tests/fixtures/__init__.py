"""Test doubles for the failover client (see fakes.py)."""
