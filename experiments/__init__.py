"""Replication, scenario comparison and capacity sweep harnesses."""
