"""Cluster secret sync service."""
