"""Depot sales entry service."""
