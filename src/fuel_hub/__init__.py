"""Athlete nutrition targets, readiness ledger and AI coaching."""
