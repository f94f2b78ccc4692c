"""Credential issuing and the per-request auth gates."""
