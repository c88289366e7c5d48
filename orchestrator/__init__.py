"""Wizard state machine that drives the study-aid pipeline."""
