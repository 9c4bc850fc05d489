"""Workout templates and workout tracking engine."""
