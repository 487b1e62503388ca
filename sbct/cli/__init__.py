"""SBCT command-line interface."""
