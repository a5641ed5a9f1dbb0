"""Typer + Rich command line for the EiMusic admin console."""
