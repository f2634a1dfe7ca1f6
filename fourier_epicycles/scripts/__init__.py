"""Scriptable entry points: coefficient export/import and the command-line tool."""
