"""Imports cleanly without declaring any module."""
