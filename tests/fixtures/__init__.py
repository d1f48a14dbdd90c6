"""Importable packages that declare modules at import time."""
