"""Command-line interface for parammeta."""
from __future__ import annotations
