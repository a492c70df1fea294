#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/utils/__init__.py
"""Shared helpers for dependency checks and timing."""
