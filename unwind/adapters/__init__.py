#!/usr/bin/env python3
"""
unwind Adapters Module

Adapters between the recovery model and external collaborators. Failures
coming from the outside world are translated into classified conditions so
handler chains can match them by kind.

Copyright (C) 2025 Marc Rivero López
Licensed under the GNU General Public License v3.0 (GPLv3)
"""

from .file_system import FileSystemAdapter, WriteHandle, default_file_system

__all__ = [
    "FileSystemAdapter",
    "WriteHandle",
    "default_file_system",
]
