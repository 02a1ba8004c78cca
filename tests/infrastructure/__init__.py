"""
Unified test infrastructure for nodetpl.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Utilities for running the CLI
"""

from .file_utils import write, write_document
from .cli_utils import run_cli, jload

__all__ = ["write", "write_document", "run_cli", "jload"]
