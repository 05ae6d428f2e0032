"""Default command mappings and the starter mappings file."""

from __future__ import annotations

from typing import TypeAlias

# A mapping value is either the flags string or {flags, description}
MappingValue: TypeAlias = str | dict[str, str]
MappingTable: TypeAlias = dict[str, dict[str, MappingValue]]

DEFAULT_MAPPINGS: MappingTable = {
    "ls": {
        "all": {"flags": "-a", "description": "Show all files including hidden (. and ..)"},
        "almost": {"flags": "-A", "description": "Show all files except . and .."},
        "hidden": {"flags": "-a", "description": "Alias for ls.all"},
        "long": {"flags": "-l", "description": "Long listing format"},
        "human": {"flags": "-lh", "description": "Long format with human-readable sizes"},
        "color": {"flags": "--color", "description": "Colorized output"},
        "size": {"flags": "-S", "description": "Sort by file size (largest first)"},
        "time": {"flags": "-t", "description": "Sort by modification time (newest first)"},
        "reverse": {"flags": "-r", "description": "Reverse sort order"},
    },
    "git": {
        "status": "status",
        "add": "add .",
        "commit": "commit",
        "push": "push",
        "pull": "pull",
        "fetch": "fetch",
        "log": "log --oneline",
        "graph": "log --oneline --graph",
        "recent": "log --oneline -10",
        "branch": "branch",
        "branches": "branch -a",
        "checkout": "checkout",
        "diff": "diff",
        "staged": "diff --cached",
        "summary": "diff --stat",
    },
    "docker": {
        "ps": "ps",
        "all": "ps -a",
        "running": "ps --filter status=running",
        "stop": "stop",
        "start": "start",
        "restart": "restart",
        "images": "images",
        "pull": "pull",
        "build": "build",
        "rmi": "rmi",
        "clean": "system prune -f",
        "info": "info",
        "version": "version",
    },
    "find": {
        "name": "-name",
        "type": "-type f",
        "dir": "-type d",
        "exec": "-exec",
        "large": "-size +10M",
        "empty": "-empty",
        "recent": "-mtime -1",
        "old": "-mtime +30",
    },
    "grep": {
        "ignore": "-i",
        "recursive": "-r",
        "number": "-n",
        "count": "-c",
        "files": "-l",
        "invert": "-v",
        "word": "-w",
        "extended": "-E",
        "fixed": "-F",
        "context": "-C 3",
        "before": "-B 3",
        "after": "-A 3",
    },
}

DEFAULT_MAPPINGS_FILE: str = """\
# dotcmd user mappings.
#
# Entries here are added to (and override) the bundled defaults.
# Each base command maps option names to flags, either as a plain string
# or as {flags, description}:
#
# ls:
#   tree: -R
#   newest:
#     flags: -l -t
#     description: Long listing, newest first
"""
