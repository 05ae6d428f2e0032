"""Tools module for dot-chain parsing, expansion, completion and execution."""

from dotcmd.tools.completion import CompletionCycler, CompletionEngine
from dotcmd.tools.executor import expand_and_run, execute_command
from dotcmd.tools.expander import Expander, expand_only
from dotcmd.tools.parser import ParsedChain, is_dot_notation, parse_chain
from dotcmd.tools.registry import register_tools

__all__ = [
    "CompletionCycler",
    "CompletionEngine",
    "Expander",
    "ParsedChain",
    "execute_command",
    "expand_and_run",
    "expand_only",
    "is_dot_notation",
    "parse_chain",
    "register_tools",
]
