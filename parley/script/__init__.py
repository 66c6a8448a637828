"""
Script module - parsing and sequencing of dialog statements.

Provides:
- Statement parsing (commands, speaker, expression, text)
- Command dispatch
- Label sequencing
- Text script files
"""

from parley.script.registry import CharacterRegistry
from parley.script.commands import CommandDispatcher
from parley.script.parser import StatementParser
from parley.script.sequencer import ScriptSequencer, SequenceState
from parley.script.session import DialogSession
from parley.script.loader import ScriptFileParser, compile_script_file

__all__ = [
    "CharacterRegistry",
    "CommandDispatcher",
    "StatementParser",
    "ScriptSequencer",
    "SequenceState",
    "DialogSession",
    "ScriptFileParser",
    "compile_script_file",
]
