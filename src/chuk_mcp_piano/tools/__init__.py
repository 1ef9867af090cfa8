"""
MCP tool implementations.

Tools are organized by domain:
- theory - Notes, scales, chords, arpeggios, harmony, progressions and chord detection
- practice - Exercise generation and export
"""

from chuk_mcp_piano.tools.practice import register_practice_tools
from chuk_mcp_piano.tools.theory import register_theory_tools

__all__ = [
    "register_practice_tools",
    "register_theory_tools",
]
