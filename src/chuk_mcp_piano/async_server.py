#!/usr/bin/env python3
"""
Async Piano MCP Server using chuk-mcp-server

This server provides MCP tools for piano practice material. Everything is
generated deterministically from music theory rules; nothing is stored.

The server provides tools for:
- Note and MIDI number conversion
- Scales in eight modes, chords in eleven qualities with inversions
- Arpeggios over one or two octaves
- Diatonic harmony and per-key inversion walks
- Named chord progressions and the circle of fifths
- Naming the chord formed by a set of held notes
- Practice exercise generation and export (JSON, YAML, MIDI)
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_piano.tools import register_practice_tools, register_theory_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-piano")

# Register all tools
theory_tools = register_theory_tools(mcp)
practice_tools = register_practice_tools(mcp)

# Export tool functions for direct access
piano_note_info = theory_tools["piano_note_info"]
piano_get_scale = theory_tools["piano_get_scale"]
piano_get_chord = theory_tools["piano_get_chord"]
piano_get_arpeggio = theory_tools["piano_get_arpeggio"]
piano_get_diatonic_chords = theory_tools["piano_get_diatonic_chords"]
piano_get_key_progression = theory_tools["piano_get_key_progression"]
piano_circle_of_fifths = theory_tools["piano_circle_of_fifths"]
piano_list_progressions = theory_tools["piano_list_progressions"]
piano_detect_chord = theory_tools["piano_detect_chord"]

piano_create_exercise = practice_tools["piano_create_exercise"]
piano_export_exercise = practice_tools["piano_export_exercise"]

logger.info("CHUK Piano MCP Server initialized")
logger.info(f"  Tools: {len(theory_tools) + len(practice_tools)}")
