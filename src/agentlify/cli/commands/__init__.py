"""Agentlify CLI subcommands."""
