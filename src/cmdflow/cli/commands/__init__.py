"""Subcommands of the ``cmdflow`` group."""
