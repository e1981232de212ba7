"""gostress CLI — Typer-based command-line interface.

Provides the ``gostress`` command with subcommands for running ``go test``
repeatedly and for replaying a captured ``go test -json`` log.
"""
