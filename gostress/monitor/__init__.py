"""gostress terminal output.

Modules
-------
renderer
    ``StatusLineRenderer`` keeps one carriage-return-overwritten status
    line per test key, prints the trailing failure output and an optional
    Rich summary table.
"""
