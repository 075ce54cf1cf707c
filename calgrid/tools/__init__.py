"""calgrid.tools package

Command-line helpers around the engine (month grid, stats).

Keep this package's __init__ free of eager imports so `python -m
calgrid.tools.<name>` has no import-time side effects.
"""

__all__: list[str] = []
