"""Public package surface for cfikit.

Exports ``main`` for programmatic CLI invocation. The identifier API lives in
``cfikit.cfi`` and the resize guard in ``cfikit.stabilizer``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
