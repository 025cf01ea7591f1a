"""Public package surface for marcos.

Exports ``main`` for programmatic CLI invocation.
Navigation primitives live in ``marcos.view``, ``marcos.tab`` and
``marcos.registry``; the interactive loop lives in ``marcos.runtime``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
