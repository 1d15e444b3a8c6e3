"""Public runtime entry point.

``run_editor`` is imported lazily so importing ``tabpad`` does not touch
terminal modules.
"""

from __future__ import annotations


def run_editor(*args, **kwargs):
    """Lazily import the editor entrypoint to avoid terminal imports on package import."""
    from .app import run_editor as _run_editor

    return _run_editor(*args, **kwargs)


__all__ = ["run_editor"]
