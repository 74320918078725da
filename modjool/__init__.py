"""
modjool package

This package implements bazel-modjool-gen, a CLI that scaffolds Swift modules in a
Bazel workspace and wires them into the root build file.

Key responsibilities are split across modules:
- `scanner.py`: balanced-delimiter scanning and rule block location
- `mutator.py`: dependency list mutation over a located rule block
- `preview.py`: contextual diff rendering for dry runs
- `sinks.py`: apply/preview side effects (backup, write, patch fallback)
- `engine.py`: read -> locate -> mutate -> persist orchestration for one build file
- `config.py`, `workspace.py`, `renderer.py`, `generator.py`: scaffolding around the engine
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
