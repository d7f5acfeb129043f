"""CLI entrypoint for the grid path puzzle generator."""

from __future__ import annotations

from dotpath.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
