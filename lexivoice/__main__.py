"""Module entrypoint for running Lexivoice as ``python -m lexivoice``."""

from __future__ import annotations

from lexivoice.cli import main


if __name__ == "__main__":
    main()
