"""Allow running with: python -m pyfullerene

Delegates to the command-line driver in :mod:`pyfullerene.cli`.
"""
from pyfullerene.cli import main

raise SystemExit(main())
