import sys

from pyfullerene.cli import main

raise SystemExit(main(["serve", *sys.argv[1:]]))
