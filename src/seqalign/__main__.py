import sys

from seqalign.cli import main_cli

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main_cli())
