import sys

from .terminal import run

if __name__ == "__main__":
    sys.exit(run())
