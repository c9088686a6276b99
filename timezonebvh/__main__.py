import sys

from timezonebvh.command_line import main

if __name__ == "__main__":
    sys.exit(main())
