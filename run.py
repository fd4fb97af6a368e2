import sys

from visual_colors.cli import main

if __name__ == "__main__":
    sys.exit(main())
