# main.py
import sys

from osm_router.cli import main

if __name__ == "__main__":
    sys.exit(main())
