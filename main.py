import sys

from handcontrol.app import main

if __name__ == "__main__":
    sys.exit(main())
