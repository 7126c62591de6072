import sys

from s3du.cli import main

if __name__ == "__main__":
    sys.exit(main())
