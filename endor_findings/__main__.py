import sys

from endor_findings.cli import main

if __name__ == "__main__":
    sys.exit(main())
