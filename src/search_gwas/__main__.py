import sys

from search_gwas.cli import main

if __name__ == "__main__":
    sys.exit(main())
