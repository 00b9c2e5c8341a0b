import sys

from contracheck.cli import main

sys.exit(main())
