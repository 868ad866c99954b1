import sys

from eta.cli import main

sys.exit(main())
