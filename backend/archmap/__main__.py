import sys

from archmap.cli import main

sys.exit(main())
