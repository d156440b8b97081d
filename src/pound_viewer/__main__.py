import sys

from pound_viewer.cli import main

sys.exit(main())
