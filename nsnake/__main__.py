import sys

from .terminal.curses_app import main

sys.exit(main())
