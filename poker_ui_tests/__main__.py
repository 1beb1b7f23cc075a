import sys

from poker_ui_tests.cli import main

sys.exit(main())
