import sys

from branch_notes.cli import main

sys.exit(main())
