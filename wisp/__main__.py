import sys

from wisp.repl import main

sys.exit(main())
