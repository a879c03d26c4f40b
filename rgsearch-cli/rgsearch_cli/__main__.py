import sys

from rgsearch_cli.main import main

sys.exit(main())
