import sys

from psd_import.cli import main

sys.exit(main())
