import sys

from catalog_client.cli import main

sys.exit(main())
