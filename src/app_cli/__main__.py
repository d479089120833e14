import sys

from src.app_cli.main import main

sys.exit(main())
