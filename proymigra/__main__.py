# proymigra/__main__.py
# Permite ejecutar `python -m proymigra`
import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
