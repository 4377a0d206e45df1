"""Populate the record store with demo records."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from timeledger.db.seed import main

if __name__ == "__main__":
    asyncio.run(main())
