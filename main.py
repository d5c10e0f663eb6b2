#!/usr/bin/env python3
"""WodTimer — entry point.

Run with:
    python main.py
    python main.py "AMRAP 12 min: 10 burpees"
    python -m wodtimer
"""

from wodtimer.__main__ import main


if __name__ == "__main__":
    main()
