"""Ejecuta la CLI `conversations` desde un checkout, sin `pip install -e .`.

Uso:
- `python main.py reviews test1 --show-request`
- `python main.py doctor run`
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
