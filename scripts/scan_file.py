"""Run sniper detection over a JSON file of raw swap documents.

Usage:
    PYTHONPATH=src python scripts/scan_file.py swaps.json SYMBOL LAUNCH_BLOCK
"""

import json
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def main() -> None:
    from snipertrack.accounting.sniper_engine import SniperEngine
    from snipertrack.config import settings

    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(2)

    path, symbol, launch_block = Path(sys.argv[1]), sys.argv[2], int(sys.argv[3])
    docs = json.loads(path.read_text())
    if isinstance(docs, dict):
        docs = docs.get("swaps", [])
    if not isinstance(docs, list):
        print(f"{path}: expected a JSON list of swap documents")
        sys.exit(2)

    engine = SniperEngine(settings.detection_params(), max_workers=settings.ledger_workers)
    results = engine.detect(docs, symbol, launch_block)

    print(f"\n{symbol.upper()}: {len(docs)} swaps, launch block {launch_block}, {len(results)} snipers")
    for r in sorted(results, key=lambda r: r.realized_pnl, reverse=True):
        print(
            f"  {r.wallet}  realized={r.realized_pnl}  unrealized={r.unrealized_pnl}"
            f"  left={r.tokens_remaining}  buys={r.buy_count} sells={r.sell_count}"
        )


if __name__ == "__main__":
    main()
