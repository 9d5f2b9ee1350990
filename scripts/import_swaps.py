"""Register a token (if needed) and import raw swap documents from a JSON file.

Usage:
    PYTHONPATH=src python scripts/import_swaps.py swaps.json SYMBOL [GENESIS_BLOCK] [CREATION_BLOCK]
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def main() -> None:
    from snipertrack.config import settings
    from snipertrack.db.repos.swap_repo import SwapRepo
    from snipertrack.db.repos.token_repo import TokenRepo
    from snipertrack.db.session import build_engine, build_session_factory, session_scope

    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)

    path, symbol = Path(sys.argv[1]), sys.argv[2]
    genesis_block = int(sys.argv[3]) if len(sys.argv) > 3 else None
    creation_block = int(sys.argv[4]) if len(sys.argv) > 4 else None
    docs = json.loads(path.read_text())

    engine = build_engine(settings.database_url, echo=False)
    sf = build_session_factory(engine)

    async with session_scope(sf) as session:
        token_repo = TokenRepo(session)
        token = await token_repo.get_by_symbol(symbol)
        if token is None:
            token = await token_repo.create(symbol, block_number=creation_block, genesis_block=genesis_block)
            print(f"Registered token {symbol} (launch block {token.launch_block})")
        count = await SwapRepo(session).import_documents(token.id, docs)
        print(f"Imported {count}/{len(docs)} swaps for {token.symbol}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
