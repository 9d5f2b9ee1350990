from snipertrack.db.repos.swap_repo import SwapRepo
from snipertrack.db.repos.token_repo import TokenRepo

__all__ = ["SwapRepo", "TokenRepo"]
