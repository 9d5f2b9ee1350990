from datetime import timedelta
from decimal import Decimal

from pydantic_settings import BaseSettings

from snipertrack.domain.models.sniper import DetectionParams


class Settings(BaseSettings):
    app_name: str = "SniperTrack"
    app_version: str = "0.1.0"

    db_host: str = "localhost"
    db_port: int = 54377
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "snipertrack"
    debug: bool = True

    # Sniper heuristics
    chunk_volume_threshold: Decimal = Decimal("100000")
    chunk_window_minutes: int = 10
    fee_threshold: Decimal = Decimal("0.000002")
    launch_grace_blocks: int = 100
    quick_exit_minutes: int = 20
    ledger_workers: int = 1  # >1 replays sniper wallets on a thread pool
    scan_concurrency: int = 4  # tokens analysed at once by the global scan

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    def detection_params(self) -> DetectionParams:
        return DetectionParams(
            chunk_volume_threshold=self.chunk_volume_threshold,
            chunk_window=timedelta(minutes=self.chunk_window_minutes),
            fee_threshold=self.fee_threshold,
            launch_grace_blocks=self.launch_grace_blocks,
            quick_exit_window=timedelta(minutes=self.quick_exit_minutes),
        )

    class Config:
        env_file = ".env"


settings = Settings()
