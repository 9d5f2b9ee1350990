from dependency_injector import containers, providers

from snipertrack.accounting.sniper_engine import SniperEngine
from snipertrack.config import Settings
from snipertrack.db.session import build_engine, build_session_factory


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["snipertrack.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    sniper_engine = providers.Singleton(
        SniperEngine,
        params=settings.provided.detection_params.call(),
        max_workers=settings.provided.ledger_workers,
    )
