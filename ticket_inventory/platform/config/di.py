"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from ticket_inventory.platform.config.core_setting import Settings
from ticket_inventory.platform.database.orm_db_setting import Database
from ticket_inventory.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import (
    JwtAuth,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (one engine per process; tests override this provider)
    database = providers.Singleton(
        Database,
        db_url=config_service.provided.DATABASE_URL_ASYNC,
    )

    # Unit of Work - new instance (and session) per transaction.
    # Use cases inject `unit_of_work.provider` and call it for each transaction.
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork,
        session_factory=database.provided.session_factory,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
