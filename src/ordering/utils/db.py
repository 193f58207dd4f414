"""Schema management for the ordering domain.

Two stores are involved: the Protean provider that persists orders and
projections, and the catalog database holding the ``medicines`` stock table.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

from ordering.stock import get_stock_store

logger = structlog.get_logger(__name__)

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _load_models(domain: Domain, provider_name: str):
    # Accessing _dao registers each record class with the provider's SQLAlchemy metadata
    records = [
        *domain.registry.aggregates.values(),
        *domain.registry.entities.values(),
        *domain.registry.projections.values(),
    ]
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create order tables and the medicines stock table."""
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                _load_models(domain, name)
                provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
                logger.info("Created order tables", provider=name)

        store = get_stock_store()
        store.create_schema()
        logger.info("Created medicines table", url=str(store.engine.url))


def drop_db(domain: Domain):
    """Drop order tables and the medicines stock table."""
    with domain.domain_context():
        for name, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
                logger.info("Dropped order tables", provider=name)

        get_stock_store().drop_schema()
