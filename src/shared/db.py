"""Schema management for Protean-backed domains."""

from protean.domain import Domain
from sqlalchemy import create_engine

RDBMS_PROVIDERS = ("sqlite", "postgresql")


def rdbms_providers(domain: Domain):
    """Providers of the domain that keep their data in SQLAlchemy tables."""
    return [
        provider for provider in domain.providers.values() if provider.conn_info["provider"] in RDBMS_PROVIDERS
    ]


def _register_models(domain: Domain, provider) -> None:
    # Ensure live aggregates and entities are loaded and registered with SQLAlchemy.
    #   Accessing the _dao attribute of the repository forces the database model
    #   to be built and added to the provider's metadata.
    # noqa: B018 is used to suppress the warning about the _dao attribute
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create RDBMS tables for every aggregate and entity of the domain."""
    with domain.domain_context():
        for provider in rdbms_providers(domain):
            _register_models(domain, provider)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain):
    """Drop RDBMS tables of the domain."""
    with domain.domain_context():
        for provider in rdbms_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
