"""
Persistence client implementations (infra adapters).

NOTE: Import adapters directly from their module, e.g.
`from infra.persistence.sqlalchemy_client import SqlAlchemyClient`.
"""

__all__ = []
