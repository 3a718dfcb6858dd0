"""Health probe adapters for infrastructure dependencies."""

from presida.adapters.health.postgres import PostgresHealthProbe

__all__ = ["PostgresHealthProbe"]
