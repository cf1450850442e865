from ean.pool.population import Population

__all__ = ['Population']
