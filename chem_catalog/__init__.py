"""
Chemical & Product Safety Catalog

Main modules:
- catalog: Record types, session store, loader
- linking: Chemical/product associations, safety scores, alternatives
- query: Search and sort pipelines for listings
- database: SQLAlchemy storage for persisted collections
- utils: Configuration management
"""

__version__ = "1.0.0"
