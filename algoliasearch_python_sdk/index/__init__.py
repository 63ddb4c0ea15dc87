from algoliasearch_python_sdk.index.async_index import AsyncIndex
from algoliasearch_python_sdk.index.index import Index

__all__ = ["AsyncIndex", "Index"]
