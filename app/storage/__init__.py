from .base import KeyValueStore, StorageError
from .memory import InMemoryKeyValueStore
from .sql import SqlKeyValueStore
