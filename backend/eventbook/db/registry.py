"""
Registry of document model definitions keyed by entity name.

Model modules register through ``get_or_register`` so that importing or
reloading them twice in one process (e.g. under ``uvicorn --reload`` or
``importlib.reload``) hands back the definition registered first instead
of failing on a duplicate name.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from eventbook.core.exceptions import DuplicateModelError
from eventbook.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IndexSpec:
    keys: tuple[tuple[str, int], ...]
    name: Optional[str] = None

    @property
    def index_name(self) -> str:
        # Same naming scheme as the server's default, e.g. "eventId_1"
        return self.name or "_".join(f"{k}_{d}" for k, d in self.keys)


@dataclass(frozen=True)
class ModelDefinition:
    name: str
    collection: str
    document: type
    indexes: tuple[IndexSpec, ...] = field(default_factory=tuple)


class ModelRegistry:
    def __init__(self):
        self._models: dict[str, ModelDefinition] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._models

    def get(self, name: str) -> Optional[ModelDefinition]:
        return self._models.get(name)

    def register(self, definition: ModelDefinition) -> ModelDefinition:
        """Register a new definition. Raises DuplicateModelError if taken."""
        if definition.name in self._models:
            raise DuplicateModelError(definition.name)
        self._models[definition.name] = definition
        return definition

    def get_or_register(
        self, name: str, factory: Callable[[], ModelDefinition]
    ) -> ModelDefinition:
        """Return the definition registered under ``name``, defining it on first use."""
        existing = self._models.get(name)
        if existing is not None:
            logger.debug("model_reused", model=name)
            return existing
        return self.register(factory())

    def definitions(self) -> list[ModelDefinition]:
        return list(self._models.values())


registry = ModelRegistry()


async def ensure_indexes(db: AsyncIOMotorDatabase, models: Optional[ModelRegistry] = None) -> None:
    """Create the declared indexes of every registered model."""
    if models is None:
        models = registry
    created = []
    for definition in models.definitions():
        for index in definition.indexes:
            await db[definition.collection].create_index(
                list(index.keys), name=index.index_name
            )
            created.append(f"{definition.collection}.{index.index_name}")
    logger.info("indexes_ensured", indexes=created)
