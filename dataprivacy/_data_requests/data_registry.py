"""Data registry: processing purposes, data categories and their assignment to contexts."""

import copy
import time
from dataclasses import replace
from typing import List, Type

from dataprivacy.exceptions import DataRegistryError, PermissionDeniedError
from dataprivacy.logging_config import logger

from .models import Category, ContextInstance, Purpose
from .protocol import E, DataRegistryStore, OfficerDirectory


class DataRegistryService:
    """
    Manages purposes and categories and assigns them to contexts.

    Every operation, reads included, requires the acting user to hold the
    capability to manage the data registry.

    Example:
        service = DataRegistryService(InMemoryDataRegistryStore(), directory)
        purpose = service.create_purpose(Purpose(name="Teaching", retention_period=3600), actor_id=2)
        category = service.create_category(Category(name="Grades"), actor_id=2)
        service.set_context_instance(ContextInstance(context_id=40, purpose_id=purpose.id,
                                                     category_id=category.id), actor_id=2)
    """

    def __init__(self, store: DataRegistryStore, directory: OfficerDirectory) -> None:
        self.store = store
        self.directory = directory

    def can_manage_data_registry(self, user_id: int) -> bool:
        return self.directory.has_manage_capability(user_id)

    def _require_manager(self, actor_id: int) -> None:
        if not self.can_manage_data_registry(actor_id):
            raise PermissionDeniedError(f"User {actor_id} may not manage the data registry")

    def _get(self, kind: Type[E], entity_id: int) -> E:
        entity = self.store.get(kind, entity_id)
        if entity is None:
            raise DataRegistryError(f"{kind.__name__} {entity_id} not found")
        return entity

    def _insert(self, entity: E, actor_id: int) -> E:
        entity = copy.copy(entity)
        entity.id = 0
        entity.user_modified = actor_id
        entity.time_created = entity.time_modified = int(time.time())
        return self.store.save(entity)

    def _update(self, entity: E, actor_id: int) -> E:
        current = self._get(type(entity), entity.id)
        entity = copy.copy(entity)
        entity.time_created = current.time_created
        entity.user_modified = actor_id
        entity.time_modified = int(time.time())
        return self.store.save(entity)

    # Purposes

    def create_purpose(self, purpose: Purpose, actor_id: int) -> Purpose:
        """
        Save a new purpose.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
        """
        self._require_manager(actor_id)
        purpose = self._insert(purpose, actor_id)
        logger.info(f"Created purpose {purpose.id} '{purpose.name}'")
        return purpose

    def get_purposes(self, actor_id: int) -> List[Purpose]:
        """Return all purposes sorted by name."""
        self._require_manager(actor_id)
        return sorted(self.store.list(Purpose), key=lambda p: (p.name, p.id))

    def update_purpose(self, purpose: Purpose, actor_id: int) -> Purpose:
        """
        Save changes to an existing purpose.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
            DataRegistryError: If the purpose does not exist
        """
        self._require_manager(actor_id)
        return self._update(purpose, actor_id)

    def delete_purpose(self, purpose_id: int, actor_id: int) -> bool:
        """
        Delete a purpose that no context uses.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
            DataRegistryError: If the purpose does not exist or is assigned to a context
        """
        self._require_manager(actor_id)
        self._get(Purpose, purpose_id)
        if any(i.purpose_id == purpose_id for i in self.store.list(ContextInstance)):
            raise DataRegistryError(f"Purpose {purpose_id} is assigned to a context")
        self.store.delete(Purpose, purpose_id)
        logger.info(f"Deleted purpose {purpose_id}")
        return True

    # Categories

    def create_category(self, category: Category, actor_id: int) -> Category:
        """
        Save a new category.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
        """
        self._require_manager(actor_id)
        category = self._insert(category, actor_id)
        logger.info(f"Created category {category.id} '{category.name}'")
        return category

    def get_categories(self, actor_id: int) -> List[Category]:
        """Return all categories sorted by name."""
        self._require_manager(actor_id)
        return sorted(self.store.list(Category), key=lambda c: (c.name, c.id))

    def update_category(self, category: Category, actor_id: int) -> Category:
        self._require_manager(actor_id)
        return self._update(category, actor_id)

    def delete_category(self, category_id: int, actor_id: int) -> bool:
        """
        Delete a category that no context uses.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
            DataRegistryError: If the category does not exist or is assigned to a context
        """
        self._require_manager(actor_id)
        self._get(Category, category_id)
        if any(i.category_id == category_id for i in self.store.list(ContextInstance)):
            raise DataRegistryError(f"Category {category_id} is assigned to a context")
        self.store.delete(Category, category_id)
        logger.info(f"Deleted category {category_id}")
        return True

    # Context instances

    def get_context_instances(self, actor_id: int) -> List[ContextInstance]:
        self._require_manager(actor_id)
        return self.store.list(ContextInstance)

    def set_context_instance(self, instance: ContextInstance, actor_id: int) -> ContextInstance:
        """
        Assign a purpose and category to a context.

        Replaces the context's existing assignment, if any.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
            DataRegistryError: If the purpose or category does not exist
        """
        self._require_manager(actor_id)
        self._get(Purpose, instance.purpose_id)
        self._get(Category, instance.category_id)

        existing = next(
            (i for i in self.store.list(ContextInstance) if i.context_id == instance.context_id),
            None,
        )
        if existing is None:
            instance = self._insert(instance, actor_id)
        else:
            instance = self._update(replace(instance, id=existing.id), actor_id)
        logger.debug(
            f"Context {instance.context_id} -> purpose {instance.purpose_id}, category {instance.category_id}"
        )
        return instance

    def unset_context_instance(self, instance: ContextInstance, actor_id: int) -> bool:
        """
        Remove a context's assignment.

        Raises:
            PermissionDeniedError: If the actor may not manage the data registry
            DataRegistryError: If the instance does not exist
        """
        self._require_manager(actor_id)
        if not self.store.delete(ContextInstance, instance.id):
            raise DataRegistryError(f"ContextInstance {instance.id} not found")
        logger.debug(f"Context {instance.context_id} assignment removed")
        return True
