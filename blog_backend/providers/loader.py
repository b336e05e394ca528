"""Entity loader / visibility gate shared by every data provider."""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar, Union

from blog_backend.db.models import Entity
from blog_backend.exceptions import NoSuchEntityError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class EntityRepository(Protocol[E]):
    def create(self) -> E: ...

    def load(self, entity: E, value: Union[int, str]) -> E: ...


def load_active(repository: EntityRepository[E], entity_id: Union[int, str]) -> E:
    """Load *entity_id* and return it only if it is publicly visible.

    Raises:
        NoSuchEntityError: If no row matches or the entity is inactive.
    """
    entity = repository.create()
    repository.load(entity, entity_id)
    if not entity.is_active:
        raise NoSuchEntityError(entity.entity_type, entity_id)
    logger.debug("loaded %s %r", entity.entity_type, entity_id)
    return entity
