"""In-memory zoo registry."""

import logging
from threading import Lock
from typing import Iterable

from helixgate.engine.errors import AnimalNotFound
from helixgate.models import Animal, AnimalCreate

logger = logging.getLogger("helixgate.registry")


class AnimalRegistry:
    """
    Process-local animal store.

    The mapping and the id counter share one lock. Ids start at 1 and only
    grow; an update that inserts an unseen id moves the counter past it.
    Stored animals are never handed out; callers get copies.
    """

    def __init__(self, initial: Iterable[Animal] = ()):
        self._lock = Lock()
        self._animals: dict[int, Animal] = {}
        self._next_id = 1
        for animal in initial:
            self._put(animal.model_copy())

    def _put(self, animal: Animal) -> None:
        self._animals[animal.id] = animal
        if animal.id >= self._next_id:
            self._next_id = animal.id + 1

    def create(self, data: AnimalCreate) -> Animal:
        with self._lock:
            animal = Animal(id=self._next_id, type=data.type, name=data.name)
            self._put(animal)
        logger.debug("Created animal %s", animal.id)
        return animal.model_copy()

    def get(self, animal_id: int) -> Animal:
        with self._lock:
            animal = self._animals.get(animal_id)
        if animal is None:
            raise AnimalNotFound(animal_id)
        return animal.model_copy()

    def list_animals(self) -> list[Animal]:
        with self._lock:
            return [self._animals[key].model_copy() for key in sorted(self._animals)]

    def update(self, animal: Animal) -> Animal:
        """Replace the animal stored under ``animal.id``, inserting it if absent."""
        with self._lock:
            inserted = animal.id not in self._animals
            self._put(animal.model_copy())
        if inserted:
            logger.info("Update inserted previously unknown animal %s", animal.id)
        return animal

    def delete(self, animal_id: int) -> Animal:
        with self._lock:
            animal = self._animals.pop(animal_id, None)
        if animal is None:
            raise AnimalNotFound(animal_id)
        logger.debug("Deleted animal %s", animal_id)
        return animal


registry = AnimalRegistry()
