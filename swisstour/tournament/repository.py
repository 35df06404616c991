"""
Storage for divisions.

The division workflow talks to storage only through ``DivisionRepository``;
the engine in tournament_core never sees it.
"""

import abc
import logging
from typing import Dict, List, Optional

import reversion
from django.db import DatabaseError, transaction

from swisstour.tournament_core.structure import Division
from swisstour.tournament.db_to_structure import division_to_structure
from swisstour.tournament.structure_to_db import structure_to_db

logger = logging.getLogger(__name__)


class DivisionRepository(abc.ABC):
    @abc.abstractmethod
    def load(self, division_id: str) -> Optional[Division]:
        """Return the stored division, or None if there is none with this id."""

    @abc.abstractmethod
    def save(self, division: Division) -> bool:
        """Store the division, replacing any previous version. Returns success."""

    @abc.abstractmethod
    def delete(self, division_id: str) -> bool:
        """Remove the division. Returns False if it did not exist."""

    @abc.abstractmethod
    def all(self) -> List[Division]:
        """Return every stored division in creation order."""


class InMemoryDivisionRepository(DivisionRepository):
    def __init__(self):
        self._divisions: Dict[str, Division] = {}

    def load(self, division_id):
        return self._divisions.get(division_id)

    def save(self, division):
        self._divisions[division.id] = division
        return True

    def delete(self, division_id):
        return self._divisions.pop(division_id, None) is not None

    def all(self):
        return list(self._divisions.values())


class DjangoDivisionRepository(DivisionRepository):
    """Persists divisions with the Django ORM, keeping a reversion history."""

    def load(self, division_id):
        from swisstour.tournament.models import Division as DivisionModel

        model = DivisionModel.objects.filter(division_id=division_id).first()
        if model is None:
            return None
        return division_to_structure(model)

    def save(self, division, comment="Saved division."):
        try:
            with transaction.atomic():
                with reversion.create_revision():
                    reversion.set_comment(comment)
                    structure_to_db(division)
        except DatabaseError:
            logger.exception("Could not save division %s", division.id)
            return False
        return True

    def delete(self, division_id):
        from swisstour.tournament.models import Division as DivisionModel

        deleted, _ = DivisionModel.objects.filter(division_id=division_id).delete()
        return deleted > 0

    def all(self):
        from swisstour.tournament.models import Division as DivisionModel

        return [division_to_structure(m) for m in DivisionModel.objects.all()]
