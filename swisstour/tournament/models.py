import reversion
from django.db import models


@reversion.register(follow=["players", "rounds"])
class Division(models.Model):
    """A persisted division.

    The current round's matches, results and byes are JSON snapshots in the
    shape written by ``structure_to_db``.
    """

    division_id = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    round = models.PositiveIntegerField(default=1)
    started = models.BooleanField(default=False)
    ended = models.BooleanField(default=False)
    current_matches = models.JSONField(default=list, blank=True)
    current_results = models.JSONField(default=dict, blank=True)
    bye_players = models.JSONField(default=list, blank=True)
    date_created = models.DateTimeField(auto_now_add=True)
    date_modified = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("date_created", "id")

    def __str__(self):
        return self.name


@reversion.register()
class DivisionPlayer(models.Model):
    division = models.ForeignKey(
        Division, on_delete=models.CASCADE, related_name="players"
    )
    player_id = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    score = models.IntegerField(default=0)
    seq = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ("seq", "id")
        unique_together = ("division", "player_id")

    def __str__(self):
        return f"{self.name} ({self.score})"


@reversion.register()
class DivisionRound(models.Model):
    """An archived round record."""

    division = models.ForeignKey(
        Division, on_delete=models.CASCADE, related_name="rounds"
    )
    number = models.PositiveIntegerField()
    matches = models.JSONField(default=list, blank=True)
    results = models.JSONField(default=dict, blank=True)
    bye_players = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ("number", "id")

    def __str__(self):
        return f"{self.division} - Round {self.number}"
