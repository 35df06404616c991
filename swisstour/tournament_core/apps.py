from django.apps import AppConfig


class TournamentCoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'swisstour.tournament_core'
    verbose_name = 'Swiss Pairing and Standings Engine'
