from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Division",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("division_id", models.CharField(max_length=64, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("round", models.PositiveIntegerField(default=1)),
                ("started", models.BooleanField(default=False)),
                ("ended", models.BooleanField(default=False)),
                ("current_matches", models.JSONField(blank=True, default=list)),
                ("current_results", models.JSONField(blank=True, default=dict)),
                ("bye_players", models.JSONField(blank=True, default=list)),
                ("date_created", models.DateTimeField(auto_now_add=True)),
                ("date_modified", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("date_created", "id"),
            },
        ),
        migrations.CreateModel(
            name="DivisionPlayer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("player_id", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("score", models.IntegerField(default=0)),
                ("seq", models.PositiveIntegerField(default=0)),
                (
                    "division",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="players",
                        to="tournament.division",
                    ),
                ),
            ],
            options={
                "ordering": ("seq", "id"),
                "unique_together": {("division", "player_id")},
            },
        ),
        migrations.CreateModel(
            name="DivisionRound",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("number", models.PositiveIntegerField()),
                ("matches", models.JSONField(blank=True, default=list)),
                ("results", models.JSONField(blank=True, default=dict)),
                ("bye_players", models.JSONField(blank=True, default=list)),
                (
                    "division",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rounds",
                        to="tournament.division",
                    ),
                ),
            ],
            options={
                "ordering": ("number", "id"),
            },
        ),
    ]
