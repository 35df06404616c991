from invoke import task
from pathlib import Path

# Get project root directory
PROJECT_ROOT = Path(__file__).parent.absolute()


def project_relative(path):
    """Convert a relative path to an absolute path relative to the project root."""
    return str(PROJECT_ROOT / path)


@task
def update(c):
    """Update all dependencies to their latest versions using poetry."""
    c.run("poetry update")


@task
def up(c):
    """Alias for update - update all dependencies to their latest versions."""
    update(c)


@task
def migrate(c):
    """Run Django database migrations."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} migrate")


@task
def makemigrations(c):
    """Create new Django migrations."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} makemigrations tournament")


@task
def shell(c):
    """Start Django shell."""
    manage_py = project_relative("manage.py")
    c.run(f"python {manage_py} shell")


@task
def test(c, path=None):
    """Run the test suite. Optionally specify a specific test path."""
    manage_py = project_relative("manage.py")
    settings = "--settings=swisstour.test_settings"
    if path:
        c.run(f"python {manage_py} test {settings} {path}")
    else:
        c.run(f"python {manage_py} test {settings}")


@task
def simulate(c, players=8, rounds=4, seed=None):
    """Simulate a division with random results and print the standings."""
    manage_py = project_relative("manage.py")
    seed_arg = f" --seed {seed}" if seed is not None else ""
    c.run(f"python {manage_py} simulate_division --players {players} --rounds {rounds}{seed_arg}")
