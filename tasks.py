""" Invoke tasks. """
import io
import shutil
import sys
from pathlib import Path

from invoke.tasks import task

if isinstance(sys.stdout, io.TextIOWrapper):
    sys.stdout.reconfigure(encoding='utf-8')


@task
def install(c):
    c.run("pip install -e .[test,dev]")


@task
def serve(c, port=8001):
    c.run(f"uvicorn main:app --reload --host 127.0.0.1 --port {port}", env={"PYTHONUTF8": "1"})


@task
def test(c, k=""):
    c.run(f"pytest -q {'-k ' + k if k else ''}", env={"PYTHONUTF8": "1"})


@task
def holidays(c, region, year, subregion=None):
    """Print the excluded dates of a region for one civil year."""
    from core.holidays import holidays_for_year

    for day, label in sorted(holidays_for_year(region, subregion, int(year)).items()):
        print(f"{day.isoformat()}  {day.strftime('%a')}  {label}")


@task
def clean(c):
    """Remove __pycache__ folders, stray .pyc files and the run log."""
    root = Path(__file__).resolve().parent
    for cache in root.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
    for pyc in root.rglob("*.pyc"):
        pyc.unlink(missing_ok=True)
    (root / "planner_run.log").unlink(missing_ok=True)
