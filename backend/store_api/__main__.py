"""Run the API with `python -m store_api`."""

from store_api.main import run

run()
