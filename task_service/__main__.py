"""Run the service with ``python -m task_service``."""

from task_service.main import run

run()
