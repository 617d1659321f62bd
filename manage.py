#!/usr/bin/env python3
"""
Command-line entry point for the GameHub project.

Usage:
    python manage.py migrate --run-syncdb
    python manage.py seed_catalog          # default games + sample accounts
    python manage.py seed_catalog --games-only
    python manage.py runserver
"""
import os
import sys


def main() -> None:
    """Run administrative tasks."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'gamehub.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()