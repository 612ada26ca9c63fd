# src/daily_dose/__init__.py

"""Daily Dose: a personal daily-task log for the terminal."""

__version__ = "1.0.0"
