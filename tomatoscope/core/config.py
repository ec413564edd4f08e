"""
Tomatoscope Configuration Module

This module reads the .env file and exposes the configuration variables
as a singleton `settings` object. Paths are managed with Pathlib so that
scripts can be run from anywhere in the project.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

class Settings:
    """
    A singleton class to hold all project settings.
    """
    def __init__(self):
        # Define Project Root
        # This makes all paths relative to the project's base directory
        self.PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

        # Load environment variables from .env file
        load_dotenv(self.PROJECT_ROOT / '.env')

        # API Keys
        self.ROTTEN_TOMATOES_API_KEY = os.getenv("ROTTEN_TOMATOES_API_KEY")

        # Rotten Tomatoes API location
        self.ROTTEN_TOMATOES_SCHEME = os.getenv("ROTTEN_TOMATOES_SCHEME", "http")
        self.ROTTEN_TOMATOES_HOST = os.getenv("ROTTEN_TOMATOES_HOST", "api.rottentomatoes.com")

        # Client defaults
        self.PAGE_LIMIT = int(os.getenv("PAGE_LIMIT", 30))
        self.HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 10.0))

        # Core Paths
        self.DATA_DIR = self.PROJECT_ROOT / 'data'
        self.EXPORTS_DIR = self.DATA_DIR / 'exports'
        self.LOGS_DIR = self.DATA_DIR / 'logs'

        # Logging
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = self.LOGS_DIR / 'tomatoscope.log'

    def ensure_directories(self):
        """
        Creates all necessary directories if they don't exist.
        This is useful to run at the start of scripts.
        """
        dirs_to_create = [
            self.DATA_DIR,
            self.EXPORTS_DIR,
            self.LOGS_DIR,
        ]
        for directory in dirs_to_create:
            directory.mkdir(parents=True, exist_ok=True)


# Create a single, importable instance of the settings
settings = Settings()
