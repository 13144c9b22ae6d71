"""expose: manage Windows environment variables, PATH entries and command aliases."""

__version__ = "0.1.0"
