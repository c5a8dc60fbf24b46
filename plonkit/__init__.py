"""Configuration, validation and result reporting for a package and dotfile manager."""

__version__ = "0.1.0"