"""babel-scaffold: interactive scaffolder for Babel-based JavaScript packages."""

__version__ = "0.1.0"
