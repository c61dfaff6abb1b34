"""tasklane - task mutation and query engine with a command-line front end."""

__version__ = "0.1.0"
