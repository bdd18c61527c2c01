"""Print the most recent issues of a GitHub project as an aligned text table."""

__version__ = "0.1.0"
