"""Find out when the specs in a Gemfile.lock were last updated, and by whom."""

__version__ = "0.1.0"
