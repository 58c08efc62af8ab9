"""cliclockwork: a little CLI to manage Clockwork timers in Jira."""

__version__ = "1.0.0"
