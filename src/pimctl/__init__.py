"""pimctl — access policy for calendars, reminders, contacts and mail."""

__version__ = "0.1.0"
