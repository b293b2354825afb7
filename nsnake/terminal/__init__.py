"""Curses front end."""
