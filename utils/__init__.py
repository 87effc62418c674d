"""
utils package
-------------

Contains utility modules used throughout the planning application.

Includes helpers for configuration constants, logging, date handling, input validation and payload conversion.
"""
