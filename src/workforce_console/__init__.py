"""Workforce console core.

Feature packages (rotation, departments, assignments, attendance, ...) keep
their planning and classification rules in plain services, with thin Flask
controllers and MySQL repositories around them.
"""
