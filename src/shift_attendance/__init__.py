"""Shift attendance package.

Organized by feature modules (punches, attendance, templates, schedules, batch)
with a thin Flask controller layer over service/repository layers.
"""
