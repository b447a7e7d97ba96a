"""Mood board package.

This package is organized by feature modules (users, pages, blocks, canvas, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
