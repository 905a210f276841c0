"""Textual config panel for largetextpaste."""
