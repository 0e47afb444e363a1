"""
QrBinarize - Utils Package

Utility modules for exceptions, logging, translation and settings.
"""
