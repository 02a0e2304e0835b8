"""
Configuration for the installer.

This package is responsible for:
* Describing the installer settings and their defaults.
* Loading settings.yaml from the home directory.
"""
