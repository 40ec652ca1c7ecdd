"""Test package for the attitude indicator.

Pure geometry and layout rules are tested without a display; rendering and
host tests use pygame's dummy video driver so no real window is opened.
To run these tests, execute ``pytest`` from the project root.
"""
