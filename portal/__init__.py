"""Client portal backend package.

Ensures the local ``portal`` package takes precedence over similarly named
distributions that might be installed in the environment.
"""
